from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Iterable

import requests
from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from .logos import FetchOutcome, FetchStatus, fetch_and_store

logger = logging.getLogger(__name__)


def summarize_outcomes(outcomes: Iterable[FetchOutcome]) -> dict:
    counts = {status.value: 0 for status in FetchStatus}
    failed_symbols: list[str] = []
    for o in outcomes:
        counts[o.status.value] += 1
        if o.status is FetchStatus.FAILED:
            failed_symbols.append(o.symbol)
    return {
        "fetched": counts[FetchStatus.SUCCESS.value],
        "skipped": counts[FetchStatus.SKIPPED.value],
        "failed": counts[FetchStatus.FAILED.value],
        "failed_symbols": sorted(failed_symbols),
    }


def fetch_all_logos(
    symbols: Iterable[str],
    *,
    output_dir: str,
    force: bool,
    jobs: int,
    client: requests.Session,
    timeout: float | None = None,
    progress: bool = True,
) -> list[FetchOutcome]:
    """
    Fetch logos for every symbol with at most `jobs` requests in flight.

    One task is submitted per symbol (in iteration order) and every task's
    result is collected before returning. Per-symbol failures are reported
    through logging and FAILED outcomes only.
    """
    if int(jobs) < 1:
        raise ValueError(f"jobs must be >= 1, got {jobs}")

    permits = threading.BoundedSemaphore(int(jobs))
    outcomes: list[FetchOutcome] = []

    # worker warnings go through tqdm.write so they do not break the progress bar
    with logging_redirect_tqdm(), ThreadPoolExecutor(max_workers=int(jobs)) as ex:
        futures: list[Future] = [
            ex.submit(
                fetch_and_store,
                symbol,
                permits=permits,
                output_dir=output_dir,
                force=force,
                client=client,
                timeout=timeout,
            )
            for symbol in symbols
        ]
        logger.info("fetching %d logos (jobs = %d)...", len(futures), jobs)

        for fut in tqdm(
            as_completed(futures),
            total=len(futures),
            desc="Fetching logos",
            unit="logo",
            disable=not progress,
        ):
            outcomes.append(fut.result())

    summary = summarize_outcomes(outcomes)
    logger.info(
        "logos: %d fetched, %d skipped, %d failed",
        summary["fetched"],
        summary["skipped"],
        summary["failed"],
    )
    return outcomes
