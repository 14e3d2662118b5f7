"""
Per-symbol logo fetch.

One call of `fetch_and_store` is one independent unit of work: it never
raises for network, HTTP or filesystem problems. Those become a FAILED
outcome and a warning log line, so one symbol cannot affect another.
"""
from __future__ import annotations

import enum
import logging
import os
import threading
from dataclasses import dataclass

import requests

from .errors import HttpStatusError, StorageError, TransportError
from .io_utils import write_asset

logger = logging.getLogger(__name__)


LOGO_BASE_URL = "https://logos.stockanalysis.com"


class FetchStatus(str, enum.Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class FetchOutcome:
    symbol: str
    url: str
    path: str
    status: FetchStatus
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.status is not FetchStatus.FAILED


def logo_url(symbol: str) -> str:
    return f"{LOGO_BASE_URL}/{symbol.lower()}.svg"


def logo_path(output_dir: str, symbol: str) -> str:
    return os.path.join(output_dir, f"{symbol}.svg")


def _is_success(status_code: int) -> bool:
    return 200 <= int(status_code) < 300


def fetch_and_store(
    symbol: str,
    *,
    permits: threading.Semaphore,
    output_dir: str,
    force: bool,
    client: requests.Session,
    timeout: float | None = None,
) -> FetchOutcome:
    """
    Fetch one logo and write it to `<output_dir>/<symbol>.svg`.

    Existing files are left alone unless `force` is set; in that case no
    permit is taken and no request is made. The permit is held for the
    request and the file write and is released on every exit path.
    """
    url = logo_url(symbol)
    path = logo_path(output_dir, symbol)

    if not force and os.path.exists(path):
        logger.debug("skipping existing logo for '%s'", symbol)
        return FetchOutcome(symbol=symbol, url=url, path=path, status=FetchStatus.SKIPPED)

    def failed(error: Exception) -> FetchOutcome:
        return FetchOutcome(symbol=symbol, url=url, path=path, status=FetchStatus.FAILED, error=error)

    with permits:
        logger.debug("fetching %s logo from '%s'", symbol, url)
        try:
            res = client.get(url, timeout=timeout)
        except requests.RequestException as e:
            logger.warning("failed to fetch logo for '%s' (from '%s'): %r", symbol, url, e)
            return failed(TransportError(url=url, cause=e))

        logger.debug("response: %s", res.status_code)
        if not _is_success(res.status_code):
            logger.warning("failed to fetch logo for '%s' (from '%s'): %s", symbol, url, res.status_code)
            return failed(HttpStatusError(url=url, status_code=res.status_code))

        try:
            content = res.content
        except requests.RequestException as e:
            logger.warning("failed to fetch logo for '%s' (from '%s'): %r", symbol, url, e)
            return failed(TransportError(url=url, cause=e))
        logger.debug("response size: %d bytes", len(content))

        try:
            write_asset(content, path)
        except OSError as e:
            logger.warning("failed to write logo for '%s' to '%s': %r", symbol, path, e)
            return failed(StorageError(path=path, cause=e))

    logger.debug("wrote logo to '%s'", path)
    return FetchOutcome(symbol=symbol, url=url, path=path, status=FetchStatus.SUCCESS)
