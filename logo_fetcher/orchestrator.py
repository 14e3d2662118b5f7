from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
import logging
import os
from time import perf_counter

import requests

from .coordinator import fetch_all_logos, summarize_outcomes
from .errors import MalformedInputError, PipelineStageError
from .io_utils import write_json, write_table_toml
from .meta import build_env_meta
from .provider import SymbolTableProvider
from .symbols import iter_symbols
from .tsv import Table, parse_table

logger = logging.getLogger(__name__)


SYMBOLS_TOML_NAME = "symbols.toml"
SYMBOL_COLUMN = "symbol"

STAGE_SYMBOL_TABLE = "symbol_table"
STAGE_LOGO_FETCH = "logo_fetch"


@dataclass(frozen=True)
class LogoFetchConfig:
    output_dir: str = "."
    force: bool = False
    jobs: int = 8
    timeout: float | None = None
    meta_output_path: str | None = None
    progress: bool = True


def _config_args(cfg: LogoFetchConfig) -> dict:
    return {
        "output": cfg.output_dir,
        "force": cfg.force,
        "jobs": cfg.jobs,
        "timeout": cfg.timeout,
        "meta_output": cfg.meta_output_path,
    }


def build_failure_meta(
    *,
    cfg: LogoFetchConfig,
    provider: SymbolTableProvider,
    started_at_utc: dt.datetime,
    stage: str,
    error: Exception,
    timing_seconds: dict | None = None,
) -> dict:
    return {
        "generated_at_utc": started_at_utc.isoformat(),
        "run_status": "failed",
        "provider": {"name": provider.name},
        "source_url": provider.url,
        "error": {
            "stage": stage,
            "type": type(error).__name__,
            "message": str(error),
        },
        "args": _config_args(cfg),
        "timing_seconds": timing_seconds or {},
        "env": build_env_meta(),
    }


def _load_symbol_table(cfg: LogoFetchConfig, *, provider: SymbolTableProvider) -> tuple[Table, str, int]:
    raw_text = provider.fetch_table_text()
    logger.debug("parsing as TSV...")
    table = parse_table(raw_text)
    logger.debug("parsed %d rows", len(table.rows))

    toml_path = os.path.join(cfg.output_dir, SYMBOLS_TOML_NAME)
    logger.info("writing symbols to TOML file at '%s'", toml_path)
    write_table_toml(table, toml_path)
    logger.debug("wrote TOML file")

    symbol_index = table.find_header(SYMBOL_COLUMN)
    if symbol_index is None:
        raise MalformedInputError(f"{provider.name} data is missing '{SYMBOL_COLUMN}' column")
    return table, toml_path, symbol_index


def run_logo_fetch(
    cfg: LogoFetchConfig,
    *,
    provider: SymbolTableProvider,
    client: requests.Session,
) -> dict:
    """
    Main pipeline.

    The symbol table phase is fail-fast: fetch, parse and TOML write errors
    and a missing symbol column are raised before any logo is requested.
    The logo phase never raises for per-symbol failures.
    Errors from either phase are raised as PipelineStageError carrying the
    stage name and the original exception as `cause`.
    Callers (CLI) should catch at the boundary to write failure meta.
    """
    if int(cfg.jobs) < 1:
        raise ValueError(f"jobs must be >= 1, got {cfg.jobs}")

    t0 = perf_counter()
    started_at = dt.datetime.now(dt.timezone.utc)

    # 1) Symbol table
    logger.info("fetching latest stock symbol list from %s", provider.name.upper())
    t_table0 = perf_counter()
    try:
        table, toml_path, symbol_index = _load_symbol_table(cfg, provider=provider)
    except Exception as e:
        raise PipelineStageError(stage=STAGE_SYMBOL_TABLE, cause=e) from e
    t_table1 = perf_counter()

    # 2) Logos
    logger.info("fetching logos...")
    t_logo0 = perf_counter()
    try:
        outcomes = fetch_all_logos(
            iter_symbols(table, symbol_index),
            output_dir=cfg.output_dir,
            force=cfg.force,
            jobs=cfg.jobs,
            client=client,
            timeout=cfg.timeout,
            progress=cfg.progress,
        )
    except Exception as e:
        raise PipelineStageError(stage=STAGE_LOGO_FETCH, cause=e) from e
    t_logo1 = perf_counter()
    logger.info("done")

    meta = {
        "generated_at_utc": started_at.isoformat(),
        "run_status": "success",
        "provider": {"name": provider.name},
        "source_url": provider.url,
        "symbols_file": toml_path,
        "row_count": len(table.rows),
        "symbol_count": len(outcomes),
        "logos": summarize_outcomes(outcomes),
        "args": _config_args(cfg),
        "timing_seconds": {
            "symbol_table": round(t_table1 - t_table0, 4),
            "logo_fetch": round(t_logo1 - t_logo0, 4),
            "total": round(perf_counter() - t0, 4),
        },
        "env": build_env_meta(),
    }

    if cfg.meta_output_path:
        write_json(meta, cfg.meta_output_path)

    return meta
