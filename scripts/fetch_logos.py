"""
Pull all NYSE symbols and their logos and dump them to a directory.

Outputs:
  <output>/symbols.toml   full NYSE trading units table
  <output>/<SYMBOL>.svg   one logo per symbol

Exit codes:
  0 - run completed (individual logo failures are only logged)
  1 - symbol table could not be fetched, parsed or written, or the logo
      phase failed unexpectedly (the failure meta names the stage)

Defaults for --output and --jobs can be set with LOGO_FETCHER_OUTPUT and
LOGO_FETCHER_JOBS (environment or .env file).
"""
import argparse
import datetime
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add the parent directory to the path to import from logo_fetcher
sys.path.insert(0, str(Path(__file__).parent.parent))

from logo_fetcher.errors import PipelineStageError
from logo_fetcher.io_utils import write_json
from logo_fetcher.orchestrator import LogoFetchConfig, build_failure_meta, run_logo_fetch
from logo_fetcher.providers import NyseProvider
from logo_fetcher.session import build_session

logger = logging.getLogger("fetch_logos")


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {n}")
    return n


def _positive_float(value: str) -> float:
    try:
        f = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid float value: {value!r}")
    if f <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {f}")
    return f


def parse_args(argv=None) -> argparse.Namespace:
    load_dotenv()
    p = argparse.ArgumentParser(description="Pull all NYSE symbols and logos and dump them to the given directory")
    p.add_argument("-v", "--verbose", action="store_true", help="Turn on verbose logging")
    p.add_argument("-o", "--output", type=str, default=os.getenv("LOGO_FETCHER_OUTPUT", "."), help="Output directory")
    p.add_argument("-f", "--force", action="store_true", help="Force-fetch existing logos")
    p.add_argument(
        "-j",
        "--jobs",
        type=_positive_int,
        default=os.getenv("LOGO_FETCHER_JOBS", "8"),
        help="Maximum number of concurrent logo fetches (setting this too high may result in rate limiting)",
    )
    p.add_argument("--timeout", type=_positive_float, default=None, help="Per-request timeout in seconds (default: none)")
    p.add_argument("--meta-output", type=str, default="", help="Write run metadata JSON to this path")
    p.add_argument("--no-progress", dest="progress", action="store_false", help="Hide the progress bar")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    cfg = LogoFetchConfig(
        output_dir=args.output,
        force=args.force,
        jobs=args.jobs,
        timeout=args.timeout,
        meta_output_path=args.meta_output or None,
        progress=args.progress,
    )
    client = build_session()
    provider = NyseProvider(timeout=cfg.timeout, session=client)

    started_at = datetime.datetime.now(datetime.timezone.utc)
    try:
        run_logo_fetch(cfg, provider=provider, client=client)
    except Exception as e:
        if isinstance(e, PipelineStageError):
            stage, error = e.stage, e.cause
        else:
            stage, error = "setup", e
        logger.error("fatal error: %s", error)
        if cfg.meta_output_path:
            write_json(
                build_failure_meta(
                    cfg=cfg,
                    provider=provider,
                    started_at_utc=started_at,
                    stage=stage,
                    error=error,
                ),
                cfg.meta_output_path,
            )
        return 1
    finally:
        client.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
