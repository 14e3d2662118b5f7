from __future__ import annotations

import platform
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version


# distributions whose versions are recorded in run metadata
RUNTIME_DISTRIBUTIONS = ("logo-fetcher", "requests", "tomli-w", "tqdm", "python-dotenv")


def installed_version(dist_name: str) -> str | None:
    try:
        return pkg_version(dist_name)
    except PackageNotFoundError:
        return None


def build_env_meta() -> dict:
    """Interpreter, platform and dependency versions for a run's metadata."""
    return {
        "python": platform.python_version(),
        "implementation": sys.implementation.name,
        "platform": platform.platform(),
        "packages": {name: installed_version(name) for name in RUNTIME_DISTRIBUTIONS},
    }
