from __future__ import annotations

import requests

from . import __version__


USER_AGENT = f"logo-fetcher/{__version__}"


def build_session() -> requests.Session:
    """Session shared by the symbol table fetch and every logo task."""
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    return session
