"""
NYSE symbol table provider.

NYSE publishes a daily "trading units" file listing every NYSE and NYSE
American symbol. The file is served with an .xls name but is plain
tab-delimited text.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

import requests

from ..errors import HttpStatusError, TransportError
from ..provider import SymbolTableProvider
from ..session import build_session

logger = logging.getLogger(__name__)


NYSE_TRADING_UNITS_URL = (
    "https://www.nyse.com/publicdocs/nyse/markets/nyse/NYSE_and_NYSE_MKT_Trading_Units_Daily_File.xls"
)


@dataclass(frozen=True)
class NyseProvider(SymbolTableProvider):
    url: str = NYSE_TRADING_UNITS_URL
    timeout: float | None = None
    name: str = "nyse"
    session: requests.Session = field(default_factory=build_session, repr=False, compare=False)

    def fetch_table_text(self) -> str:
        try:
            res = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(url=self.url, cause=e) from e

        logger.debug("response: %s", res.status_code)
        if not 200 <= res.status_code < 300:
            raise HttpStatusError(url=self.url, status_code=res.status_code)

        try:
            text = res.text
        except requests.RequestException as e:
            raise TransportError(url=self.url, cause=e) from e
        logger.debug("response size: %d bytes", len(text.encode("utf-8")))
        return text
