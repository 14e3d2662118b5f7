from __future__ import annotations

from typing import Protocol


class SymbolTableProvider(Protocol):
    """
    Upstream symbol table contract.

    A provider supplies the raw tab-delimited listing text whose first line
    is the header row. Parsing is handled elsewhere.
    """

    name: str
    url: str

    def fetch_table_text(self) -> str:
        """
        Returns the raw document text.

        Raises TransportError / HttpStatusError; callers treat both as fatal.
        """
