"""
Tab-delimited table parsing.

The NYSE trading units file is a plain TSV document (despite its .xls name):
the first line holds the column headers, every following line one listing.
"""
from __future__ import annotations

from dataclasses import dataclass

from .errors import MalformedInputError


FIELD_DELIMITER = "\t"


@dataclass(frozen=True)
class Table:
    headers: list[str]
    rows: list[dict[str, str]]

    def find_header(self, name: str) -> int | None:
        """Index of the first header matching `name` case-insensitively, or None."""
        wanted = name.casefold()
        for i, header in enumerate(self.headers):
            if header.casefold() == wanted:
                return i
        return None


def _split_lines(text: str) -> list[str]:
    # Only "\n" ends a line, with an optional "\r" before it. Form feeds, NEL
    # and similar characters can appear inside cells.
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def _split_fields(line: str) -> list[str]:
    return [field.strip() for field in line.split(FIELD_DELIMITER)]


def parse_table(raw_text: str) -> Table:
    """
    Parse tab-delimited text into a Table.

    Raises MalformedInputError when:
      - the input has no lines (no header line)
      - a header name repeats
      - a data line's field count differs from the header count

    Blank lines are not data lines and are ignored.
    """
    lines = _split_lines(raw_text)
    if not lines:
        raise MalformedInputError("missing headers: input is empty")

    headers = _split_fields(lines[0])
    seen: set[str] = set()
    for h in headers:
        if h in seen:
            raise MalformedInputError(f"duplicate header: {h!r}")
        seen.add(h)

    rows: list[dict[str, str]] = []
    for lineno, line in enumerate(lines[1:], start=2):
        if not line.strip():
            continue
        fields = _split_fields(line)
        if len(fields) != len(headers):
            raise MalformedInputError(
                f"line {lineno}: expected {len(headers)} fields, got {len(fields)}"
            )
        rows.append(dict(zip(headers, fields)))

    return Table(headers=headers, rows=rows)
