from __future__ import annotations

import json
import os

import tomli_w

from .tsv import Table


TABLE_KEY = "symbol"


def _ensure_parent_dir(path: str) -> None:
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)


def write_table_toml(table: Table, path: str) -> None:
    # [[symbol]] array of tables, keys in header order
    _ensure_parent_dir(path)
    content = tomli_w.dumps({TABLE_KEY: table.rows})
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)


def write_asset(content: bytes, path: str) -> None:
    _ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(content)


def write_json(data: dict, path: str) -> None:
    """Run metadata, pretty-printed with sorted keys and a trailing newline."""
    _ensure_parent_dir(path)
    text = json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True, default=str)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text + "\n")
