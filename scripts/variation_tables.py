#!/usr/bin/env python3
"""
Loader for the declarative variation tables under ``data/variations``.

Tables are read once at import into tuples and read-only mappings. Index
arithmetic (``seed % len(table)``) depends on their order and length, so the
JSON assets are append-never, reorder-never: editing one silently changes the
rendered output of every deployed site that draws from it.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from config import KEYWORD_TABLES_DIR, VARIATIONS_DIR
from hash_utils import EmptyTableError


def freeze(value: Any) -> Any:
    """Recursively turn lists into tuples and dicts into read-only mappings."""
    if isinstance(value, list):
        return tuple(freeze(item) for item in value)
    if isinstance(value, dict):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    return value


def _validate(value: Any, path: str) -> None:
    if isinstance(value, tuple):
        if not value:
            raise EmptyTableError(path)
        for i, item in enumerate(value):
            _validate(item, f"{path}[{i}]")
    elif isinstance(value, Mapping):
        for key, item in value.items():
            _validate(item, f"{path}.{key}" if path else key)


def load_table_file(path: Path) -> Mapping[str, Any]:
    """Read, freeze, and validate one JSON table asset."""
    with open(path, "r", encoding="utf-8") as f:
        tables = freeze(json.load(f))
    _validate(tables, path.stem)
    return tables


def iter_strings(value: Any) -> Iterator[str]:
    """Yield every string leaf in a frozen table structure."""
    if isinstance(value, str):
        yield value
    elif isinstance(value, tuple):
        for item in value:
            yield from iter_strings(item)
    elif isinstance(value, Mapping):
        for item in value.values():
            yield from iter_strings(item)


DESIGN_TABLES = load_table_file(VARIATIONS_DIR / "design.json")
GLOBAL_TABLES = load_table_file(VARIATIONS_DIR / "global.json")
MICROCOPY_TABLES = load_table_file(VARIATIONS_DIR / "microcopy.json")


@lru_cache(maxsize=None)
def load_keyword_tables(module_folder: str) -> Mapping[str, Any]:
    """Keyword-scoped tables for one keyword module folder."""
    return load_table_file(KEYWORD_TABLES_DIR / f"{module_folder}.json")


def keyword_module_exists(module_folder: str) -> bool:
    return (KEYWORD_TABLES_DIR / f"{module_folder}.json").is_file()
