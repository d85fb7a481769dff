"""
==============================================================================
Response Formatting Module
==============================================================================

Plain-text rendering of lookup results.

Lookups render two named fields per document, ``id`` and ``title``, as
"name : value" pairs:

    single:    "id : 5 title : Kettle"
    multiple:  "id : 5\\n title : Kettle\\nid : 6\\n title : Toaster\\n"

==============================================================================
"""

from __future__ import annotations

from typing import Any, Iterable, Sequence, Tuple


TEXT_FIELDS: Tuple[str, ...] = ("id", "title")


def _pairs(document: Any, fields: Sequence[str]) -> list:
    return [f"{name} : {getattr(document, name)}" for name in fields]


def format_single(document: Any, fields: Sequence[str] = TEXT_FIELDS) -> str:
    """Render one document on a single line."""
    return " ".join(_pairs(document, fields))


def format_many(documents: Iterable[Any], fields: Sequence[str] = TEXT_FIELDS) -> str:
    """Render each document as its field pairs, one per line."""
    return "".join("\n ".join(_pairs(document, fields)) + "\n" for document in documents)
