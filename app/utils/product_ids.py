"""
==============================================================================
Product Id List Module
==============================================================================

Ordered, de-duplicated set of product identifiers referenced by a catalog.

Catalogs store their product references as comma-joined text
("1,2,5"). This module converts between that text and an ordered set of
integers so that membership tests compare ids, never substrings.

Parsing Rules:
-------------
- Tokens are split on "," and stripped of surrounding whitespace
- Empty tokens ("1,,2", trailing comma) are ignored
- Duplicates are dropped, keeping the first occurrence
- A token that is not an integer, or falls outside the 64-bit id range,
  raises InvalidProductIdError (strict mode)
  or is skipped with a warning (lenient mode, for already-stored values)

==============================================================================
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, List, Optional, Set


logger = logging.getLogger(__name__)

# Range of the stored 64-bit id columns
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


class InvalidProductIdError(ValueError):
    """Raised when a product id token is not an integer."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Invalid product id: {token!r}")


class ProductIdList:
    """
    Ordered set of product ids.

    Example:
        >>> ids = ProductIdList.from_csv("1,2,2,9")
        >>> ids.to_csv()
        '1,2,9'
        >>> ids.retain({1, 2, 3}).to_csv()
        '1,2'
        >>> 9 in ids
        True
    """

    SEPARATOR = ","
    TOKEN_PATTERN = re.compile(r"^[+-]?\d{1,19}$")

    def __init__(self, ids: Iterable[int] = ()) -> None:
        self._ids: List[int] = list(dict.fromkeys(int(i) for i in ids))

    @classmethod
    def from_csv(cls, text: Optional[str], strict: bool = True) -> ProductIdList:
        """
        Parse comma-joined product ids.

        Args:
            text: Raw comma-joined ids (None or "" gives an empty list)
            strict: Raise on malformed tokens instead of skipping them

        Raises:
            InvalidProductIdError: If strict and a token is not an integer
        """
        if not text:
            return cls()

        ids = []
        for raw in text.split(cls.SEPARATOR):
            token = raw.strip()
            if not token:
                continue
            if not cls.TOKEN_PATTERN.match(token) or not MIN_ID <= int(token) <= MAX_ID:
                if strict:
                    raise InvalidProductIdError(token)
                logger.warning(f"Skipping malformed product id token: {token!r}")
                continue
            ids.append(int(token))

        return cls(ids)

    def to_csv(self) -> str:
        """Serialize to the stored comma-joined form."""
        return self.SEPARATOR.join(str(i) for i in self._ids)

    def retain(self, allowed: Set[int]) -> ProductIdList:
        """Keep only ids present in ``allowed``, preserving order."""
        return ProductIdList(i for i in self._ids if i in allowed)

    def __contains__(self, product_id: object) -> bool:
        return product_id in self._ids

    def __iter__(self) -> Iterator[int]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ProductIdList):
            return self._ids == other._ids
        return NotImplemented

    def __repr__(self) -> str:
        return f"ProductIdList({self._ids!r})"
