"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation classes for product input data.

This module implements:
- PriceValidator: Price must parse as a 32-bit signed integer
- ExpiryDateValidator: Parses expiry dates and enforces the "Fresh" rule
- VoltageSocketValidator: Voltage/socket compatibility for "Electric"

Validation Rules:
----------------
- Price: optional sign, digits, surrounding whitespace allowed
- Expiry date: "MM/DD/YYYY" or ISO-8601; for "Fresh" products the whole
  days between now and the expiry date must exceed the threshold
- Voltage/socket (case-insensitive): 220 ↔ UK | EU, 110 ↔ US

==============================================================================
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Dict, FrozenSet, Optional, Tuple


class PriceValidator:
    """
    Validator for product prices.

    Prices are stored as text but must hold a 32-bit signed integer.

    Example:
        >>> validator = PriceValidator()
        >>> validator.validate(" 42 ")
        (True, 42, None)
        >>> validator.is_valid("4.5")
        False
    """

    PATTERN = re.compile(r"^\s*[+-]?[0-9]+\s*$")

    MIN_VALUE = -(2 ** 31)
    MAX_VALUE = 2 ** 31 - 1

    def validate(self, price: Optional[str]) -> Tuple[bool, Optional[int], Optional[str]]:
        """
        Validate and parse a price.

        Returns:
            Tuple of (is_valid, parsed_value, error_message)
        """
        if price is None or not self.PATTERN.match(price):
            return False, None, "price is invalid"

        value = int(price.strip())

        if value < self.MIN_VALUE or value > self.MAX_VALUE:
            return False, None, "price is invalid"

        return True, value, None

    def is_valid(self, price: Optional[str]) -> bool:
        """Quick validation check."""
        is_valid, _, _ = self.validate(price)
        return is_valid


class ExpiryDateValidator:
    """
    Parser and validator for product expiry dates.

    Example:
        >>> validator = ExpiryDateValidator(threshold_days=7)
        >>> ok, expiry, _ = validator.parse("12/31/2030")
        >>> validator.is_far_enough(expiry, now=datetime(2030, 12, 1))
        True
    """

    FORMATS = ("%m/%d/%Y", "%m/%d/%Y %H:%M:%S")

    def __init__(self, threshold_days: int = 7) -> None:
        self._threshold_days = threshold_days

    @property
    def threshold_days(self) -> int:
        return self._threshold_days

    def parse(self, raw: Optional[str]) -> Tuple[bool, Optional[datetime], Optional[str]]:
        """
        Parse a raw expiry date.

        An empty value is valid and yields None. Aware datetimes are
        converted to naive local time.

        Returns:
            Tuple of (is_valid, parsed_value, error_message)
        """
        if raw is None or not raw.strip():
            return True, None, None

        raw = raw.strip()

        for fmt in self.FORMATS:
            try:
                return True, datetime.strptime(raw, fmt), None
            except ValueError:
                continue

        try:
            parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        except ValueError:
            return False, None, "expiry date is invalid"

        if parsed.tzinfo is not None:
            parsed = parsed.astimezone().replace(tzinfo=None)

        return True, parsed, None

    def is_far_enough(self, expiry_date: Optional[datetime], now: datetime) -> bool:
        """
        Check the expiry date is more than ``threshold_days`` whole days away.

        Partial days are truncated: 7 days 23 hours counts as 7.
        """
        if expiry_date is None:
            return False
        return (expiry_date - now).days > self._threshold_days


class VoltageSocketValidator:
    """
    Validator for voltage/socket compatibility.

    Example:
        >>> validator = VoltageSocketValidator()
        >>> validator.is_valid("220", "eu")
        True
        >>> validator.is_valid("220", "US")
        False
    """

    COMPATIBLE: Dict[str, FrozenSet[str]] = {
        "220": frozenset({"UK", "EU"}),
        "110": frozenset({"US"}),
    }

    def is_valid(self, voltage: Optional[str], socket: Optional[str]) -> bool:
        """Check the voltage/socket pair is a recognized combination."""
        if not voltage or not socket:
            return False

        sockets = self.COMPATIBLE.get(voltage.strip().upper())
        if sockets is None:
            return False

        return socket.strip().upper() in sockets
