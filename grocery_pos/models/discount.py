"""Discount value model and parsing of textual discount specifications."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional, Union

from .money import to_decimal


class DiscountError(ValueError):
    """Base class for discount parsing and range errors."""
    pass


class MissingDiscountError(DiscountError):
    """Raised when a discount string is empty or None."""
    pass


class DiscountFormatError(DiscountError):
    """Raised when a discount string has no recognizable numeric value."""
    pass


class DiscountRangeError(DiscountError):
    """Raised when a discount value is outside its allowed range."""
    pass


class DiscountType(Enum):
    """Kind of discount value."""

    ABSOLUTE = "absolute"
    PERCENTAGE = "percentage"


_HUNDRED = Decimal("100")


@dataclass(frozen=True)
class Discount:
    """Absolute dollar amount or percentage discount.

    Attributes:
        discount_type: ABSOLUTE (dollar amount) or PERCENTAGE
        value: Dollar amount, or percent in the range (0, 100]
    """

    discount_type: DiscountType
    value: Decimal

    def __post_init__(self):
        """Validate value range for the discount type."""
        value = to_decimal(self.value)
        object.__setattr__(self, "value", value)

        if self.discount_type is DiscountType.PERCENTAGE:
            if value <= 0 or value > _HUNDRED:
                raise DiscountRangeError(
                    f"Discount percentage '{value}%' is invalid, "
                    f"must be a positive value less than or equal to 100"
                )
        elif value <= 0:
            raise DiscountRangeError(
                f"Absolute discounts cannot be negative or zero, {value} is invalid"
            )

    @classmethod
    def from_string(cls, text: Optional[str]) -> "Discount":
        """Parse a discount string, see parse_discount()."""
        return parse_discount(text)

    def amount_for(self, unit_price: Decimal, quantity: int) -> Decimal:
        """Dollar amount of this discount for a block of units.

        Absolute discounts are the literal amount for the whole block.
        Percentage discounts are taken off unit_price * quantity.
        """
        if self.discount_type is DiscountType.ABSOLUTE:
            return self.value
        return self.value / _HUNDRED * Decimal(unit_price) * quantity

    def __str__(self) -> str:
        if self.discount_type is DiscountType.PERCENTAGE:
            return f"{self.value}%"
        return f"${self.value}"


def _to_decimal(numeric: str, original: str) -> Decimal:
    cleaned = numeric.strip()
    try:
        value = Decimal(cleaned)
    except InvalidOperation as exc:
        raise DiscountFormatError(
            f"Discount string '{original}' is an unrecognized format"
        ) from exc

    if not cleaned or not value.is_finite():
        raise DiscountFormatError(f"Discount string '{original}' is an unrecognized format")
    return value


def parse_discount(text: Optional[Union[str, Discount]]) -> Discount:
    """Parse a textual discount into a Discount.

    Rules:
    - "15%" is a percentage, must be in (0, 100]
    - "$1.10" and "1.10" are absolute dollar amounts, must be > 0
    - Whitespace around the number is tolerated

    Args:
        text: Discount text, e.g. "$1.00", "1", "50%"

    Returns:
        Parsed Discount

    Raises:
        MissingDiscountError: If text is None or empty
        DiscountFormatError: If the numeric part cannot be parsed
        DiscountRangeError: If the value is out of range
    """
    if isinstance(text, Discount):
        return text
    if text is None:
        raise MissingDiscountError("Discount string is None")

    raw = text.strip()
    if not raw:
        raise MissingDiscountError("Discount string is empty")

    if raw.endswith("%"):
        value = _to_decimal(raw[:-1], text)
        return Discount(DiscountType.PERCENTAGE, value)

    numeric = raw[1:] if raw.startswith("$") else raw
    value = _to_decimal(numeric, text)
    return Discount(DiscountType.ABSOLUTE, value)
