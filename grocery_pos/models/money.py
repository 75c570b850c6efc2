"""Decimal helpers for monetary values."""

from decimal import Decimal
from typing import Union


def to_decimal(value: Union[Decimal, int, float, str]) -> Decimal:
    """Convert a number to Decimal without binary float artifacts.

    Floats go through str() so 0.2 becomes Decimal("0.2"), not
    Decimal("0.200000000000000011102230246251565404236316680908203125").
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)
