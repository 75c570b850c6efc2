"""Product data model."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .money import to_decimal


@dataclass(frozen=True, eq=False)
class Product:
    """A product that can be sold at the register.

    Identity is the product id only: two products with the same id and a
    different price are the same product when matching catalog entries and
    merging line items.

    Attributes:
        id: Product identifier (trimmed, case-sensitive)
        price: Regular unit price
    """

    id: str
    price: Decimal

    def __post_init__(self):
        """Trim id and store price as Decimal."""
        object.__setattr__(self, "id", self.id.strip() if self.id is not None else None)
        object.__setattr__(self, "price", to_decimal(self.price))

    def __eq__(self, other):
        if not isinstance(other, Product):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)
