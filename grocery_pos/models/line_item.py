"""SalesLineItem data model representing one row of a sale."""

from __future__ import annotations

from decimal import Decimal
from typing import Union

from .discount import Discount, DiscountRangeError, MissingDiscountError, parse_discount
from .money import to_decimal
from .product import Product


class NegativeQuantityError(ValueError):
    """Raised when a quantity change would make a line item negative."""
    pass


class SalesLineItem:
    """A product, a quantity and the flat dollar discount applied to them.

    quantity and discount are mutable state, not identity: equality and hash
    use the product id only.

    Attributes:
        product: The purchased Product
        quantity: Number of units, never negative
    """

    def __init__(self, product: Product, quantity: int = 1):
        if quantity < 0:
            raise NegativeQuantityError(
                f"Line item quantity must be >= 0, got {quantity}"
            )
        self.product = product
        self.quantity = quantity
        self._discount = Decimal("0")

    @property
    def product_id(self) -> str:
        return self.product.id

    @property
    def product_price(self) -> Decimal:
        return self.product.price

    def set_discount(self, discount: Union[Decimal, int, float, str, Discount]) -> None:
        """Apply a discount to this line item, replacing any previous one.

        Args:
            discount: One of:
                - Decimal/int/float: absolute dollar amount, must be > 0
                - Discount: absolute amount, or percentage of price * quantity
                - str: "$1.10", "1.10" or "15%", parsed with parse_discount()

        Raises:
            DiscountRangeError: If the resulting amount is not positive
            MissingDiscountError: If a string discount is empty or None
            DiscountFormatError: If a string discount cannot be parsed
        """
        if discount is None or isinstance(discount, str):
            if not discount:
                raise MissingDiscountError("Discount string is empty or None")
            discount = parse_discount(discount)

        if isinstance(discount, Discount):
            amount = discount.amount_for(self.product.price, self.quantity)
        else:
            amount = to_decimal(discount)

        if amount <= 0:
            raise DiscountRangeError(
                f"Cannot set the line item's discount to a non-positive value: {amount}"
            )
        self._discount = amount

    def get_discount(self) -> Decimal:
        """Absolute dollar discount currently applied."""
        return self._discount

    def add_quantity(self, quantity: int) -> None:
        """Change quantity by a positive or negative delta.

        Raises:
            NegativeQuantityError: If the result would be below zero. The
                quantity is left unchanged.
        """
        result = self.quantity + quantity
        if result < 0:
            raise NegativeQuantityError(
                f"Adding {quantity} would set line item quantity to a negative value ({result})"
            )
        self.quantity = result

    def get_subtotal(self) -> Decimal:
        return self.product.price * self.quantity - self._discount

    def copy(self) -> "SalesLineItem":
        """Independent copy with the same product, quantity and discount."""
        clone = SalesLineItem(self.product, self.quantity)
        clone._discount = self._discount
        return clone

    def __eq__(self, other):
        if not isinstance(other, SalesLineItem):
            return NotImplemented
        return self.product == other.product

    def __hash__(self):
        return hash(self.product_id)

    def __repr__(self):
        return (
            f"SalesLineItem(product_id={self.product_id!r}, quantity={self.quantity}, "
            f"discount={self._discount})"
        )

    def __str__(self):
        text = f"{self.product_id} @ ${self.product_price:.2f} * {self.quantity}"
        if self._discount > 0:
            text += f" - ${self._discount:.2f}"
        return text
