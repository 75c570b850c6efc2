"""Sale: the ordered line items a customer wishes to purchase."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from .line_item import SalesLineItem
from .product import Product

if TYPE_CHECKING:
    from ..pricing.base import SalePricingStrategy
    from ..pricing.factory import PricingStrategyFactory


class Sale:
    """Line items of one customer transaction and the strategy that prices them.

    The pricing strategy is bound once when the sale is created. Pricing
    works on line_items: strategies split items into discounted and
    undiscounted parts. The purchase as entered is kept aside while the
    sale is priced, so every get_total() call prices the same purchase and
    adding a product after pricing adds it to that purchase. Insertion order
    is kept for receipts but does not affect the total.

    Attributes:
        line_items: Line items in insertion order; after get_total() the
            priced (split and discounted) line items
    """

    def __init__(self, pricing_strategy: "SalePricingStrategy"):
        self.line_items: List[SalesLineItem] = []
        self._pricing_strategy = pricing_strategy
        self._purchase: Optional[List[SalesLineItem]] = None

    @classmethod
    def from_factory(cls, factory: "PricingStrategyFactory") -> "Sale":
        """Create a sale priced by the strategy the factory currently builds."""
        return cls(factory.get_sale_pricing_strategy())

    @property
    def pricing_strategy(self) -> "SalePricingStrategy":
        return self._pricing_strategy

    def get_total(self) -> Decimal:
        """Final amount owed, as computed by the bound pricing strategy.

        The strategy runs on a fresh copy of the purchase, so repeated calls
        return the same total.
        """
        purchase = self._purchase if self._purchase is not None else self.line_items
        self._purchase = None
        self.line_items = [item.copy() for item in purchase]
        try:
            return self._pricing_strategy.get_total(self)
        finally:
            self._purchase = purchase

    def _unprice(self) -> None:
        # Back to the purchase as entered; no-op while a strategy is running
        if self._purchase is not None:
            self.line_items = self._purchase
            self._purchase = None

    def add_line_item(self, line_item: Optional[SalesLineItem]) -> None:
        """Append the line item as-is (no merging)."""
        if line_item is not None:
            self._unprice()
            self.line_items.append(line_item)

    def make_line_item(self, product: Optional[Product], quantity: int = 1) -> None:
        """Add quantity of product to the sale.

        If an undiscounted line item for the same product id exists, the
        first such item's quantity is increased; otherwise a new line item is
        appended. Discounted line items are never merged into.
        """
        if product is None:
            return

        self._unprice()
        line_item = SalesLineItem(product, quantity)
        for existing in self.line_items:
            if existing == line_item and existing.get_discount() == 0:
                existing.add_quantity(line_item.quantity)
                return
        self.line_items.append(line_item)

    def remove_zero_quantity_line_items(self) -> None:
        self._unprice()
        self.line_items = [item for item in self.line_items if item.quantity != 0]

    def get_subtotal_sum(self) -> Decimal:
        """Sum of every line item's subtotal (discounts included)."""
        return sum((item.get_subtotal() for item in self.line_items), Decimal("0"))

    def get_undiscounted_total(self) -> Decimal:
        """Regular price of everything in the sale, ignoring discounts."""
        return sum(
            (item.product_price * item.quantity for item in self.line_items),
            Decimal("0")
        )

    def get_total_savings(self) -> Decimal:
        return sum((item.get_discount() for item in self.line_items), Decimal("0"))

    def copy_line_items(self) -> List[SalesLineItem]:
        """Deep copy of the current line items."""
        return [item.copy() for item in self.line_items]

    def replace_line_items(self, line_items: List[SalesLineItem]) -> None:
        self.line_items = list(line_items)

    def __len__(self) -> int:
        return len(self.line_items)
