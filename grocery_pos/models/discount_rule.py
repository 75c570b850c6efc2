"""LineItemDiscountRule data model: a time-bounded, quantity-triggered promotion."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .discount import Discount, DiscountError, parse_discount


def _align(moment: datetime, reference: datetime) -> datetime:
    """Make moment comparable with reference (naive datetimes are local time)."""
    if reference.tzinfo is None and moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    if reference.tzinfo is not None and moment.tzinfo is None:
        return moment.astimezone()
    return moment


@dataclass
class LineItemDiscountRule:
    """A per-product promotion from the promotion catalog.

    A "Buy One, Get One free" promotion is threshold_quantity=1,
    applied_on_next_product=True and discount="100%". With
    applied_on_next_product=False the discount is taken off every complete
    block of threshold_quantity units.

    Attributes:
        product_id: Id of the Product the discount applies to
        threshold_quantity: Units the customer must buy before the discount applies
        discount: Discount text, "$1.10", "1.10" or "15%"
        effective_from: Start of the promotion window (inclusive)
        effective_to: End of the promotion window (inclusive)
        applied_on_next_product: Discount the unit after the threshold instead
            of the threshold block itself
    """

    product_id: str
    threshold_quantity: int
    discount: str
    effective_from: datetime
    effective_to: datetime
    applied_on_next_product: bool = False

    def is_applicable(self, now: datetime) -> bool:
        """Return True if now falls inside the effective window (both ends inclusive)."""
        start = self.effective_from
        end = _align(self.effective_to, start)
        now = _align(now, start)
        return start <= now <= end

    def is_valid(self) -> bool:
        """Return True if the rule is well-formed, independent of time."""
        if _align(self.effective_to, self.effective_from) < self.effective_from:
            return False

        if not self.discount:
            return False

        if not self.product_id:
            return False

        if self.threshold_quantity is None or self.threshold_quantity <= 0:
            return False

        try:
            parse_discount(self.discount)
        except DiscountError:
            return False

        return True

    def get_discount(self) -> Discount:
        """Parse the discount text.

        Raises:
            DiscountError: If the discount text is missing or invalid
        """
        return parse_discount(self.discount)
