"""Abstract base class for sale pricing strategies."""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Dict, List

from ..models.discount_rule import LineItemDiscountRule

if TYPE_CHECKING:
    from ..models.sale import Sale


class SalePricingStrategy(ABC):
    """Computes the amount a customer must pay for a sale."""

    @abstractmethod
    def get_total(self, sale: "Sale") -> Decimal:
        """Calculate the total for the given sale.

        Implementations may mutate sale.line_items (e.g. split items to
        attach discounts).

        Args:
            sale: Sale to price

        Returns:
            Amount owed
        """
        pass


def rules_by_product(
    rules: List[LineItemDiscountRule],
    applied_on_next_product: bool
) -> Dict[str, List[LineItemDiscountRule]]:
    """Group valid rules of one kind by product id, largest threshold first.

    Larger-threshold deals are assumed to be the better ones and are
    exhausted before smaller ones.
    """
    grouped: Dict[str, List[LineItemDiscountRule]] = {}
    for rule in rules:
        if rule.applied_on_next_product != applied_on_next_product:
            continue
        if not rule.is_valid():
            continue
        grouped.setdefault(rule.product_id, []).append(rule)

    for product_rules in grouped.values():
        product_rules.sort(key=lambda rule: rule.threshold_quantity, reverse=True)
    return grouped
