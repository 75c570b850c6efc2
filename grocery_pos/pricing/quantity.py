"""Quantity discounts: a flat or percentage amount off every complete block of units."""

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, List

from ..models.discount_rule import LineItemDiscountRule
from ..models.line_item import SalesLineItem
from ..models.product import Product
from .base import SalePricingStrategy, rules_by_product

if TYPE_CHECKING:
    from ..models.sale import Sale

logger = logging.getLogger(__name__)


class LineItemQuantityPricingStrategy(SalePricingStrategy):
    """Applies "buy N, save X" promotions to each line item of a sale.

    For each line item, matching rules are tried largest threshold first.
    Every complete block of threshold_quantity units is carved out of the
    line item into its own discounted line item. A rule may apply any number
    of times to the same item.
    """

    def __init__(self, discounts: List[LineItemDiscountRule]):
        self._discounts = discounts

    def get_total(self, sale: "Sale") -> Decimal:
        """Mutate the sale with quantity discounts and return its total."""
        rules = rules_by_product(self._discounts, applied_on_next_product=False)
        discounted_line_items: List[SalesLineItem] = []

        for line_item in sale.line_items:
            for rule in rules.get(line_item.product_id, []):
                discount = rule.get_discount()
                threshold = rule.threshold_quantity

                while line_item.quantity >= threshold:
                    discounted = SalesLineItem(
                        Product(line_item.product_id, line_item.product_price),
                        threshold
                    )
                    discounted.set_discount(discount)
                    discounted_line_items.append(discounted)

                    line_item.add_quantity(-threshold)
                    logger.debug(
                        "Applied %s off %d x %s", discount, threshold, line_item.product_id
                    )

        sale.remove_zero_quantity_line_items()
        for discounted in discounted_line_items:
            sale.add_line_item(discounted)

        return sale.get_subtotal_sum()
