"""Buy-N-get-one discounts: the unit after every threshold block is discounted."""

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


class LineItemBuyNGetOnePricingStrategy(SalePricingStrategy):
    """Applies "buy N, get one" promotions to each line item of a sale.

    A rule applies while the line item holds more than threshold_quantity
    units: threshold_quantity paid units plus one discounted unit are taken
    from the working quantity each time. A customer holding exactly the
    threshold does not get the extra unit.

    The sale is changed in two phases. The first pass only collects pending
    line items (1-unit discounted items and the paid threshold blocks); once
    every item has been processed the paid blocks are merged back by product
    and the discounted items appended.
    """

    def __init__(self, discounts: List[LineItemDiscountRule]):
        self._discounts = discounts

    def get_total(self, sale: "Sale") -> Decimal:
        """Mutate the sale with buy-N-get-one discounts and return its total."""
        rules = rules_by_product(self._discounts, applied_on_next_product=True)
        discounted_line_items: List[SalesLineItem] = []
        paid_line_items: List[SalesLineItem] = []

        for line_item in sale.line_items:
            for rule in rules.get(line_item.product_id, []):
                discount = rule.get_discount()
                threshold = rule.threshold_quantity

                while line_item.quantity > threshold:
                    product = Product(line_item.product_id, line_item.product_price)

                    discounted = SalesLineItem(product, 1)
                    discounted.set_discount(discount)
                    discounted_line_items.append(discounted)

                    # Paid units are held aside so later rules don't count them again
                    line_item.add_quantity(-(threshold + 1))
                    paid_line_items.append(SalesLineItem(product, threshold))
                    logger.debug(
                        "Applied %s off 1 x %s after %d paid",
                        discount, line_item.product_id, threshold
                    )

        sale.remove_zero_quantity_line_items()
        for paid in paid_line_items:
            sale.make_line_item(paid.product, paid.quantity)
        for discounted in discounted_line_items:
            sale.add_line_item(discounted)

        return sale.get_subtotal_sum()
