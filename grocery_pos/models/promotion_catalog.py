"""PromotionCatalog: promotions defined by the marketing team."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

from .discount_rule import LineItemDiscountRule

logger = logging.getLogger(__name__)


@dataclass
class PromotionCatalog:
    """Overall pricing policy plus the line item discounts on offer.

    Attributes:
        overall_strategy: Name of the composite strategy used to price a
            sale, "BestForCustomer" or "BestForStore"
        line_item_discounts: Per-product quantity promotions
    """

    overall_strategy: str = "BestForCustomer"
    line_item_discounts: List[LineItemDiscountRule] = field(default_factory=list)

    def remove_inapplicable_promotions(self, now: datetime) -> None:
        """Drop rules whose effective window does not contain now."""
        kept = []
        for rule in self.line_item_discounts:
            if rule.is_applicable(now):
                kept.append(rule)
            else:
                logger.debug(
                    "Dropping promotion for %r: not in effect at %s (%s - %s)",
                    rule.product_id, now, rule.effective_from, rule.effective_to
                )
        self.line_item_discounts = kept

    def remove_invalid_promotions(self) -> None:
        """Drop rules with an invalid configuration."""
        kept = []
        for rule in self.line_item_discounts:
            if rule.is_valid():
                kept.append(rule)
            else:
                logger.debug("Dropping invalid promotion: %r", rule)
        self.line_item_discounts = kept
