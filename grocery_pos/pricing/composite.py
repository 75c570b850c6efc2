"""Composite pricing strategies that pick the best total among sibling strategies."""

import logging
from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, List, Tuple

from .base import SalePricingStrategy

if TYPE_CHECKING:
    from ..models.line_item import SalesLineItem
    from ..models.sale import Sale

logger = logging.getLogger(__name__)


class CompositePricingStrategy(SalePricingStrategy):
    """Runs sibling strategies in order and selects one of their totals.

    By default every sibling runs against the same sale, so later siblings
    see the line items already split by earlier ones. The line item
    strategies rely on this: buy-N-get-one runs first and the quantity
    strategy prices what is left.

    With isolate=True each sibling runs against its own deep copy of the
    line items and the sale adopts the line items of the selected sibling.
    Use this when the siblings are competing alternatives (e.g. two
    different composite chains) rather than stages of one chain.

    With no siblings the total is the sale's plain subtotal sum.
    """

    def __init__(self, isolate: bool = False):
        self.pricing_strategies: List[SalePricingStrategy] = []
        self.isolate = isolate

    def add(self, strategy: SalePricingStrategy) -> None:
        """Add a sibling strategy; siblings run in the order added."""
        self.pricing_strategies.append(strategy)

    @abstractmethod
    def select(self, totals: List[Decimal]) -> int:
        """Return the index of the chosen total in a non-empty list."""
        pass

    def get_total(self, sale: "Sale") -> Decimal:
        if not self.pricing_strategies:
            return sale.get_subtotal_sum()

        if self.isolate:
            return self._get_isolated_total(sale)

        totals = [strategy.get_total(sale) for strategy in self.pricing_strategies]
        chosen = self.select(totals)
        logger.debug("%s totals %s, chose %s", type(self).__name__, totals, totals[chosen])
        return totals[chosen]

    def _get_isolated_total(self, sale: "Sale") -> Decimal:
        original = sale.copy_line_items()
        results: List[Tuple[Decimal, List["SalesLineItem"]]] = []

        for strategy in self.pricing_strategies:
            sale.replace_line_items([item.copy() for item in original])
            total = strategy.get_total(sale)
            results.append((total, sale.line_items))

        chosen = self.select([total for total, _ in results])
        total, line_items = results[chosen]
        sale.replace_line_items(line_items)
        logger.debug("%s isolated totals chose %s", type(self).__name__, total)
        return total


class BestForCustomerPricingStrategy(CompositePricingStrategy):
    """Picks the lowest total."""

    def select(self, totals: List[Decimal]) -> int:
        return min(range(len(totals)), key=lambda index: totals[index])


class BestForStorePricingStrategy(CompositePricingStrategy):
    """Picks the highest total."""

    def select(self, totals: List[Decimal]) -> int:
        return max(range(len(totals)), key=lambda index: totals[index])
