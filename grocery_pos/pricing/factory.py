"""Factory that builds the overall sale pricing strategy from the promotion catalog."""

import logging
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional

from ..models.promotion_catalog import PromotionCatalog
from .buy_n_get_one import LineItemBuyNGetOnePricingStrategy
from .composite import (
    BestForCustomerPricingStrategy,
    BestForStorePricingStrategy,
    CompositePricingStrategy,
)
from .quantity import LineItemQuantityPricingStrategy

if TYPE_CHECKING:
    from ..catalog.reader import CatalogReader

logger = logging.getLogger(__name__)


class UnknownPricingStrategyError(ValueError):
    """Raised when the promotion catalog names an unsupported overall strategy."""
    pass


class OverallStrategy(Enum):
    """Supported overall (composite) pricing policies."""

    BEST_FOR_CUSTOMER = "BestForCustomer"
    BEST_FOR_STORE = "BestForStore"

    @classmethod
    def from_name(cls, name: str) -> "OverallStrategy":
        """Look up a policy by its catalog name.

        Raises:
            UnknownPricingStrategyError: If name is not a supported policy
        """
        for strategy in cls:
            if strategy.value == name:
                return strategy
        supported = " or ".join(f"'{strategy.value}'" for strategy in cls)
        raise UnknownPricingStrategyError(
            f"'{name}' is an unknown pricing strategy, supported values are {supported}."
        )


COMPOSITE_REGISTRY: Dict[OverallStrategy, Callable[[], CompositePricingStrategy]] = {
    OverallStrategy.BEST_FOR_CUSTOMER: BestForCustomerPricingStrategy,
    OverallStrategy.BEST_FOR_STORE: BestForStorePricingStrategy,
}


class PricingStrategyFactory:
    """Builds the currently applicable sale pricing strategy.

    The promotion catalog is (re)loaded every time a strategy is built, so
    each new Sale sees the promotions in effect when it was created.

    Args:
        promotion_loader: Callable returning a PromotionCatalog whose rules
            are already filtered to valid and applicable ones
    """

    def __init__(self, promotion_loader: Callable[[], PromotionCatalog]):
        self._promotion_loader = promotion_loader

    @classmethod
    def from_files(
        cls,
        reader: "CatalogReader",
        path: str,
        now: Optional[datetime] = None
    ) -> "PricingStrategyFactory":
        """Factory reading the promotion catalog file at path.

        Args:
            reader: CatalogReader used for file access
            path: Promotion catalog path
            now: Time used to filter promotions; None means the time of each load
        """
        return cls(lambda: reader.read_promotion_catalog(path, now=now))

    def get_sale_pricing_strategy(self) -> CompositePricingStrategy:
        """Load promotions and build the overall composite strategy.

        Raises:
            UnknownPricingStrategyError: If the catalog's overall strategy is unsupported
        """
        promotions = self._promotion_loader()
        overall = OverallStrategy.from_name(promotions.overall_strategy)
        strategy = COMPOSITE_REGISTRY[overall]()

        # Line item strategies mutate the sale and must run before any
        # whole-sale strategy added after them.
        strategy.add(LineItemBuyNGetOnePricingStrategy(promotions.line_item_discounts))
        strategy.add(LineItemQuantityPricingStrategy(promotions.line_item_discounts))

        logger.info(
            "Pricing with %s and %d line item promotion(s)",
            overall.value, len(promotions.line_item_discounts)
        )
        return strategy
