"""Sale pricing strategies."""

from .base import SalePricingStrategy
from .buy_n_get_one import LineItemBuyNGetOnePricingStrategy
from .composite import (
    BestForCustomerPricingStrategy,
    BestForStorePricingStrategy,
    CompositePricingStrategy,
)
from .factory import OverallStrategy, PricingStrategyFactory, UnknownPricingStrategyError
from .quantity import LineItemQuantityPricingStrategy

__all__ = [
    "SalePricingStrategy",
    "LineItemBuyNGetOnePricingStrategy",
    "LineItemQuantityPricingStrategy",
    "CompositePricingStrategy",
    "BestForCustomerPricingStrategy",
    "BestForStorePricingStrategy",
    "OverallStrategy",
    "PricingStrategyFactory",
    "UnknownPricingStrategyError",
]
