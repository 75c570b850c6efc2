"""Unit tests for the pricing strategies and the strategy factory."""

from datetime import datetime
from decimal import Decimal

import pytest

from grocery_pos.models.discount_rule import LineItemDiscountRule
from grocery_pos.models.product import Product
from grocery_pos.models.promotion_catalog import PromotionCatalog
from grocery_pos.models.sale import Sale
from grocery_pos.pricing import (
    BestForCustomerPricingStrategy,
    BestForStorePricingStrategy,
    LineItemBuyNGetOnePricingStrategy,
    LineItemQuantityPricingStrategy,
    OverallStrategy,
    PricingStrategyFactory,
    UnknownPricingStrategyError,
)
from grocery_pos.pricing.base import SalePricingStrategy, rules_by_product

START = datetime(2024, 1, 1)
END = datetime(2030, 12, 31)

PRODUCT_A = Product("A", Decimal("1.00"))
PRODUCT_B = Product("B", Decimal("1.00"))


def rule(product_id, threshold, discount, next_product=False):
    return LineItemDiscountRule(product_id, threshold, discount, START, END, next_product)


class FixedTotalStrategy(SalePricingStrategy):
    """Returns a constant total and records that it ran."""

    def __init__(self, total):
        self.total = Decimal(total)
        self.calls = 0

    def get_total(self, sale):
        self.calls += 1
        return self.total


def sale_with(*items):
    sale = Sale(BestForCustomerPricingStrategy())
    for product, quantity in items:
        sale.make_line_item(product, quantity)
    return sale


class TestRulesByProduct:
    """Tests for rule grouping."""

    def test_groups_by_kind_and_sorts_by_threshold(self):
        """Test grouping valid rules largest threshold first."""
        rules = [
            rule("A", 2, "$1"),
            rule("A", 5, "$3"),
            rule("A", 1, "100%", next_product=True),
            rule("B", 0, "$1"),
        ]
        grouped = rules_by_product(rules, applied_on_next_product=False)

        assert list(grouped) == ["A"]
        assert [r.threshold_quantity for r in grouped["A"]] == [5, 2]

    def test_next_product_rules(self):
        """Test grouping next-product rules."""
        grouped = rules_by_product([rule("A", 1, "100%", next_product=True)], True)
        assert len(grouped["A"]) == 1


class TestQuantityStrategy:
    """Tests for LineItemQuantityPricingStrategy."""

    def test_splits_complete_blocks(self):
        """Test carving discounted blocks out of a line item."""
        sale = sale_with((PRODUCT_A, 7))
        total = LineItemQuantityPricingStrategy([rule("A", 3, "$1.00")]).get_total(sale)

        assert total == Decimal("5.00")
        assert [(item.quantity, item.get_discount()) for item in sale.line_items] == [
            (1, Decimal("0")),
            (3, Decimal("1.00")),
            (3, Decimal("1.00")),
        ]

    def test_exact_multiple_leaves_no_undiscounted_item(self):
        """Test that an exact multiple leaves only discounted items."""
        sale = sale_with((PRODUCT_A, 6))
        LineItemQuantityPricingStrategy([rule("A", 3, "$1.00")]).get_total(sale)

        assert all(item.get_discount() == Decimal("1.00") for item in sale.line_items)
        assert len(sale) == 2

    def test_ignores_next_product_rules(self):
        """Test that next-product rules are not quantity discounts."""
        sale = sale_with((PRODUCT_A, 4))
        total = LineItemQuantityPricingStrategy(
            [rule("A", 1, "100%", next_product=True)]
        ).get_total(sale)

        assert total == Decimal("4.00")

    def test_other_products_untouched(self):
        """Test that products without rules keep their line item."""
        sale = sale_with((PRODUCT_A, 3), (PRODUCT_B, 3))
        total = LineItemQuantityPricingStrategy([rule("A", 3, "$1.00")]).get_total(sale)

        assert total == Decimal("5.00")
        assert sale.line_items[0].product_id == "B"
        assert sale.line_items[0].quantity == 3


class TestBuyNGetOneStrategy:
    """Tests for LineItemBuyNGetOnePricingStrategy."""

    def test_paid_blocks_merge_back(self):
        """Test that paid units are merged into one line item."""
        sale = sale_with((PRODUCT_A, 5))
        total = LineItemBuyNGetOnePricingStrategy(
            [rule("A", 1, "100%", next_product=True)]
        ).get_total(sale)

        assert total == Decimal("3.00")
        assert [(item.quantity, item.get_discount()) for item in sale.line_items] == [
            (3, Decimal("0")),
            (1, Decimal("1.00")),
            (1, Decimal("1.00")),
        ]

    def test_partial_discount_on_next_unit(self):
        """Test a 50% discount on the unit after the threshold."""
        sale = sale_with((PRODUCT_A, 3))
        total = LineItemBuyNGetOnePricingStrategy(
            [rule("A", 2, "50%", next_product=True)]
        ).get_total(sale)

        assert total == Decimal("2.50")

    def test_larger_threshold_first(self):
        """Test that larger thresholds are applied first."""
        # 7 units: buy 3 get 1 takes 4, buy 1 get 1 takes 2, 1 left over
        sale = sale_with((PRODUCT_A, 7))
        total = LineItemBuyNGetOnePricingStrategy([
            rule("A", 1, "100%", next_product=True),
            rule("A", 3, "100%", next_product=True),
        ]).get_total(sale)

        assert total == Decimal("5.00")

    def test_ignores_quantity_rules(self):
        """Test that quantity rules are not next-product discounts."""
        sale = sale_with((PRODUCT_A, 3))
        total = LineItemBuyNGetOnePricingStrategy([rule("A", 1, "$1")]).get_total(sale)
        assert total == Decimal("3.00")


class TestCompositeStrategies:
    """Tests for BestForCustomer / BestForStore composites."""

    def test_empty_composite_returns_subtotal_sum(self):
        """Test a composite with no siblings."""
        sale = sale_with((PRODUCT_A, 2), (PRODUCT_B, 1))
        assert BestForCustomerPricingStrategy().get_total(sale) == Decimal("3.00")
        assert BestForStorePricingStrategy().get_total(sale) == Decimal("3.00")

    def test_best_for_customer_picks_minimum(self):
        """Test that the lowest total wins and every sibling runs once."""
        composite = BestForCustomerPricingStrategy()
        siblings = [FixedTotalStrategy("4"), FixedTotalStrategy("2"), FixedTotalStrategy("3")]
        for sibling in siblings:
            composite.add(sibling)

        assert composite.get_total(sale_with()) == Decimal("2")
        assert all(sibling.calls == 1 for sibling in siblings)

    def test_best_for_store_picks_maximum(self):
        """Test that the highest total wins."""
        composite = BestForStorePricingStrategy()
        composite.add(FixedTotalStrategy("4"))
        composite.add(FixedTotalStrategy("9"))

        assert composite.get_total(sale_with()) == Decimal("9")

    def test_isolated_siblings_each_see_original_items(self):
        """Test that isolated siblings price the same purchase."""
        rules = [rule("B", 1, "100%", next_product=True), rule("A", 3, "$1.00")]
        composite = BestForCustomerPricingStrategy(isolate=True)
        composite.add(LineItemBuyNGetOnePricingStrategy(rules))
        composite.add(LineItemQuantityPricingStrategy(rules))
        sale = sale_with((PRODUCT_B, 4), (PRODUCT_A, 3))

        # buy-one-get-one alone: 3 + 2, quantity alone: 2 + 4
        assert composite.get_total(sale) == Decimal("5.00")
        assert sale.get_subtotal_sum() == Decimal("5.00")
        assert sale.get_total_savings() == Decimal("2.00")

    def test_isolated_best_for_store_adopts_chosen_items(self):
        """Test that the sale keeps the chosen sibling's line items."""
        rules = [rule("B", 1, "100%", next_product=True), rule("A", 3, "$1.00")]
        composite = BestForStorePricingStrategy(isolate=True)
        composite.add(LineItemBuyNGetOnePricingStrategy(rules))
        composite.add(LineItemQuantityPricingStrategy(rules))
        sale = sale_with((PRODUCT_B, 4), (PRODUCT_A, 3))

        assert composite.get_total(sale) == Decimal("6.00")
        assert sale.get_subtotal_sum() == Decimal("6.00")


class TestPricingStrategyFactory:
    """Tests for PricingStrategyFactory."""

    @pytest.mark.parametrize(
        "name,expected_type",
        [
            ("BestForCustomer", BestForCustomerPricingStrategy),
            ("BestForStore", BestForStorePricingStrategy),
        ],
    )
    def test_builds_composite_for_overall_strategy(self, name, expected_type):
        """Test the composite type and sibling order."""
        factory = PricingStrategyFactory(lambda: PromotionCatalog(overall_strategy=name))
        strategy = factory.get_sale_pricing_strategy()

        assert type(strategy) is expected_type
        assert [type(s) for s in strategy.pricing_strategies] == [
            LineItemBuyNGetOnePricingStrategy,
            LineItemQuantityPricingStrategy,
        ]

    def test_unknown_strategy_raises(self):
        """Test an unknown overall strategy name."""
        factory = PricingStrategyFactory(lambda: PromotionCatalog(overall_strategy="BestForNobody"))
        with pytest.raises(UnknownPricingStrategyError, match="BestForNobody"):
            factory.get_sale_pricing_strategy()

    def test_strategy_names_are_case_sensitive(self):
        """Test that strategy names must match exactly."""
        with pytest.raises(UnknownPricingStrategyError):
            OverallStrategy.from_name("bestforcustomer")

    def test_loads_promotions_for_every_strategy(self):
        """Test that promotions are reloaded for each strategy."""
        calls = []

        def loader():
            calls.append(1)
            return PromotionCatalog()

        factory = PricingStrategyFactory(loader)
        factory.get_sale_pricing_strategy()
        factory.get_sale_pricing_strategy()

        assert len(calls) == 2
