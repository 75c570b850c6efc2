"""Unit tests for discount parsing."""

from decimal import Decimal

import pytest

from grocery_pos.models.discount import (
    Discount,
    DiscountFormatError,
    DiscountRangeError,
    DiscountType,
    MissingDiscountError,
    parse_discount,
)


@pytest.mark.parametrize(
    "text,expected_type,expected_value",
    [
        ("1", DiscountType.ABSOLUTE, Decimal("1")),
        ("$1.0001", DiscountType.ABSOLUTE, Decimal("1.0001")),
        ("$1.10", DiscountType.ABSOLUTE, Decimal("1.10")),
        ("1000000", DiscountType.ABSOLUTE, Decimal("1000000")),
        ("15%", DiscountType.PERCENTAGE, Decimal("15")),
        ("100%", DiscountType.PERCENTAGE, Decimal("100")),
        ("0.5%", DiscountType.PERCENTAGE, Decimal("0.5")),
        (" 15 %", DiscountType.PERCENTAGE, Decimal("15")),
        ("$ 2.50 ", DiscountType.ABSOLUTE, Decimal("2.50")),
    ],
)
def test_parse_discount(text, expected_type, expected_value):
    """Test parsing absolute and percentage discounts."""
    discount = parse_discount(text)
    assert discount.discount_type is expected_type
    assert discount.value == expected_value


@pytest.mark.parametrize("text", ["100.1%", "-0.1%", "0%", "-1", "$0.00", "$-5.00", "0.00"])
def test_parse_discount_rejects_out_of_range(text):
    """Test range errors for zero, negative and over 100% values."""
    with pytest.raises(DiscountRangeError):
        parse_discount(text)


@pytest.mark.parametrize("text", ["x1%", "$x1", "$x", "%", "$", "1.2.3", "NaN", "Infinity%", "1$"])
def test_parse_discount_rejects_invalid_format(text):
    """Test format errors for non-numeric discounts."""
    with pytest.raises(DiscountFormatError):
        parse_discount(text)


@pytest.mark.parametrize("text", [None, "", "   "])
def test_parse_discount_rejects_missing(text):
    """Test that None and blank strings are missing discounts."""
    with pytest.raises(MissingDiscountError):
        parse_discount(text)


def test_discount_errors_are_value_errors():
    """Callers that only know ValueError still catch discount failures."""
    with pytest.raises(ValueError):
        parse_discount("abc")


class TestDiscount:
    """Tests for the Discount value."""

    def test_from_string_matches_parse_discount(self):
        """Test Discount.from_string()."""
        assert Discount.from_string("15%") == parse_discount("15%")

    def test_construction_validates_percentage_range(self):
        """Test that percentages over 100 are rejected on construction."""
        with pytest.raises(DiscountRangeError):
            Discount(DiscountType.PERCENTAGE, Decimal("101"))

    def test_construction_validates_absolute_range(self):
        """Test that a zero amount is rejected on construction."""
        with pytest.raises(DiscountRangeError):
            Discount(DiscountType.ABSOLUTE, Decimal("0"))

    def test_float_value_is_converted_exactly(self):
        """Test that 0.2 is stored as Decimal("0.2")."""
        assert Discount(DiscountType.ABSOLUTE, 0.2).value == Decimal("0.2")

    def test_absolute_amount_is_literal_for_whole_block(self):
        """Test that an absolute discount ignores price and quantity."""
        discount = Discount(DiscountType.ABSOLUTE, Decimal("1.00"))
        assert discount.amount_for(Decimal("2.00"), 3) == Decimal("1.00")

    def test_percentage_amount_uses_price_and_quantity(self):
        """Test percentage of price times quantity."""
        discount = Discount(DiscountType.PERCENTAGE, Decimal("50"))
        assert discount.amount_for(Decimal("1.00"), 10) == Decimal("5.00")

    def test_str(self):
        """Test the text form of discounts."""
        assert str(parse_discount("15%")) == "15%"
        assert str(parse_discount("1.10")) == "$1.10"
