"""Plain-text receipt rendering."""

from decimal import Decimal, ROUND_HALF_UP
from typing import List

from ..models.line_item import SalesLineItem
from ..models.sale import Sale

PRODUCT_COLUMN_WIDTH = 30
PRICE_COLUMN_WIDTH = 8

_CENT = Decimal("0.01")


def format_money(value: Decimal, symbol: str = "$") -> str:
    """Format an amount as currency rounded to cents, e.g. "$1.00" or "-$0.50"."""
    rounded = Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)
    if rounded < 0:
        return f"-{symbol}{-rounded:,.2f}"
    return f"{symbol}{rounded:,.2f}"


def render_line_item(item: SalesLineItem, symbol: str = "$") -> str:
    """Render one receipt row per unit of the line item.

    Each row shows the product id and the effective unit price after
    discount. Discounted rows also show the regular price marked "R" and a
    "You saved" row with the per-unit saving.
    """
    if item.quantity == 0:
        return ""

    discount = item.get_discount()
    unit_subtotal = item.get_subtotal() / item.quantity
    unit_saving = discount / item.quantity

    rows: List[str] = []
    for _ in range(item.quantity):
        row = item.product_id.ljust(PRODUCT_COLUMN_WIDTH)
        row += format_money(unit_subtotal, symbol).ljust(PRICE_COLUMN_WIDTH)
        if discount > 0:
            row += f" ({format_money(item.product_price, symbol)}".ljust(PRICE_COLUMN_WIDTH) + " R)"
            rows.append(row)
            rows.append(" You saved".ljust(12) + format_money(unit_saving, symbol))
        else:
            rows.append(row)
    return "\n".join(rows) + "\n"


def render_receipt(
    sale: Sale,
    total: Decimal,
    title: str = "",
    width: int = 80,
    symbol: str = "$"
) -> str:
    """Render the whole receipt: title, line items sorted by product id, total.

    Args:
        sale: Priced sale (get_total() already called)
        total: Total returned by sale.get_total()
        title: Optional heading, e.g. "Sale from basket.txt"
        width: Separator line width
        symbol: Currency symbol
    """
    separator = "-" * width
    parts = []
    if title:
        parts.extend([separator, title, separator])

    body = "".join(
        render_line_item(item, symbol)
        for item in sorted(sale.line_items, key=lambda item: item.product_id)
    )
    if body:
        parts.append(body.rstrip("\n"))

    savings = sale.get_total_savings()
    parts.append(separator)
    if savings > 0:
        parts.append("You saved ".ljust(PRODUCT_COLUMN_WIDTH) + format_money(savings, symbol))
    parts.append("Your total is ".ljust(PRODUCT_COLUMN_WIDTH) + format_money(total, symbol))
    parts.append(separator)
    return "\n".join(parts) + "\n"
