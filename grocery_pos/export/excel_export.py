"""Excel export of a priced sale."""

import logging
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from ..models.sale import Sale

logger = logging.getLogger(__name__)

SHEET_NAME = "Receipt"
MONEY_COLUMNS = ("Unit price", "Discount", "Subtotal")


def _sale_rows(sale: Sale, total: Decimal, sale_name: str) -> List[Dict[str, Any]]:
    rows = []
    for item in sorted(sale.line_items, key=lambda item: item.product_id):
        rows.append({
            "Sale": sale_name,
            "Product": item.product_id,
            "Unit price": float(item.product_price),
            "Quantity": item.quantity,
            "Discount": float(item.get_discount()),
            "Subtotal": float(item.get_subtotal()),
        })
    rows.append({
        "Sale": sale_name,
        "Product": "TOTAL",
        "Unit price": None,
        "Quantity": sum(item.quantity for item in sale.line_items),
        "Discount": float(sale.get_total_savings()),
        "Subtotal": float(total),
    })
    return rows


def export_receipt_to_excel(
    sale: Sale,
    total: Decimal,
    output_path: Union[str, Path],
    sale_name: Optional[str] = None
) -> str:
    """Export a priced sale to an Excel file.

    One row per line item (after pricing splits) sorted by product id, plus
    a TOTAL row holding the amount owed and the total discount.

    Args:
        sale: Priced sale (get_total() already called)
        total: Total returned by sale.get_total()
        output_path: Path to output .xlsx file
        sale_name: Label for the "Sale" column, defaults to the file stem

    Returns:
        Path to created Excel file
    """
    output_path_obj = Path(output_path)
    output_path_obj.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame(_sale_rows(sale, total, sale_name or output_path_obj.stem))

    with pd.ExcelWriter(output_path_obj, engine='openpyxl') as writer:
        df.to_excel(writer, index=False, sheet_name=SHEET_NAME)

        worksheet = writer.sheets[SHEET_NAME]
        from openpyxl.styles.numbers import FORMAT_NUMBER_00

        money_indexes = [df.columns.get_loc(name) for name in MONEY_COLUMNS]
        for row in worksheet.iter_rows(min_row=2, max_row=worksheet.max_row):
            for index in money_indexes:
                if row[index].value is not None:
                    row[index].number_format = FORMAT_NUMBER_00

    logger.info("Wrote receipt for %d line item(s) to %s", len(sale.line_items), output_path_obj)
    return str(output_path_obj)
