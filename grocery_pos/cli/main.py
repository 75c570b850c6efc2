"""Register CLI: price sales read from product list files."""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..catalog.errors import CatalogError
from ..catalog.reader import CatalogReader
from ..config import (
    get_app_name,
    get_app_version,
    get_log_level,
    get_product_catalog_path,
    get_promotion_catalog_path,
)
from ..config.profile_loader import RegisterProfile
from ..config.profile_manager import get_profile, set_profile
from ..export.excel_export import export_receipt_to_excel
from ..export.receipt import format_money, render_receipt
from ..models.product_catalog import ProductCatalog
from ..models.sale import Sale
from ..pricing.factory import PricingStrategyFactory, UnknownPricingStrategyError

logger = logging.getLogger(__name__)

QUIT_COMMANDS = ("q",)


class SaleInputError(Exception):
    """Raised when a sale's product list file cannot be read."""
    pass


def read_product_lines(path: str) -> List[str]:
    """Read product ids from a sale file, one per line.

    Blank lines are skipped and ids are trimmed.

    Raises:
        SaleInputError: If the file cannot be read
    """
    try:
        text = Path(path.strip()).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SaleInputError(f"Error reading input products from '{path}'. {e}") from e
    return [line.strip() for line in text.splitlines() if line.strip()]


def _failed(error: str) -> Dict:
    return {
        "status": "FAILED",
        "total": None,
        "savings": None,
        "receipt": None,
        "skipped": [],
        "excel_path": None,
        "error": error,
    }


def process_sale(
    sale_path: str,
    product_catalog: ProductCatalog,
    factory: PricingStrategyFactory,
    profile: Optional[RegisterProfile] = None,
    excel_dir: Optional[str] = None
) -> Dict:
    """Price one sale file.

    Args:
        sale_path: File with one product id per line
        product_catalog: Products available at the register
        factory: Builds the pricing strategy (reads the promotion catalog)
        profile: Register profile for the receipt layout, defaults to the active one
        excel_dir: If set, also export the receipt to <excel_dir>/<sale stem>.xlsx

    Returns:
        Dict with:
        - status: "OK" or "FAILED"
        - total: Amount owed (Decimal)
        - savings: Total discount (Decimal)
        - receipt: Rendered receipt text
        - skipped: Product ids not found in the catalog
        - excel_path: Exported workbook path, if any
        - error: Error message if failed
    """
    profile = profile or get_profile()

    try:
        product_ids = read_product_lines(sale_path)
    except SaleInputError as e:
        return _failed(str(e))

    try:
        sale = Sale.from_factory(factory)
    except CatalogError as e:
        logger.error("Promotion catalog error: %s", e)
        return _failed(
            f"Error reading promotion catalog. {e} "
            f"Please have a system administrator correct the error."
        )
    except UnknownPricingStrategyError as e:
        logger.error("Pricing configuration error: %s", e)
        return _failed(f"Configuration error: {e}")

    skipped = []
    for product_id in product_ids:
        product = product_catalog.find_product(product_id)
        if product is None:
            logger.warning("'%s' was not found in the product catalog, skipping", product_id)
            skipped.append(product_id)
            continue
        sale.make_line_item(product, quantity=1)

    total = sale.get_total()
    receipt = render_receipt(
        sale,
        total,
        title=f"Sale from {sale_path}",
        width=profile.receipt_width,
        symbol=profile.currency_symbol,
    )

    excel_path = None
    if excel_dir:
        excel_path = export_receipt_to_excel(
            sale, total, Path(excel_dir) / f"{Path(sale_path.strip()).stem}.xlsx"
        )

    return {
        "status": "OK",
        "total": total,
        "savings": sale.get_total_savings(),
        "receipt": receipt,
        "skipped": skipped,
        "excel_path": excel_path,
        "error": None,
    }


def _load_products(reader: CatalogReader, path: Path) -> Optional[ProductCatalog]:
    try:
        print(f"Reading {path.name}...")
        catalog = reader.read_product_catalog(str(path))
    except CatalogError as e:
        print("Error reading product catalog.")
        print(str(e))
        if e.__cause__ is not None:
            print(str(e.__cause__))
        print("Please have a system administrator correct the error.")
        return None
    print(f"Found {len(catalog)} product(s) in catalog.")
    print()
    return catalog


def _print_result(result: Dict) -> None:
    for product_id in result["skipped"]:
        print(f"Warning! '{product_id}' was not found in the product catalog, skipping.")
    if result["status"] == "FAILED":
        print(result["error"])
        return
    print(result["receipt"], end="")
    if result["excel_path"]:
        print(f"Excel: {result['excel_path']}")


def run_register(
    reader: CatalogReader,
    product_path: Path,
    factory: PricingStrategyFactory,
    profile: RegisterProfile,
    excel_dir: Optional[str] = None,
    input_func: Callable[[str], str] = input
) -> None:
    """Interactive loop: ask for sale files until the operator quits.

    The product catalog is re-read for every sale so catalog fixes take
    effect without restarting the register.
    """
    while True:
        try:
            entry = input_func("Filename (or Q to quit) > ")
        except EOFError:
            break

        if not entry or not entry.strip():
            continue
        if entry.strip().lower() in QUIT_COMMANDS:
            break

        product_catalog = _load_products(reader, product_path)
        if product_catalog is None:
            continue

        _print_result(process_sale(entry, product_catalog, factory, profile, excel_dir))


def _parse_timestamp(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid ISO timestamp: {value!r}")


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description=f"{get_app_name()} - price grocery sales with the current promotions"
    )

    parser.add_argument(
        "--sale",
        action="append",
        default=[],
        help="Sale file with one product id per line (repeatable). Without it the register runs interactively"
    )

    parser.add_argument(
        "--products",
        help="Product catalog JSON (default: POS_PRODUCT_CATALOG, profile, or data/ProductCatalog.json)"
    )

    parser.add_argument(
        "--promotions",
        help="Promotion catalog JSON (default: POS_PROMOTION_CATALOG, profile, or data/PromotionCatalog.json)"
    )

    parser.add_argument(
        "--profile",
        default="default",
        help="Register profile name from configs/profiles (default: default)"
    )

    parser.add_argument(
        "--at",
        type=_parse_timestamp,
        help="Price with the promotions in effect at this ISO timestamp (default: now)"
    )

    parser.add_argument(
        "--excel",
        metavar="DIR",
        help="Also export each receipt to an Excel file in DIR"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_app_version()}"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else get_log_level(),
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        profile = set_profile(args.profile)
    except FileNotFoundError:
        logger.info("Profile %r not found, using built-in defaults", args.profile)
        profile = get_profile()
    except ValueError as e:
        parser.error(str(e))

    product_path = Path(args.products) if args.products else get_product_catalog_path(profile.product_catalog)
    promotion_path = Path(args.promotions) if args.promotions else get_promotion_catalog_path(profile.promotion_catalog)

    reader = CatalogReader()
    factory = PricingStrategyFactory.from_files(reader, str(promotion_path), now=args.at)

    separator = "-" * profile.receipt_width
    print(separator)
    print(f"Welcome to {profile.store_name} Checkout")
    print(separator)
    print()

    if not args.sale:
        run_register(reader, product_path, factory, profile, excel_dir=args.excel)
        return

    product_catalog = _load_products(reader, product_path)
    if product_catalog is None:
        sys.exit(1)

    failed = 0
    grand_total = None
    for sale_path in args.sale:
        result = process_sale(sale_path, product_catalog, factory, profile, excel_dir=args.excel)
        _print_result(result)
        if result["status"] == "FAILED":
            failed += 1
        else:
            grand_total = result["total"] if grand_total is None else grand_total + result["total"]

    if len(args.sale) > 1 and grand_total is not None:
        print(f"\nDone: {len(args.sale) - failed} sale(s) priced, {failed} failed. "
              f"Grand total {format_money(grand_total, profile.currency_symbol)}")

    sys.exit(1 if failed else 0)


if __name__ == "__main__":
    main()
