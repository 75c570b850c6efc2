"""Reading the product and promotion catalogs from JSON files."""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional, Tuple, Type

from pydantic import ValidationError

from ..models.discount_rule import LineItemDiscountRule
from ..models.product import Product
from ..models.product_catalog import ProductCatalog
from ..models.promotion_catalog import PromotionCatalog
from .errors import (
    CatalogError,
    InvalidDiscountRuleValueError,
    InvalidProductValueError,
    MissingDiscountRuleFieldError,
    MissingProductFieldError,
    ProductCatalogFileError,
    PromotionCatalogFileError,
)
from .schemas import ProductCatalogSchema, PromotionCatalogSchema

logger = logging.getLogger(__name__)


class FileManager(ABC):
    """Basic file IO used by the catalog reader."""

    @abstractmethod
    def get_file_text(self, path: str) -> str:
        """Read and return all text from the file at path."""
        pass


class SystemFileManager(FileManager):
    """Reads files from the local file system."""

    def get_file_text(self, path: str) -> str:
        return Path(path).read_text(encoding="utf-8")


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return "; ".join(parts)


def _classify(
    exc: ValidationError,
    file_error: Type[CatalogError],
    missing_error: Type[CatalogError],
    value_error: Type[CatalogError],
    entries_fields: Tuple[str, ...],
) -> Type[CatalogError]:
    """Pick the catalog error type for a schema validation failure.

    A missing required field wins over a mistyped one. Failures that are not
    inside a catalog entry (e.g. the document is not an object) are file errors.
    """
    errors = exc.errors()
    if any(error.get("type") == "missing" for error in errors):
        return missing_error
    if all(error.get("loc") and error["loc"][0] in entries_fields for error in errors):
        return value_error
    return file_error


class CatalogReader:
    """Deserializes the register's two catalog files.

    Args:
        file_manager: File access, defaults to SystemFileManager
    """

    def __init__(self, file_manager: Optional[FileManager] = None):
        self._file_manager = file_manager or SystemFileManager()

    def _read_text(self, path: str, error: Type[CatalogError], label: str) -> str:
        try:
            return self._file_manager.get_file_text(path)
        except FileNotFoundError as e:
            raise error(f"{label} was not found ({path}).") from e
        except PermissionError as e:
            raise error(f"{label} was not read ({path}). It is inaccessible to the current user.") from e
        except (OSError, UnicodeDecodeError) as e:
            raise error(f"{label} could not be read ({path}). {e}") from e

    def _parse_json(self, text: str, path: str, error: Type[CatalogError], label: str):
        try:
            return json.loads(text, parse_float=Decimal)
        except json.JSONDecodeError as e:
            raise error(f"{label} could not be read ({path}). {e}") from e

    def read_product_catalog(self, path: str) -> ProductCatalog:
        """Read the product catalog at path.

        Duplicate product ids are dropped (first wins) and prices validated.

        Raises:
            ProductCatalogFileError: File missing, inaccessible or not valid JSON
            MissingProductFieldError: A product lacks Id or Price
            InvalidProductValueError: A product value is mistyped, or a price is <= 0
        """
        label = "Product catalog"
        text = self._read_text(path, ProductCatalogFileError, label)
        data = self._parse_json(text, path, ProductCatalogFileError, label)

        try:
            schema = ProductCatalogSchema.model_validate(data)
        except ValidationError as e:
            error = _classify(
                e, ProductCatalogFileError, MissingProductFieldError,
                InvalidProductValueError, ("Products", "products")
            )
            raise error(f"{label} is invalid ({path}). {_describe(e)}") from e

        catalog = ProductCatalog(
            products=[Product(entry.id, entry.price) for entry in schema.products]
        )
        before = len(catalog)
        catalog.remove_duplicates()
        if len(catalog) < before:
            logger.warning(
                "Ignored %d duplicate product(s) in %s", before - len(catalog), path
            )
        catalog.validate()

        logger.info("Read %d product(s) from %s", len(catalog), path)
        return catalog

    def read_promotion_catalog(self, path: str, now: Optional[datetime] = None) -> PromotionCatalog:
        """Read the promotion catalog at path.

        Promotions not in effect at now, and badly configured promotions, are
        dropped rather than failing the read.

        Args:
            path: Promotion catalog path
            now: Time the promotions must be in effect at, defaults to the
                current local time

        Raises:
            PromotionCatalogFileError: File missing, inaccessible or not valid JSON
            MissingDiscountRuleFieldError: A discount lacks a required field
            InvalidDiscountRuleValueError: A discount field value is mistyped
        """
        label = "Promotion catalog"
        text = self._read_text(path, PromotionCatalogFileError, label)
        data = self._parse_json(text, path, PromotionCatalogFileError, label)

        try:
            schema = PromotionCatalogSchema.model_validate(data)
        except ValidationError as e:
            error = _classify(
                e, PromotionCatalogFileError, MissingDiscountRuleFieldError,
                InvalidDiscountRuleValueError, ("SalesLineItemDiscounts", "line_item_discounts")
            )
            raise error(f"{label} is invalid ({path}). {_describe(e)}") from e

        catalog = PromotionCatalog(
            overall_strategy=schema.overall_strategy,
            line_item_discounts=[
                LineItemDiscountRule(
                    product_id=entry.product_id,
                    threshold_quantity=entry.threshold_quantity,
                    discount=entry.discount,
                    effective_from=entry.effective_from,
                    effective_to=entry.effective_to,
                    applied_on_next_product=entry.applied_on_next_product,
                )
                for entry in schema.line_item_discounts
            ],
        )

        total = len(catalog.line_item_discounts)
        catalog.remove_inapplicable_promotions(now if now is not None else datetime.now())
        catalog.remove_invalid_promotions()

        logger.info(
            "Read %d of %d promotion(s) from %s (strategy %s)",
            len(catalog.line_item_discounts), total, path, catalog.overall_strategy
        )
        return catalog
