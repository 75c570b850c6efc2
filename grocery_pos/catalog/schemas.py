"""Pydantic schemas for the product and promotion catalog JSON files."""

from datetime import datetime
from decimal import Decimal
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductSchema(BaseModel):
    """One entry of ProductCatalog.json."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="Id", description="Product identifier")
    price: Decimal = Field(..., alias="Price", description="Regular unit price")


class ProductCatalogSchema(BaseModel):
    """ProductCatalog.json document."""
    model_config = ConfigDict(populate_by_name=True)

    products: List[ProductSchema] = Field(default_factory=list, alias="Products")

    @field_validator("products", mode="before")
    @classmethod
    def _null_products(cls, value: Any) -> Any:
        return [] if value is None else value


class LineItemDiscountSchema(BaseModel):
    """One entry of SalesLineItemDiscounts in PromotionCatalog.json."""
    model_config = ConfigDict(populate_by_name=True)

    product_id: str = Field(..., alias="ProductId")
    threshold_quantity: int = Field(..., alias="ThresholdQuantity")
    discount: str = Field(..., alias="Discount", description='"$1.10", "1.10" or "15%"')
    effective_from: datetime = Field(..., alias="EffectiveFrom")
    effective_to: datetime = Field(..., alias="EffectiveTo")
    applied_on_next_product: bool = Field(False, alias="DiscountAppliedOnNextProduct")

    @field_validator("discount", mode="before")
    @classmethod
    def _discount_text(cls, value: Any) -> Any:
        # "Discount": 10 is the same as "Discount": "10"
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("effective_from", "effective_to", mode="before")
    @classmethod
    def _parse_iso(cls, value: Any) -> Any:
        # Accepts "2016-06-01 05:00" as well as full ISO 8601 timestamps
        if isinstance(value, str):
            return datetime.fromisoformat(value.strip())
        return value


class PromotionCatalogSchema(BaseModel):
    """PromotionCatalog.json document."""
    model_config = ConfigDict(populate_by_name=True)

    overall_strategy: str = Field("BestForCustomer", alias="OverallStrategy")
    line_item_discounts: List[LineItemDiscountSchema] = Field(
        default_factory=list, alias="SalesLineItemDiscounts"
    )

    @field_validator("line_item_discounts", mode="before")
    @classmethod
    def _null_discounts(cls, value: Any) -> Any:
        return [] if value is None else value
