"""ProductCatalog: the products sold in the store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..catalog.errors import InvalidProductValueError
from .product import Product


@dataclass
class ProductCatalog:
    """Ordered list of products available at the register.

    Attributes:
        products: Products in catalog file order
    """

    products: List[Product] = field(default_factory=list)

    def remove_duplicates(self) -> None:
        """Keep only the first product for each id, preserving order."""
        seen = set()
        unique = []
        for product in self.products:
            if product.id in seen:
                continue
            seen.add(product.id)
            unique.append(product)
        self.products = unique

    def find_product(self, product_id: str) -> Optional[Product]:
        """Return the product with the given id, or None.

        The id is trimmed; matching is case-sensitive.

        Raises:
            ValueError: If product_id is None or empty
        """
        if not product_id:
            raise ValueError("product_id must be a non-empty string")

        wanted = product_id.strip()
        for product in self.products:
            if product.id == wanted:
                return product
        return None

    def validate(self) -> None:
        """Raise InvalidProductValueError if any product price is zero or negative."""
        count = sum(1 for product in self.products if product.price <= 0)
        if count > 0:
            raise InvalidProductValueError(
                f"There are {count} product(s) in the product catalog that have "
                f"a price that is negative or zero."
            )

    def __len__(self) -> int:
        return len(self.products)
