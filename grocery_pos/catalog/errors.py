"""Typed failures raised while reading the product and promotion catalogs.

Each failure category has its own type so the register can show a targeted
diagnostic. The underlying exception (OSError, JSON or schema error) is
chained as __cause__.
"""


class CatalogError(Exception):
    """Base class for catalog reading failures."""
    pass


class ProductCatalogFileError(CatalogError):
    """Raised when the product catalog cannot be found, accessed or parsed."""
    pass


class PromotionCatalogFileError(CatalogError):
    """Raised when the promotion catalog cannot be found, accessed or parsed."""
    pass


class MissingProductFieldError(CatalogError):
    """Raised when a required field is missing from a product definition."""
    pass


class MissingDiscountRuleFieldError(CatalogError):
    """Raised when a required field is missing from a line item discount definition."""
    pass


class InvalidProductValueError(CatalogError):
    """Raised when a field in a product definition has an invalid value."""
    pass


class InvalidDiscountRuleValueError(CatalogError):
    """Raised when a field in a line item discount definition has an invalid value."""
    pass
