"""Register profile loader (store name, receipt layout, catalog locations)."""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass

from . import PROJECT_ROOT


@dataclass
class RegisterProfile:
    """Store branding, receipt layout and catalog locations for one register.

    Catalog paths are relative to the data directory unless absolute.
    """
    name: str
    store_name: str = "GroceryCo"
    currency_symbol: str = "$"
    receipt_width: int = 80
    product_catalog: Optional[str] = None
    promotion_catalog: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RegisterProfile':
        """Build from the nested YAML layout (receipt: and catalogs: sections)."""
        receipt = data.get('receipt', {}) or {}
        catalogs = data.get('catalogs', {}) or {}
        return cls(
            name=data.get('name', 'default'),
            store_name=data.get('store_name', 'GroceryCo'),
            currency_symbol=receipt.get('currency_symbol', '$'),
            receipt_width=int(receipt.get('width', 80)),
            product_catalog=catalogs.get('products'),
            promotion_catalog=catalogs.get('promotions'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Nested dict in the same layout from_dict() reads."""
        return {
            'name': self.name,
            'store_name': self.store_name,
            'receipt': {
                'currency_symbol': self.currency_symbol,
                'width': self.receipt_width,
            },
            'catalogs': {
                'products': self.product_catalog,
                'promotions': self.promotion_catalog,
            },
        }


def get_profiles_dir() -> Path:
    """Directory holding <name>.yaml register profiles (configs/profiles)."""
    return PROJECT_ROOT / "configs" / "profiles"


def load_profile(profile_name: str = "default") -> RegisterProfile:
    """Read configs/profiles/<profile_name>.yaml.

    Raises:
        FileNotFoundError: If there is no such profile
        ValueError: If the file is not YAML, is empty, is not a mapping or
            holds a bad value (e.g. a non-numeric receipt width)
    """
    path = get_profiles_dir() / f"{profile_name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Register profile '{profile_name}' not found at {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        raise ValueError(f"Register profile '{profile_name}' is not valid YAML: {e}") from e

    if not data:
        raise ValueError(f"Register profile '{profile_name}' is empty ({path})")
    if not isinstance(data, dict):
        raise ValueError(
            f"Register profile '{profile_name}' must be a mapping, got {type(data).__name__}"
        )

    try:
        return RegisterProfile.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Register profile '{profile_name}' has an invalid value: {e}") from e


def list_available_profiles() -> list[str]:
    """Sorted profile names; ["default"] when none are installed."""
    profiles_dir = get_profiles_dir()
    names = sorted(path.stem for path in profiles_dir.glob("*.yaml")) if profiles_dir.is_dir() else []
    return names or ["default"]


def get_default_profile() -> RegisterProfile:
    """The "default" profile, or built-in defaults when it is not installed."""
    try:
        return load_profile("default")
    except FileNotFoundError:
        return RegisterProfile(name="default")
