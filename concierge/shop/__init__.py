"""Shop package exports."""

from .catalog import Catalog
from .session import ShoppingSession
from .storefront import Storefront

__all__ = [
    "Catalog",
    "ShoppingSession",
    "Storefront",
]
