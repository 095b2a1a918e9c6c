"""Product repository interface.

Extends ``IRepository[Product]`` with the stock-oriented persistence the
order service needs when reserving and releasing inventory.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def save_stock(self, entity: "Product") -> "Product":
        """Persist only the ``stock`` column of *entity*."""
