"""Django ORM implementation of the Product repository.

Look-ups return ``None`` for missing or malformed ids instead of
raising; the order service decides what a missing product means (it is
skipped).
"""

from __future__ import annotations

from typing import Optional

from django.core.exceptions import ValidationError

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: str) -> Optional[Product]:
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Product]:
        """Retrieve a product holding its row lock until the transaction ends.

        Must be called inside ``transaction.atomic``.  Returns ``None`` for
        non-existent or invalid IDs.
        """
        try:
            return Product.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def save_stock(self, entity: Product) -> Product:
        entity.save(update_fields=["stock"])
        return entity
