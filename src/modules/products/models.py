"""Product model: catalogue price and the inventory counter orders draw on.

``stock`` is a ``PositiveIntegerField`` so the database itself rejects a
negative inventory; the order service checks stock before decrementing
and the constraint is the backstop for concurrent writers.
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel

logger = structlog.get_logger(__name__)


class Product(BaseModel):
    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    stock = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product.created",
                product_id=str(self.id),
                name=self.name,
                stock=self.stock,
            )

    def __str__(self) -> str:
        return f"{self.name} (${self.price}, stock={self.stock})"
