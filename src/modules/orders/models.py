"""Order and OrderItem models.

- ``Order.total_price`` is computed once, when the order is created.
- ``Order.status`` starts as ``pending`` and is free-form afterwards.
- ``OrderItem.price`` is a **snapshot** of the product price at purchase
  time; later catalogue changes never touch it.
- ``OrderItem.product`` carries no database constraint: products may be
  removed from the catalogue while old orders still reference them.
"""

from __future__ import annotations

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import STATUS_MAX_LENGTH, OrderStatus


class Order(BaseModel):
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    total_price = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    status = models.CharField(
        max_length=STATUS_MAX_LENGTH,
        default=OrderStatus.PENDING,
    )

    class Meta:
        db_table = "orders"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["user", "-created_at"], name="orders_user_created_idx"),
            models.Index(fields=["status"], name="orders_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class OrderItem(BaseModel):
    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    product = models.ForeignKey(
        "products.Product",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="order_items",
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        db_table = "order_items"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
        ]

    @property
    def subtotal(self):
        return self.quantity * self.price

    def __str__(self) -> str:
        return f"{self.product_id} x{self.quantity} (${self.price})"
