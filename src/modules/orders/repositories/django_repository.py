"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.  Reads use
``select_related`` for the owner and ``prefetch_related`` for
items → product, so serialising a list of orders costs a fixed number of
queries.  Writes assume the caller owns the transaction
(``OrderService`` methods are ``transaction.atomic``).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import models

from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    # ------------------------------------------------------------------
    # Create (aggregate root + children)
    # ------------------------------------------------------------------

    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order row followed by one row per line item."""
        order = Order(
            user_id=data["user_id"],
            total_price=data["total_price"],
            status=data["status"],
        )
        order.save()

        items = data.get("items", [])
        for item_data in items:
            OrderItem(
                order=order,
                product_id=item_data["product_id"],
                quantity=item_data["quantity"],
                price=item_data["price"],
            ).save()

        logger.info(
            "order.persisted",
            order_id=str(order.id),
            item_count=len(items),
        )
        return order

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def _with_relations(self) -> models.QuerySet:
        return Order.objects.select_related("user").prefetch_related("items__product")

    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with eager-loaded relations.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return self._with_relations().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def get_for_update(self, id: str) -> Optional[Order]:
        """Retrieve an order with a row-level lock (SELECT FOR UPDATE).

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.select_for_update().filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    def list_items(self, order_id: str) -> List[OrderItem]:
        return list(OrderItem.objects.filter(order_id=order_id).order_by("product_id"))

    def list(self, filters: Optional[Dict[str, Any]] = None) -> models.QuerySet:
        """List orders with optional ORM look-ups.

        Supported filter keys include ``user_id`` and ``status``.
        """
        queryset = self._with_relations()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def update_status(self, order: Order, status: str) -> Order:
        order.status = status
        order.save(update_fields=["status", "updated_at"])
        return order

    def delete(self, id: str) -> int:
        """Remove the items first, then the order row."""
        items_deleted, _ = OrderItem.objects.filter(order_id=id).delete()
        _, per_model = Order.objects.filter(id=id).delete()
        deleted = per_model.get(Order._meta.label, 0)
        logger.info(
            "order.rows_deleted",
            order_id=str(id),
            items_deleted=items_deleted,
            orders_deleted=deleted,
        )
        return deleted
