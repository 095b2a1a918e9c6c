"""Order DRF serializers for API input/output.

The serializer operates at the Interface layer (API Views).
Business logic lives in the Service Layer, which receives
Pydantic DTOs from ``dtos.py``.
"""

from __future__ import annotations

from django.core.exceptions import ObjectDoesNotExist
from rest_framework import serializers

from modules.orders.constants import STATUS_MAX_LENGTH
from modules.orders.models import Order, OrderItem

# ---------------------------------------------------------------------------
# Input Serializers
# ---------------------------------------------------------------------------


class CreateOrderItemSerializer(serializers.Serializer):
    """Validates a single requested line: ``{"productId", "quantity"}``."""

    productId = serializers.UUIDField(source="product_id")
    quantity = serializers.IntegerField(min_value=1)


class CreateOrderSerializer(serializers.Serializer):
    """Validates the order creation payload: ``{"products": [...]}``."""

    products = CreateOrderItemSerializer(many=True, allow_empty=False)


class UpdateOrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField(
        max_length=STATUS_MAX_LENGTH, trim_whitespace=False
    )


# ---------------------------------------------------------------------------
# Output Serializers (Read)
# ---------------------------------------------------------------------------


class OrderOwnerSerializer(serializers.Serializer):
    """Public view of the user who placed the order."""

    id = serializers.IntegerField(read_only=True)
    name = serializers.SerializerMethodField()
    email = serializers.EmailField(read_only=True)

    def get_name(self, user) -> str:
        return user.get_full_name() or user.get_username()


class OrderProductSerializer(serializers.ModelSerializer):
    """A product as seen through one order line.

    ``price`` is the live catalogue price; ``unit_price`` is what the
    customer paid.
    """

    id = serializers.UUIDField(source="product_id", read_only=True)
    name = serializers.CharField(source="product.name", read_only=True)
    price = serializers.DecimalField(
        source="product.price", max_digits=10, decimal_places=2, read_only=True
    )
    unit_price = serializers.DecimalField(
        source="price", max_digits=10, decimal_places=2, read_only=True
    )

    class Meta:
        model = OrderItem
        fields = ["id", "name", "price", "quantity", "unit_price"]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with the owner and ordered products.

    Lines whose product has since left the catalogue are not listed.
    """

    user = OrderOwnerSerializer(read_only=True)
    products = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            "id",
            "user_id",
            "status",
            "total_price",
            "created_at",
            "updated_at",
            "user",
            "products",
        ]
        read_only_fields = fields

    def get_products(self, order: Order) -> list[dict]:
        lines = [item for item in order.items.all() if _has_product(item)]
        return OrderProductSerializer(lines, many=True).data


def _has_product(item: OrderItem) -> bool:
    try:
        return item.product is not None
    except ObjectDoesNotExist:
        return False
