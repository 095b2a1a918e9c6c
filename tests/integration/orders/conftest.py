from decimal import Decimal

import pytest

from modules.orders.models import Order, OrderItem


@pytest.fixture()
def make_order():
    """Persist an order directly, bypassing stock bookkeeping."""

    def _make(user, *lines, status="pending"):
        total = sum(
            (product.price * quantity for product, quantity in lines), Decimal("0")
        )
        order = Order.objects.create(user=user, total_price=total, status=status)
        for product, quantity in lines:
            OrderItem.objects.create(
                order=order, product=product, quantity=quantity, price=product.price
            )
        return order

    return _make


@pytest.fixture()
def alice_order(make_order, customer, mug, beans):
    return make_order(customer, (mug, 2), (beans, 1))


@pytest.fixture()
def bob_order(make_order, other_customer, grinder):
    return make_order(other_customer, (grinder, 1), status="shipped")
