"""Unit tests for OrderDjangoRepository.

Covers:
- Aggregate creation (order + items).
- Null-object look-ups for unknown and malformed ids.
- Listing with ORM filters, relations preloaded.
- Items sorted by product id.
- Status overwrite and delete count.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import uuid4

import pytest
from django.db import transaction

from modules.orders.models import Order, OrderItem
from modules.orders.repositories.django_repository import OrderDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return OrderDjangoRepository()


@pytest.fixture()
def order(repo, customer, mug, beans):
    return repo.create(
        {
            "user_id": customer.id,
            "total_price": Decimal("44.50"),
            "status": "pending",
            "items": [
                {"product_id": mug.id, "quantity": 2, "price": mug.price},
                {"product_id": beans.id, "quantity": 1, "price": beans.price},
            ],
        }
    )


class TestCreate:
    def test_persists_order_and_items(self, order, customer):
        stored = Order.objects.get(id=order.id)
        assert stored.user_id == customer.id
        assert stored.total_price == Decimal("44.50")
        assert OrderItem.objects.filter(order=order).count() == 2

    def test_order_without_items(self, repo, customer):
        order = repo.create(
            {"user_id": customer.id, "total_price": 0, "status": "pending", "items": []}
        )
        assert order.items.count() == 0


class TestRead:
    def test_get_by_id_preloads_relations(
        self, repo, order, django_assert_num_queries
    ):
        with django_assert_num_queries(3):
            found = repo.get_by_id(str(order.id))
            assert found.user.username == "alice"
            assert {item.product.name for item in found.items.all()} == {
                "Ceramic Mug",
                "Espresso Beans",
            }

    @pytest.mark.parametrize("order_id", [str(uuid4()), "not-a-uuid"])
    def test_unknown_ids_return_none(self, repo, order_id):
        assert repo.get_by_id(order_id) is None
        with transaction.atomic():
            assert repo.get_for_update(order_id) is None

    def test_list_filters_by_user(self, repo, order, customer, other_customer):
        assert [o.id for o in repo.list({"user_id": customer.id})] == [order.id]
        assert list(repo.list({"user_id": other_customer.id})) == []

    def test_list_without_filters(self, repo, order):
        assert [o.id for o in repo.list()] == [order.id]

    def test_list_items_sorted_by_product(self, repo, order):
        product_ids = [item.product_id for item in repo.list_items(str(order.id))]
        assert product_ids == sorted(product_ids)


class TestWrite:
    def test_update_status(self, repo, order):
        repo.update_status(order, "shipped")
        order.refresh_from_db()
        assert order.status == "shipped"

    def test_delete_returns_order_count(self, repo, order):
        assert repo.delete(str(order.id)) == 1
        assert not Order.objects.filter(id=order.id).exists()
        assert not OrderItem.objects.filter(order_id=order.id).exists()

    def test_delete_unknown_returns_zero(self, repo):
        assert repo.delete(str(uuid4())) == 0
