"""Unit tests for ProductDjangoRepository."""

from __future__ import annotations

from uuid import uuid4

import pytest
from django.db import transaction

from modules.products.repositories.django_repository import ProductDjangoRepository

pytestmark = pytest.mark.unit


@pytest.fixture()
def repo():
    return ProductDjangoRepository()


class TestLookups:
    def test_get_by_id(self, repo, mug):
        assert repo.get_by_id(str(mug.id)) == mug

    @pytest.mark.parametrize("product_id", [str(uuid4()), "not-a-uuid", ""])
    def test_get_by_id_unknown_returns_none(self, repo, product_id):
        assert repo.get_by_id(product_id) is None

    def test_get_for_update_inside_transaction(self, repo, mug):
        with transaction.atomic():
            locked = repo.get_for_update(str(mug.id))
        assert locked.stock == 5

    def test_get_for_update_malformed_id_returns_none(self, repo):
        with transaction.atomic():
            assert repo.get_for_update("not-a-uuid") is None


class TestSaveStock:
    def test_only_stock_is_written(self, repo, mug):
        mug.stock = 1
        mug.name = "Renamed in memory"
        repo.save_stock(mug)

        mug.refresh_from_db()
        assert mug.stock == 1
        assert mug.name == "Ceramic Mug"
