from types import SimpleNamespace

import pytest

from modules.core.caller import ADMIN_ROLE, CUSTOMER_ROLE, Caller

pytestmark = pytest.mark.unit


class TestCaller:
    def test_staff_user_is_admin(self, staff_user):
        caller = Caller.from_user(staff_user)
        assert caller.role == ADMIN_ROLE
        assert caller.is_admin

    def test_regular_user_is_customer(self, customer):
        caller = Caller.from_user(customer)
        assert caller.id == customer.pk
        assert caller.email == "alice@example.com"
        assert caller.role == CUSTOMER_ROLE
        assert not caller.is_admin

    def test_missing_email_becomes_empty_string(self):
        user = SimpleNamespace(pk=3, email=None, is_staff=False)
        assert Caller.from_user(user).email == ""

    def test_owns_compares_user_ids(self, customer_caller, other_customer):
        assert customer_caller.owns(customer_caller.id)
        assert not customer_caller.owns(other_customer.pk)

    def test_admin_does_not_own_other_users(self, admin_caller, customer):
        assert not admin_caller.owns(customer.pk)
