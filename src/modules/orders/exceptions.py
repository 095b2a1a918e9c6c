"""Order domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.
"""

from __future__ import annotations


class OrderNotFound(Exception):
    """The requested order does not exist."""


class InsufficientStock(Exception):
    """A product has less stock than the quantity requested."""

    def __init__(self, product_id: object) -> None:
        self.product_id = product_id
        super().__init__(f"Insufficient stock for product ID {product_id}")


class OrderAccessDenied(Exception):
    """The caller may not see or change the requested orders."""
