"""The authenticated principal handed to every service operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ADMIN_ROLE = "admin"
CUSTOMER_ROLE = "customer"


@dataclass(frozen=True)
class Caller:
    """Who is performing an operation.

    Built once per request from ``request.user`` so the service layer
    never reaches into the HTTP request for identity.
    """

    id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE

    def owns(self, user_id: int) -> bool:
        return self.id == user_id

    @classmethod
    def from_user(cls, user: Any) -> Caller:
        """Build a ``Caller`` from a Django user (staff users are admins)."""
        return cls(
            id=user.pk,
            email=user.email or "",
            role=ADMIN_ROLE if user.is_staff else CUSTOMER_ROLE,
        )
