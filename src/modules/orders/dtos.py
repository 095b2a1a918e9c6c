"""Order DTOs for the Service Layer.

Framework-agnostic input contracts using Pydantic v2.  The API layer
(DRF serializers) validates the HTTP payload and builds these; the
service layer only ever sees DTOs.  DTOs are immutable (``frozen=True``).

- ``CreateOrderItemDTO``: one requested line (product + quantity).
- ``CreateOrderDTO``: the order creation request.
- ``UpdateOrderStatusDTO``: the new status for an order.
"""

from __future__ import annotations

from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

from modules.orders.constants import STATUS_MAX_LENGTH


class CreateOrderItemDTO(BaseModel):
    """A single requested line item.

    ``price`` is not part of the request: the service snapshots it from
    the product at order time.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CreateOrderDTO(BaseModel):
    """Order creation request.

    The same product may appear more than once; each line is reserved
    and recorded on its own.
    """

    model_config = ConfigDict(frozen=True)

    items: List[CreateOrderItemDTO]

    @field_validator("items")
    @classmethod
    def items_must_not_be_empty(
        cls, v: List[CreateOrderItemDTO]
    ) -> List[CreateOrderItemDTO]:
        if not v:
            raise ValueError("Order must have at least one item.")
        return v


class UpdateOrderStatusDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: str

    @field_validator("status")
    @classmethod
    def status_must_fit(cls, v: str) -> str:
        if not v:
            raise ValueError("Status must not be empty.")
        if len(v) > STATUS_MAX_LENGTH:
            raise ValueError(f"Status must be at most {STATUS_MAX_LENGTH} characters.")
        return v
