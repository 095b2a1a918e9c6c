"""Order repository interface.

Extends ``IRepository[Order]`` with the aggregate-level operations the
order service needs: creating an order together with its line items,
status updates and deleting an order with its items.

The Service Layer depends exclusively on this contract (DIP); how the
owner and products get joined in is the implementation's business.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from modules.core.repositories.interfaces import IRepository, Queryable

if TYPE_CHECKING:
    from modules.orders.models import Order, OrderItem


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root.

    The Order aggregate includes its OrderItem children.  Reads return
    orders with the owner and each item's product already loaded.
    """

    @abstractmethod
    def create(self, data: Dict[str, Any]) -> Order:
        """Create an order with its items.

        ``data`` must include ``user_id``, ``total_price``, ``status`` and
        ``items`` (list of dicts with ``product_id``, ``quantity``, ``price``).
        """

    @abstractmethod
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its owner and items' products loaded."""

    @abstractmethod
    def list(self, filters: Optional[Dict[str, Any]] = None) -> Queryable[Order]:
        """List orders with optional filters, relations loaded."""

    @abstractmethod
    def list_items(self, order_id: str) -> List[OrderItem]:
        """Line items of an order, sorted by product id."""

    @abstractmethod
    def update_status(self, order: Order, status: str) -> Order:
        """Overwrite the status of *order*."""

    @abstractmethod
    def delete(self, id: str) -> int:
        """Delete an order and its items; return the number of orders removed."""
