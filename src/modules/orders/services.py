"""Order service layer (Use Cases).

Orchestrates order creation, status updates, deletion and the queries
behind the order endpoints.  Every write is atomic: the service defines
the unit-of-work boundary, locks the product rows it touches and only
sends e-mail once the transaction has committed.

Inventory bookkeeping:
- Creating an order decrements each product's stock by the quantity
  ordered.  Requested products that do not exist are skipped.
- If any product lacks stock the whole request is rolled back, including
  decrements already applied for earlier lines.
- Deleting an order adds each line's quantity back to its product, for
  products that still exist.
"""

from __future__ import annotations

from decimal import Decimal
from functools import partial
from typing import TYPE_CHECKING, Dict, Iterable, Optional

import structlog
from django.db import transaction

from modules.orders.constants import (
    CANCELLATION_BODY,
    CANCELLATION_SUBJECT,
    CONFIRMATION_BODY,
    CONFIRMATION_SUBJECT,
    OrderStatus,
)
from modules.orders.exceptions import (
    InsufficientStock,
    OrderAccessDenied,
    OrderNotFound,
)

if TYPE_CHECKING:
    from modules.core.caller import Caller
    from modules.core.notifications import INotifier
    from modules.core.repositories.interfaces import Queryable
    from modules.orders.dtos import CreateOrderDTO, UpdateOrderStatusDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

ORDER_NOT_FOUND = "Order not found"
NOT_YOUR_ORDER = "Forbidden: not your order"
ADMIN_REQUIRED = "Forbidden: admin access required"


class OrderService:
    """Application service for Order use-cases.

    Receives repositories and the notifier via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
        notifier: INotifier,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository
        self._notifier = notifier

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_order(self, caller: Caller, dto: CreateOrderDTO) -> Order:
        """Create an order for *caller*, reserving stock for every line.

        Steps:
        1. Lock every requested product (sorted by PK to avoid deadlocks).
        2. For each line, in request order:
           - skip it if the product does not exist;
           - fail if stock is below the requested quantity;
           - add ``price * quantity`` to the total, snapshot the price
             and deduct the stock.
        3. Persist the order (``pending``) and its items.
        4. After commit, e-mail a confirmation to the caller.

        Raises:
            InsufficientStock: a product cannot cover its line. Nothing
                is persisted for the request.
        """
        log = logger.bind(user_id=caller.id, line_count=len(dto.items))
        log.info("order.creation_started")

        products = self._lock_products(str(item.product_id) for item in dto.items)

        total_price = Decimal("0.00")
        repo_items = []
        for item_dto in dto.items:
            product = products.get(str(item_dto.product_id))
            if product is None:
                log.info("order.product_skipped", product_id=str(item_dto.product_id))
                continue

            if product.stock < item_dto.quantity:
                log.warning(
                    "order.insufficient_stock",
                    product_id=str(product.id),
                    requested=item_dto.quantity,
                    available=product.stock,
                )
                raise InsufficientStock(item_dto.product_id)

            total_price += product.price * item_dto.quantity
            product.stock -= item_dto.quantity
            self._product_repo.save_stock(product)

            log.info(
                "order.stock_reserved",
                product_id=str(product.id),
                quantity=item_dto.quantity,
                remaining=product.stock,
            )

            repo_items.append(
                {
                    "product_id": product.id,
                    "quantity": item_dto.quantity,
                    "price": product.price,
                }
            )

        order = self._order_repo.create(
            {
                "user_id": caller.id,
                "total_price": total_price,
                "status": OrderStatus.PENDING,
                "items": repo_items,
            }
        )
        log.info(
            "order.created",
            order_id=str(order.id),
            total_price=str(total_price),
            item_count=len(repo_items),
        )

        self._notify_after_commit(
            caller.email,
            CONFIRMATION_SUBJECT,
            CONFIRMATION_BODY.format(order_id=order.id, total_price=total_price),
        )

        # Re-fetch with relations for output
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def update_order_status(
        self,
        caller: Caller,
        order_id: str,
        dto: UpdateOrderStatusDTO,
    ) -> Order:
        """Overwrite an order's status with whatever label the admin sends.

        Raises:
            OrderAccessDenied: caller is not an admin.
            OrderNotFound: order does not exist.
        """
        self._require_admin(caller)

        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound(ORDER_NOT_FOUND)

        old_status = order.status
        self._order_repo.update_status(order, dto.status)

        logger.info(
            "order.status_updated",
            order_id=str(order.id),
            old_status=old_status,
            new_status=dto.status,
            admin_id=caller.id,
        )
        return self._order_repo.get_by_id(str(order.id)) or order

    @transaction.atomic
    def delete_order(self, caller: Caller, order_id: str) -> int:
        """Delete an order and its items, putting their stock back.

        Returns the number of orders deleted.  The owner is e-mailed a
        cancellation notice after commit.

        Raises:
            OrderAccessDenied: caller is not an admin.
            OrderNotFound: order does not exist (nothing is changed).
        """
        self._require_admin(caller)

        order = self._order_repo.get_for_update(order_id)
        if not order:
            raise OrderNotFound(ORDER_NOT_FOUND)

        log = logger.bind(order_id=str(order.id), admin_id=caller.id)
        owner_email = order.user.email

        for item in self._order_repo.list_items(str(order.id)):
            product = self._product_repo.get_for_update(str(item.product_id))
            if product is None:
                log.info("order.stock_restore_skipped", product_id=str(item.product_id))
                continue
            product.stock += item.quantity
            self._product_repo.save_stock(product)
            log.info(
                "order.stock_released",
                product_id=str(product.id),
                quantity=item.quantity,
                restored_stock=product.stock,
            )

        deleted = self._order_repo.delete(str(order.id))
        log.info("order.deleted", deleted=deleted)

        self._notify_after_commit(
            owner_email,
            CANCELLATION_SUBJECT,
            CANCELLATION_BODY.format(order_id=order.id),
        )
        return deleted

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(ORDER_NOT_FOUND)
        return order

    def list_orders(self, caller: Caller) -> Queryable[Order]:
        """Every order in the shop (admin only)."""
        self._require_admin(caller)
        return self._order_repo.list()

    def list_orders_for_user(self, caller: Caller, user_id: int) -> Queryable[Order]:
        """Orders placed by *user_id*; visible to that user and to admins.

        Raises:
            OrderAccessDenied: caller is neither the owner nor an admin.
        """
        if not caller.owns(user_id) and not caller.is_admin:
            logger.warning(
                "order.foreign_listing_denied",
                caller_id=caller.id,
                user_id=user_id,
            )
            raise OrderAccessDenied(NOT_YOUR_ORDER)
        return self._order_repo.list({"user_id": user_id})

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _lock_products(
        self, product_ids: Iterable[str]
    ) -> Dict[str, Optional[Product]]:
        locked: Dict[str, Optional[Product]] = {}
        for product_id in sorted(set(product_ids)):
            locked[product_id] = self._product_repo.get_for_update(product_id)
        return locked

    @staticmethod
    def _require_admin(caller: Caller) -> None:
        if not caller.is_admin:
            raise OrderAccessDenied(ADMIN_REQUIRED)

    def _notify_after_commit(self, to_address: str, subject: str, body: str) -> None:
        transaction.on_commit(
            partial(self._notifier.send_email, to_address, subject, body),
            robust=True,
        )

