"""Order API views.

Exposes the ``OrderService`` via HTTP using a DRF ViewSet.  Domain
exceptions are caught and translated into HTTP status codes here;
anything unexpected is left to the project exception handler, which
logs it and answers a generic 500.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.authentication import BaseAuthentication
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.permissions import (
    AllowAny,
    BasePermission,
    IsAdminUser,
    IsAuthenticated,
)
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import BaseThrottle
from rest_framework.viewsets import GenericViewSet

from modules.core.caller import Caller
from modules.core.notifications import EmailNotifier
from modules.orders.dtos import (
    CreateOrderDTO,
    CreateOrderItemDTO,
    UpdateOrderStatusDTO,
)
from modules.orders.exceptions import (
    InsufficientStock,
    OrderAccessDenied,
    OrderNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import (
    CreateOrderSerializer,
    OrderSerializer,
    UpdateOrderStatusSerializer,
)
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository


class OrderViewSet(GenericViewSet):
    """ViewSet for Order operations.

    Uses ``OrderService`` with injected repositories (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    queryset = Order.objects.none()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    ordering_fields = ["created_at", "total_price", "status"]
    ordering = ["-created_at", "-id"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = OrderService(
            order_repository=OrderDjangoRepository(),
            product_repository=ProductDjangoRepository(),
            notifier=EmailNotifier(),
        )

    def _requested_action(self) -> str | None:
        # ``self.action`` is only set after the Request (and its
        # authenticators) has been built.
        request = getattr(self, "request", None)
        if request is None:
            return None
        return getattr(self, "action_map", {}).get(request.method.lower())

    def get_authenticators(self) -> list[BaseAuthentication]:
        """Order detail is public: credentials are not even read."""
        if self._requested_action() == "retrieve":
            return []
        return super().get_authenticators()

    def get_permissions(self) -> list[BasePermission]:
        """Public detail, admin-only management, authenticated otherwise."""
        if self.action == "retrieve":
            return [AllowAny()]
        if self.action in {"list", "update", "partial_update", "destroy"}:
            return [IsAdminUser()]
        return [IsAuthenticated()]

    def get_throttles(self) -> list[BaseThrottle]:
        """Per-action throttling scopes."""
        throttle_scope: str | None
        if self.action == "create":
            throttle_scope = "order_creation"
        elif self.action in {"list", "retrieve", "user_orders"}:
            throttle_scope = "order_listing"
        else:
            throttle_scope = None
        self.throttle_scope = throttle_scope
        return super().get_throttles()

    def _caller(self, request: Request) -> Caller:
        return Caller.from_user(request.user)

    @staticmethod
    def _error(message: str, code: int) -> Response:
        return Response({"detail": message}, status=code)

    # ------------------------------------------------------------------
    # Create
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/"""
        create_serializer = CreateOrderSerializer(data=request.data)
        create_serializer.is_valid(raise_exception=True)

        dto = CreateOrderDTO(
            items=[
                CreateOrderItemDTO(
                    product_id=item["product_id"],
                    quantity=item["quantity"],
                )
                for item in create_serializer.validated_data["products"]
            ],
        )

        try:
            order = self._service.create_order(self._caller(request), dto)
        except InsufficientStock as exc:
            return self._error(str(exc), status.HTTP_400_BAD_REQUEST)

        out = OrderSerializer(order)
        return Response(out.data, status=status.HTTP_201_CREATED)

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/v1/orders/

        Filtering (status, user, date range, total range) is handled by
        ``OrderFilter``; ordering by ``OrderingFilter``.
        """
        try:
            orders = self._service.list_orders(self._caller(request))
        except OrderAccessDenied as exc:
            return self._error(str(exc), status.HTTP_403_FORBIDDEN)

        serializer = OrderSerializer(self.filter_queryset(orders), many=True)
        return Response(serializer.data)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(str(pk))
        except OrderNotFound as exc:
            return self._error(str(exc), status.HTTP_404_NOT_FOUND)
        serializer = OrderSerializer(order)
        return Response(serializer.data)

    @action(detail=False, methods=["get"], url_path=r"user-orders/(?P<user_id>\d+)")
    def user_orders(self, request: Request, user_id: str) -> Response:
        """GET /api/v1/orders/user-orders/{user_id}/

        Visible to the owner and to admins; anyone else gets a 403 and
        no data.
        """
        try:
            orders = self._service.list_orders_for_user(
                self._caller(request), int(user_id)
            )
        except OrderAccessDenied as exc:
            return self._error(str(exc), status.HTTP_403_FORBIDDEN)

        serializer = OrderSerializer(orders, many=True)
        return Response(serializer.data)

    # ------------------------------------------------------------------
    # Status Update
    # ------------------------------------------------------------------

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/v1/orders/{pk}/

        Overwrites the status with the given label, whatever it is.
        """
        status_serializer = UpdateOrderStatusSerializer(data=request.data)
        status_serializer.is_valid(raise_exception=True)
        dto = UpdateOrderStatusDTO(status=status_serializer.validated_data["status"])

        try:
            order = self._service.update_order_status(
                self._caller(request), str(pk), dto
            )
        except OrderNotFound as exc:
            return self._error(str(exc), status.HTTP_404_NOT_FOUND)
        except OrderAccessDenied as exc:
            return self._error(str(exc), status.HTTP_403_FORBIDDEN)

        serializer = OrderSerializer(order)
        return Response(serializer.data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/orders/{pk}/, same contract as PUT."""
        return self.update(request, pk)

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/orders/{pk}/

        Restores stock for every line, removes the order and its items,
        then notifies the owner.
        """
        try:
            deleted = self._service.delete_order(self._caller(request), str(pk))
        except OrderNotFound as exc:
            return self._error(str(exc), status.HTTP_404_NOT_FOUND)
        except OrderAccessDenied as exc:
            return self._error(str(exc), status.HTTP_403_FORBIDDEN)

        return Response(
            {"message": "Order Deleted", "deleted": deleted},
            status=status.HTTP_200_OK,
        )
