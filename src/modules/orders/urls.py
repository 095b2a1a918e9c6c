"""Routes under ``/api/v1/``.

``orders/``, ``orders/<id>/`` and ``orders/user-orders/<user_id>/``
all resolve to ``OrderViewSet``.
"""

from rest_framework.routers import SimpleRouter

from modules.orders.views import OrderViewSet

app_name = "orders"

router = SimpleRouter()
router.register(r"orders", OrderViewSet, basename="order")

urlpatterns = [*router.urls]
