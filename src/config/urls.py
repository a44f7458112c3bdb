from django.urls import include, path
from rest_framework.routers import DefaultRouter

from modules.customers.views import CustomerViewSet
from modules.orders.views import OrderViewSet
from modules.products.views import ProductViewSet

router = DefaultRouter()
router.register("customers", CustomerViewSet, basename="customer")
router.register("products", ProductViewSet, basename="product")
router.register("orders", OrderViewSet, basename="order")

urlpatterns = [
    path("", include("modules.core.urls")),
    # Domain modules (versioned API)
    path("api/v1/", include(router.urls)),
]
