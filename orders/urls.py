from functools import partial

from django.urls import path
from django.views.decorators.csrf import csrf_exempt

from .repository import OrderRepository
from .services import OrderService
from .views import order_collection

# Cableado explícito: el servicio y su repositorio se construyen una vez al cargar las rutas
order_service = OrderService(OrderRepository())
orders_view = csrf_exempt(partial(order_collection, service=order_service))

urlpatterns = [
    path("orders", orders_view, name="orders"),
    path("orders/", orders_view),
]
