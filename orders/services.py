# orders/services.py
import logging

from django.utils import timezone

from .models import Order

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(self, repository):
        if repository is None:
            raise TypeError("OrderService requiere un repositorio")
        self.repository = repository

    def create_order(self, request: dict) -> Order:
        """
        Crea la orden a partir de un payload ya validado.
        - created_at se asigna aquí, una sola vez.
        - Los errores del repositorio se propagan sin traducir.
        """
        customer_name = request["customerName"].strip()
        logger.info("Creating order for customer: %s", customer_name)
        order = Order(
            customer_name=customer_name,
            amount=float(request["amount"]),
            created_at=timezone.now(),
        )
        return self.repository.save(order)

    def get_all_orders(self) -> list[Order]:
        return self.repository.find_all()
