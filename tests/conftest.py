import pytest
from django.utils import timezone

from orders.models import Order


@pytest.fixture
def make_order(db):
    def _make(customer_name="John", amount=123.45):
        return Order.objects.create(
            customer_name=customer_name, amount=amount, created_at=timezone.now()
        )
    return _make


@pytest.fixture(autouse=True)
def no_broker(settings):
    # Ningún test habla con un RabbitMQ real salvo que lo configure explícitamente
    settings.RABBIT_HOST = None
