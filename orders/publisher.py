# orders/publisher.py
import json
import logging

import pika
from django.conf import settings

from .broker import connection_parameters

logger = logging.getLogger(__name__)

ORDER_CREATED = "order.created"


def _connection_parameters() -> pika.ConnectionParameters:
    """Devuelve parámetros con timeouts y reintentos cortos.
    No bloquea la request si el broker está caído o lejos."""
    return connection_parameters(
        settings.RABBIT_HOST,
        settings.RABBIT_PORT,
        settings.RABBIT_VHOST,
        settings.RABBIT_USER,
        settings.RABBIT_PASS,
        blocked_connection_timeout=5,
        socket_timeout=5,
        connection_attempts=1,
    )


def _publish(routing_key: str, payload: dict) -> None:
    """Publica sin reventar la request si el broker falla."""
    if not settings.RABBIT_HOST:
        logger.debug("RABBIT_HOST no definido; evento %s omitido", routing_key)
        return
    conn = None
    try:
        conn = pika.BlockingConnection(_connection_parameters())
        ch = conn.channel()
        ch.exchange_declare(exchange=settings.RABBIT_EXCHANGE, exchange_type="topic", durable=True)
        ch.basic_publish(
            exchange=settings.RABBIT_EXCHANGE,
            routing_key=routing_key,
            body=json.dumps(payload).encode("utf-8"),
            properties=pika.BasicProperties(
                content_type="application/json",
                delivery_mode=2,  # persistente si la cola es durable
            ),
        )
    except Exception as e:  # noqa: BLE001
        # Loguea y sigue; el endpoint no falla por el broker
        logger.warning("Error publicando %s: %s", routing_key, e)
    finally:
        if conn is not None and conn.is_open:
            try:
                conn.close()
            except Exception as e:  # noqa: BLE001
                logger.debug("Error cerrando conexión: %s", e)


def publish_order_created(order: dict) -> None:
    _publish(ORDER_CREATED, order)
