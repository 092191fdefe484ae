import json
from unittest import mock

import pika.exceptions

from orders.publisher import ORDER_CREATED, publish_order_created

ORDER = {"id": 1, "customerName": "John", "amount": 123.45, "createdAt": "2026-01-01T00:00:00+00:00"}


def test_skips_when_broker_not_configured():
    with mock.patch("orders.publisher.pika.BlockingConnection") as connect:
        publish_order_created(ORDER)
    connect.assert_not_called()


def test_publishes_order_created(settings):
    settings.RABBIT_HOST = "broker.local"
    settings.RABBIT_EXCHANGE = "order_events"
    with mock.patch("orders.publisher.pika.BlockingConnection") as connect:
        publish_order_created(ORDER)

    conn = connect.return_value
    channel = conn.channel.return_value
    channel.exchange_declare.assert_called_once_with(exchange="order_events", exchange_type="topic", durable=True)
    kwargs = channel.basic_publish.call_args.kwargs
    assert kwargs["routing_key"] == ORDER_CREATED
    assert json.loads(kwargs["body"]) == ORDER
    assert kwargs["properties"].delivery_mode == 2
    conn.close.assert_called_once()


def test_broker_failure_is_swallowed(settings):
    settings.RABBIT_HOST = "broker.local"
    with mock.patch(
        "orders.publisher.pika.BlockingConnection",
        side_effect=pika.exceptions.AMQPConnectionError("refused"),
    ):
        publish_order_created(ORDER)


def test_publish_failure_still_closes_connection(settings):
    settings.RABBIT_HOST = "broker.local"
    with mock.patch("orders.publisher.pika.BlockingConnection") as connect:
        conn = connect.return_value
        conn.channel.return_value.basic_publish.side_effect = pika.exceptions.ChannelClosed(404, "no exchange")
        publish_order_created(ORDER)
    conn.close.assert_called_once()
