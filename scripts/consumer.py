# scripts/consumer.py
"""Imprime los eventos order.created que publica la API.

Requiere el paquete instalado (pip install -e .) para importar orders.broker.
"""
import json
import os

import pika

from orders.broker import connection_parameters

RABBIT_HOST   = os.getenv("RABBIT_HOST", "127.0.0.1")
RABBIT_PORT   = int(os.getenv("RABBIT_PORT", "5672"))
RABBIT_USER   = os.getenv("RABBIT_USER", "guest")
RABBIT_PASS   = os.getenv("RABBIT_PASS", "guest")
RABBIT_VHOST  = os.getenv("RABBIT_VHOST", "/")
EXCHANGE      = os.getenv("RABBIT_EXCHANGE", "order_events")

BIND_KEYS = ["order.created"]


def format_event(routing_key: str, body: bytes) -> str:
    """Línea legible para un evento; si el body no es JSON se muestra tal cual."""
    text = body.decode("utf-8", errors="replace")
    try:
        order = json.loads(text)
    except ValueError:
        return f"[x] {routing_key} {text}"
    if not isinstance(order, dict):
        return f"[x] {routing_key} {text}"
    return (
        f"[x] {routing_key} id={order.get('id')} "
        f"customer={order.get('customerName')!r} amount={order.get('amount')} "
        f"at={order.get('createdAt')}"
    )


def handle_message(channel, method, properties, body) -> None:
    print(format_event(method.routing_key, body))
    channel.basic_ack(delivery_tag=method.delivery_tag)


def bind_inspection_queue(channel) -> str:
    """Declara el exchange y una cola exclusiva/autodelete ligada a BIND_KEYS; retorna su nombre."""
    channel.exchange_declare(exchange=EXCHANGE, exchange_type="topic", durable=True)
    qname = channel.queue_declare(queue="", exclusive=True, auto_delete=True).method.queue
    for key in BIND_KEYS:
        channel.queue_bind(exchange=EXCHANGE, queue=qname, routing_key=key)
    return qname


def main():
    params = connection_parameters(RABBIT_HOST, RABBIT_PORT, RABBIT_VHOST, RABBIT_USER, RABBIT_PASS)
    conn = pika.BlockingConnection(params)
    ch = conn.channel()
    qname = bind_inspection_queue(ch)

    print(f"Escuchando {BIND_KEYS} en {EXCHANGE} (cola {qname}). Ctrl+C para salir.")
    ch.basic_consume(queue=qname, on_message_callback=handle_message, auto_ack=False)
    try:
        ch.start_consuming()
    except KeyboardInterrupt:
        print("\nCerrando…")
        ch.stop_consuming()
    finally:
        if conn.is_open:
            conn.close()


if __name__ == "__main__":
    main()
