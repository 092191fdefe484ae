# orders/broker.py
import pika


def connection_parameters(host, port, vhost, user, password, **overrides) -> pika.ConnectionParameters:
    """Parámetros de conexión a RabbitMQ compartidos por el publisher y el consumer.
    `overrides` ajusta timeouts y reintentos según quién conecta."""
    options = {
        "heartbeat": 30,
        "blocked_connection_timeout": 10,
    }
    options.update(overrides)
    return pika.ConnectionParameters(
        host=host,
        port=port,
        virtual_host=vhost,
        credentials=pika.PlainCredentials(user, password),
        **options,
    )
