import logging

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from .publisher import publish_order_created
from .repository import StorageError
from .validators import BadJSON, errors_to_dict, parse_json_body, validate_order_request

logger = logging.getLogger(__name__)


def _json(data, status=200):
    return JsonResponse(data, status=status, safe=False, json_dumps_params={"ensure_ascii": False})


def _storage_failure(action: str):
    logger.exception("Fallo de almacenamiento al %s", action)
    return _json({"error": "storage unavailable"}, 500)


def _list_orders(service):
    try:
        orders = service.get_all_orders()
    except StorageError:
        return _storage_failure("listar órdenes")
    return _json([o.to_dict() for o in orders])


def _create_order(request, service):
    try:
        body = parse_json_body(request)
    except BadJSON as e:
        logger.info("Payload rechazado: %s", e)
        return _json({"error": "invalid payload"}, 400)

    errors = validate_order_request(body)
    if errors:
        # Error del cliente, no del sistema
        logger.info("Validación fallida: %s", errors_to_dict(errors))
        return _json(errors_to_dict(errors), 400)

    try:
        order = service.create_order(body)
    except StorageError:
        return _storage_failure("crear la orden")

    data = order.to_dict()
    # Publicar evento después de persistir (best effort)
    publish_order_created(data)
    return _json(data)


@require_http_methods(["GET", "POST"])
def order_collection(request, service):
    """
    /api/orders
    - GET: lista todas las órdenes (200).
    - POST: valida, crea y retorna la orden (200); 400 si el payload es inválido.
    - 500 si falla el almacenamiento; el proceso sigue atendiendo.
    El servicio se enlaza en urls.py con functools.partial.
    """
    if request.method == "GET":
        return _list_orders(service)
    return _create_order(request, service)
