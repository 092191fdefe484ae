import json
import math
from typing import NamedTuple

from .models import CUSTOMER_NAME_MAX_LENGTH, MIN_AMOUNT


class BadJSON(Exception):
    """Se lanza cuando el cuerpo no es un objeto JSON válido."""
    pass


class FieldError(NamedTuple):
    field: str
    message: str


def parse_json_body(request) -> dict:
    """
    Intenta decodificar el body del request como un objeto JSON y retorna un dict.
    Lanza BadJSON si falla o si el JSON no es un objeto.
    """
    try:
        body = request.body.decode("utf-8") if request.body else "{}"
        data = json.loads(body or "{}")
    except (UnicodeDecodeError, ValueError) as e:
        raise BadJSON(f"JSON inválido: {e}")
    if not isinstance(data, dict):
        raise BadJSON("se esperaba un objeto JSON")
    return data


def _check_customer_name(value) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return "Customer name is required"
    if len(value.strip()) > CUSTOMER_NAME_MAX_LENGTH:
        return f"Customer name must be at most {CUSTOMER_NAME_MAX_LENGTH} characters"
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        # JSON admite surrogates sueltos ("\ud800"); la base de datos no
        return "Customer name contains invalid characters"
    return None


def _check_amount(value) -> str | None:
    if value is None:
        return "Amount is required"
    # bool es subclase de int; "true" no es un monto
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return "Amount must be a number"
    try:
        amount = float(value)
    except OverflowError:
        return "Amount must be a number"
    if not math.isfinite(amount):
        return "Amount must be a number"
    if amount < MIN_AMOUNT:
        return f"Amount must be at least {MIN_AMOUNT}"
    return None


def validate_order_request(payload: dict) -> list[FieldError]:
    """
    Valida el payload de creación de orden.
    - No lanza excepciones: retorna una lista vacía si todo es válido.
    - Un FieldError por campo que falla, en orden customerName, amount.
    """
    errors: list[FieldError] = []

    message = _check_customer_name(payload.get("customerName"))
    if message:
        errors.append(FieldError("customerName", message))

    message = _check_amount(payload.get("amount"))
    if message:
        errors.append(FieldError("amount", message))

    return errors


def errors_to_dict(errors: list[FieldError]) -> dict:
    return {e.field: e.message for e in errors}
