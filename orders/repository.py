# orders/repository.py
from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction

from .models import Order


class StorageError(Exception):
    """Se lanza cuando el almacenamiento no puede guardar o leer órdenes."""
    pass


class OrderRepository:
    """Acceso a órdenes persistidas vía el ORM de Django."""

    def save(self, order: Order) -> Order:
        """
        Persiste una orden nueva y la retorna con el id asignado por la base de datos.
        Lanza StorageError si falla la conexión o se viola una restricción.
        """
        try:
            order.full_clean()
            with transaction.atomic():
                order.save(force_insert=True)
        except ValidationError as e:
            raise StorageError(f"orden inválida: {e.message_dict}") from e
        except DatabaseError as e:
            raise StorageError(f"no se pudo guardar la orden: {e}") from e
        return order

    def find_all(self) -> list[Order]:
        try:
            return list(Order.objects.all())
        except DatabaseError as e:
            raise StorageError(f"no se pudieron leer las órdenes: {e}") from e
