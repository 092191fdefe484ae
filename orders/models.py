from django.core.validators import MinValueValidator
from django.db import models

# Mínimo único para amount: lo comparten el validador, el modelo y la base de datos
MIN_AMOUNT = 0.1
CUSTOMER_NAME_MAX_LENGTH = 255


class Order(models.Model):
    customer_name = models.CharField(max_length=CUSTOMER_NAME_MAX_LENGTH)
    amount = models.FloatField(validators=[MinValueValidator(MIN_AMOUNT)])
    created_at = models.DateTimeField()  # lo asigna el servicio, no la base de datos

    class Meta:
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gte=MIN_AMOUNT),
                name="order_amount_min",
            ),
        ]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customerName": self.customer_name,
            "amount": self.amount,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }

    def __str__(self):
        return f"{self.id}:{self.customer_name}:{self.amount}"
