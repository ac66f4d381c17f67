from django.db import models


class OrderModel(models.Model):
    """Persisted order row. One record per order, keyed by the domain UUID."""

    class Status(models.TextChoices):
        PENDING = "PENDING"
        CONFIRMED = "CONFIRMED"

    # UUID PK generated by the domain, not by the database
    id = models.UUIDField(primary_key=True, editable=False)
    client_id = models.CharField(max_length=128)
    total = models.DecimalField(max_digits=19, decimal_places=2)
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField()

    class Meta:
        db_table = "orders"
        ordering = ["-created_at"]
