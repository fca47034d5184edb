"""Product model for the catalog.

Storage-level rules:
- ``name`` is unique across active and inactive products.
- ``price`` and ``stock`` are never negative.
- ``is_active`` is cleared by logical deletion; rows are never removed.
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone

from modules.products.constants import (
    CATEGORY_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_DECIMAL_PLACES,
    PRICE_MAX_DIGITS,
)


class Product(models.Model):
    """Product aggregate root.

    ``unique=True`` on ``name`` creates the UNIQUE INDEX that backs the
    service-level duplicate check.  ``updated_at`` stays ``NULL`` until the
    first full update; deactivation does not touch it.
    """

    name = models.CharField(max_length=NAME_MAX_LENGTH, unique=True)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=PRICE_MAX_DIGITS,
        decimal_places=PRICE_DECIMAL_PLACES,
    )
    stock = models.PositiveIntegerField(default=0)
    category = models.CharField(max_length=CATEGORY_MAX_LENGTH)
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(null=True, blank=True, default=None)
    is_active = models.BooleanField(default=True)

    class Meta:
        db_table = "products"
        ordering = ["name"]
        indexes = [
            models.Index(fields=["is_active"], name="products_is_active_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.id} - {self.name}"
