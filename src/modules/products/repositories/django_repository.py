"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: look-ups return ``None``
for missing rows and the Service Layer decides how to report that.
Database errors propagate unchanged.
"""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.db import transaction

from modules.products.models import Product
from modules.products.queries import ReadSpec
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Product]:
        return Product.objects.filter(id=id).first()

    def get_by_name(
        self, name: str, exclude_id: Optional[int] = None
    ) -> Optional[Product]:
        queryset = Product.objects.filter(name=name)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        return queryset.first()

    def query(self, spec: ReadSpec, offset: int, limit: int) -> List[Product]:
        """Run a read specification and slice one page out of it."""
        queryset = Product.objects.all()
        for alias, expression in spec.annotations.items():
            queryset = queryset.annotate(**{alias: expression})
        queryset = queryset.filter(spec.filters)
        queryset = queryset.order_by(*spec.ordering)
        return list(queryset[offset : offset + limit])

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product.

        Runs in its own savepoint so a failed write leaves the enclosing
        transaction usable.
        """
        entity.save()
        logger.info("product.saved", product_id=entity.id, name=entity.name)
        return entity

    @transaction.atomic
    def delete(self, id: int) -> bool:
        """Logically delete a product by clearing ``is_active``.

        Returns ``True`` if the product exists (already inactive included),
        ``False`` otherwise.  ``updated_at`` is left untouched.
        """
        product = self.get_by_id(id)
        if not product:
            return False
        product.is_active = False
        product.save(update_fields=["is_active"])
        logger.info("product.deactivated", product_id=id)
        return True
