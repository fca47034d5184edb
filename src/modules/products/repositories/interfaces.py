"""Product repository interface.

Extends ``IRepository[Product]`` with the look-ups required by the
catalog: name uniqueness checks and paged reads of a ``ReadSpec``.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List, Optional

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product
    from modules.products.queries import ReadSpec


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def get_by_name(
        self, name: str, exclude_id: Optional[int] = None
    ) -> Optional[Product]:
        """Retrieve a product by exact (case-sensitive) name.

        ``exclude_id`` skips the product with that id, so callers can ask
        whether *another* product holds the name.
        """

    @abstractmethod
    def query(self, spec: ReadSpec, offset: int, limit: int) -> List[Product]:
        """Execute ``spec`` and return at most ``limit`` rows from ``offset``."""
