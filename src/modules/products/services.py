"""Product service layer (Use Cases).

Orchestrates the request pipeline for the Product aggregate, delegating
persistence to the injected ``IProductRepository``:

- validation runs first and reports every violation at once;
- reads build a ``ReadSpec`` and fetch exactly one page of it;
- writes check name uniqueness before mutating, never after.

Domain exceptions raised here are translated to RPC statuses by the
caller; anything else is a storage or programming fault.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Any, List

import structlog
from django.db import IntegrityError, transaction
from django.utils import timezone

from modules.products.constants import PRICE_QUANTUM
from modules.products.exceptions import (
    InvalidProductRequest,
    ProductAlreadyExists,
    ProductNotFound,
)
from modules.products.models import Product
from modules.products.pagination import PageRequest
from modules.products.queries import build_list_spec, build_search_spec
from modules.products.validators import validate_request

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

    from modules.products.dtos import (
        CreateProductRequest,
        DeleteProductRequest,
        GetProductRequest,
        GetProductsRequest,
        SearchProductsRequest,
        UpdateProductRequest,
    )
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def to_price(value: float) -> Decimal:
    """Convert a wire price to the two-decimal storage representation."""
    return Decimal(str(value)).quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_product(self, request: GetProductRequest) -> Product:
        """Retrieve a single product by ID, active or not.

        Raises:
            InvalidProductRequest: if the id is not positive.
            ProductNotFound: if the product does not exist.
        """
        log = logger.bind(product_id=request.id)
        self._validate(request, log)

        product = self._get_existing(request.id, log)
        log.info("product.retrieved")
        return product

    def list_products(self, request: GetProductsRequest) -> List[Product]:
        """Return one page of products ordered by name."""
        log = logger.bind(
            page_number=request.page_number,
            page_size=request.page_size,
            active_only=request.active_only,
        )
        self._validate(request, log)

        page = PageRequest.normalize(request.page_number, request.page_size)

        spec = build_list_spec(request.active_only)
        products = self._repo.query(spec, page.offset, page.limit)
        log.info("products.listed", count=len(products))
        return products

    def search_products(self, request: SearchProductsRequest) -> List[Product]:
        """Return one page of active products matching the search term.

        Products whose name contains the term come first.
        """
        log = logger.bind(
            search_term=request.search_term,
            page_number=request.page_number,
            page_size=request.page_size,
        )
        self._validate(request, log)

        page = PageRequest.normalize(request.page_number, request.page_size)

        spec = build_search_spec(request.search_term)
        products = self._repo.query(spec, page.offset, page.limit)
        log.info("products.searched", count=len(products))
        return products

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, request: CreateProductRequest) -> Product:
        """Create a new, active product after enforcing name uniqueness.

        Raises:
            InvalidProductRequest: if any field rule fails.
            ProductAlreadyExists: if any product, active or not, has the name.
        """
        log = logger.bind(name=request.name)
        self._validate(request, log)

        if self._repo.get_by_name(request.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists(
                f"A product named '{request.name}' already exists"
            )

        product = Product(
            name=request.name,
            description=request.description,
            price=to_price(request.price),
            stock=request.stock,
            category=request.category,
            created_at=timezone.now(),
            updated_at=None,
            is_active=True,
        )
        product = self._save(product, log)
        log.info("product.created", product_id=product.id)
        return product

    @transaction.atomic
    def update_product(self, request: UpdateProductRequest) -> Product:
        """Overwrite every mutable field of an existing product.

        The uniqueness check only runs when the name actually changes.

        Raises:
            InvalidProductRequest: if any field rule fails.
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if another product holds the new name.
        """
        log = logger.bind(product_id=request.id)
        self._validate(request, log)

        product = self._get_existing(request.id, log)

        if product.name != request.name and self._repo.get_by_name(
            request.name, exclude_id=product.id
        ):
            log.warning("product.duplicate_name", name=request.name)
            raise ProductAlreadyExists(
                f"Another product named '{request.name}' already exists"
            )

        product.name = request.name
        product.description = request.description
        product.price = to_price(request.price)
        product.stock = request.stock
        product.category = request.category
        product.is_active = request.is_active
        product.updated_at = timezone.now()

        product = self._save(product, log)
        log.info("product.updated")
        return product

    @transaction.atomic
    def delete_product(self, request: DeleteProductRequest) -> None:
        """Logically delete a product; repeating the call is harmless.

        Raises:
            InvalidProductRequest: if the id is not positive.
            ProductNotFound: if the product does not exist.
        """
        log = logger.bind(product_id=request.id)
        self._validate(request, log)

        self._get_existing(request.id, log)
        self._repo.delete(request.id)
        log.info("product.deleted")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _validate(self, request: Any, log: BoundLogger) -> None:
        violations = validate_request(request)
        if violations:
            log.warning("product.validation_failed", violations=violations)
            raise InvalidProductRequest(violations)

    def _get_existing(self, id: int, log: BoundLogger) -> Product:
        product = self._repo.get_by_id(id)
        if not product:
            log.warning("product.not_found")
            raise ProductNotFound(f"Product with ID {id} does not exist")
        return product

    def _save(self, product: Product, log: BoundLogger) -> Product:
        """Persist ``product``, reporting a lost uniqueness race as a conflict.

        Two concurrent writers can both pass the name check; the unique
        index then rejects the second one.  Other integrity errors propagate.
        """
        try:
            return self._repo.save(product)
        except IntegrityError as exc:
            if self._repo.get_by_name(product.name, exclude_id=product.id):
                log.warning("product.duplicate_name_on_write", name=product.name)
                raise ProductAlreadyExists(
                    f"A product named '{product.name}' already exists"
                ) from exc
            raise
