"""Request validation rules.

Each request message has a pydantic rule model declaring its constraints.
``validate_request`` runs the rule model over the message's fields and
turns every ``ValidationError`` entry into a human-readable violation,
ordered as the fields appear in the message.  An empty list means the
request is valid.

The wire messages themselves stay permissive (proto3 zero defaults) so a
malformed request still reaches this layer and is reported as a whole.
"""

from __future__ import annotations

from typing import Any, Dict, List, Type

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from modules.products.constants import (
    CATEGORY_MAX_LENGTH,
    DESCRIPTION_MAX_LENGTH,
    INT32_MAX,
    NAME_MAX_LENGTH,
    PRICE_UPPER_BOUND,
    STOCK_UPPER_BOUND,
)
from modules.products.dtos import (
    CreateProductRequest,
    DeleteProductRequest,
    GetProductRequest,
    GetProductsRequest,
    SearchProductsRequest,
    UpdateProductRequest,
)

# Violation templates keyed by pydantic error type.
MESSAGES: Dict[str, str] = {
    "greater_than": "{label} must be greater than {gt}",
    "greater_than_equal": "{label} must be greater than or equal to {ge}",
    "less_than": "{label} must be less than {lt}",
    "less_than_equal": "{label} must not exceed {le}",
    "string_too_long": "{label} must not exceed {max_length} characters",
    "finite_number": "{label} must be a finite number",
}


def _label(field_name: str) -> str:
    return field_name.replace("_", " ").capitalize()


def _bound(value: Any) -> Any:
    if value == 0:
        return "zero"
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class _Rules(BaseModel):
    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------------
# Rule models
# ---------------------------------------------------------------------------


class ProductIdRules(_Rules):
    id: int = Field(gt=0, le=INT32_MAX)


class PagingRules(_Rules):
    page_number: int = Field(ge=0, le=INT32_MAX)
    page_size: int = Field(ge=0, le=INT32_MAX)


class SearchRules(PagingRules):
    search_term: str

    @field_validator("search_term", mode="before")
    @classmethod
    def term_must_not_be_blank(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            raise ValueError("Search term is required")
        return v


class ProductFieldRules(_Rules):
    """Rules shared by CreateProduct and UpdateProduct.

    Validates:
    - ``name`` and ``category`` are not blank and fit their columns.
    - ``price`` is finite, non-negative and below the storage bound.
    - ``stock`` is non-negative and fits a 32-bit integer.
    """

    name: str = Field(max_length=NAME_MAX_LENGTH)
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH)
    price: float = Field(allow_inf_nan=False, ge=0, lt=float(PRICE_UPPER_BOUND))
    stock: int = Field(ge=0, le=STOCK_UPPER_BOUND)
    category: str = Field(max_length=CATEGORY_MAX_LENGTH)

    @field_validator("name", "category", mode="before")
    @classmethod
    def must_not_be_blank(cls, v: Any, info: ValidationInfo) -> Any:
        if isinstance(v, str) and not v.strip():
            raise ValueError(f"{_label(info.field_name)} is required")
        return v


class UpdateRules(ProductFieldRules):
    id: int = Field(gt=0, le=INT32_MAX)


RULES: Dict[type, Type[_Rules]] = {
    GetProductRequest: ProductIdRules,
    GetProductsRequest: PagingRules,
    SearchProductsRequest: SearchRules,
    CreateProductRequest: ProductFieldRules,
    UpdateProductRequest: UpdateRules,
    DeleteProductRequest: ProductIdRules,
}


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


def _violation(error: Dict[str, Any]) -> str:
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    label = _label(str(error["loc"][0]))
    template = MESSAGES.get(error["type"])
    if template is None:
        return f"{label}: {error['msg']}"
    ctx = {key: _bound(value) for key, value in error.get("ctx", {}).items()}
    return template.format(label=label, **ctx)


def validate_request(request: Any) -> List[str]:
    """Run the rule model registered for ``type(request)``.

    Raises:
        TypeError: if no rule model is registered for the request type.
    """
    try:
        rules = RULES[type(request)]
    except KeyError:
        raise TypeError(
            f"No validator registered for {type(request).__name__}"
        ) from None

    try:
        rules.model_validate(request.model_dump())
    except ValidationError as exc:
        field_order = list(type(request).model_fields)
        errors = sorted(exc.errors(), key=lambda e: field_order.index(e["loc"][0]))
        return [_violation(error) for error in errors]
    return []
