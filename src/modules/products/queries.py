"""Read specifications for listing and searching products.

A ``ReadSpec`` describes *which* products to read and in *what order*
without touching the database; repositories execute it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from django.db.models import Case, IntegerField, Q, Value, When
from django.db.models.functions import Lower

NAME_MATCH_RANK = 0
OTHER_MATCH_RANK = 1

# SQLite's built-in lower() only folds ASCII letters.
SQLITE_LOWER_FUNCTION = "unicode_lower"

SEARCHED_FIELDS = ("name", "description", "category")


class UnicodeLower(Lower):
    """``LOWER()`` that also folds non-ASCII letters on SQLite."""

    def as_sqlite(self, compiler, connection, **extra_context):
        return super().as_sql(
            compiler, connection, function=SQLITE_LOWER_FUNCTION, **extra_context
        )


def _unicode_lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


def register_sqlite_functions(sender, connection, **kwargs) -> None:
    """``connection_created`` receiver installing ``unicode_lower`` on SQLite."""
    if connection.vendor == "sqlite":
        connection.connection.create_function(
            SQLITE_LOWER_FUNCTION, 1, _unicode_lower, deterministic=True
        )


@dataclass(frozen=True)
class ReadSpec:
    """Filter predicate, computed columns and ordering for one read.

    ``filters`` may refer to the ``annotations``, which are applied first
    and in order.
    """

    filters: Q = field(default_factory=Q)
    annotations: Dict[str, Any] = field(default_factory=dict)
    ordering: Tuple[str, ...] = ("name",)


def build_list_spec(active_only: bool) -> ReadSpec:
    """All products, or only active ones, ordered by name."""
    filters = Q(is_active=True) if active_only else Q()
    return ReadSpec(filters=filters, ordering=("name",))


def build_search_spec(search_term: str) -> ReadSpec:
    """Active products whose name, description or category contain the term.

    Matching compares lower-cased text on both sides, so it ignores case
    for any alphabet.  Name matches rank first; ties are broken
    alphabetically by name.
    """
    term = search_term.lower()
    annotations: Dict[str, Any] = {
        f"{name}_lower": UnicodeLower(name) for name in SEARCHED_FIELDS
    }
    matches = Q()
    for name in SEARCHED_FIELDS:
        matches |= Q(**{f"{name}_lower__contains": term})

    annotations["name_rank"] = Case(
        When(name_lower__contains=term, then=Value(NAME_MATCH_RANK)),
        default=Value(OTHER_MATCH_RANK),
        output_field=IntegerField(),
    )
    return ReadSpec(
        filters=Q(is_active=True) & matches,
        annotations=annotations,
        ordering=("name_rank", "name"),
    )
