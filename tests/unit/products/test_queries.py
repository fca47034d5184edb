"""Unit tests for read specifications (built, not executed)."""

from __future__ import annotations

import pytest
from django.db.models import Case, Q

from modules.products.queries import (
    ReadSpec,
    UnicodeLower,
    build_list_spec,
    build_search_spec,
)

pytestmark = pytest.mark.unit


class TestListSpec:
    def test_active_only_filters_on_is_active(self):
        spec = build_list_spec(active_only=True)
        assert spec.filters == Q(is_active=True)

    def test_without_active_only_has_no_filter(self):
        spec = build_list_spec(active_only=False)
        assert spec.filters == Q()

    def test_ordered_by_name(self):
        assert build_list_spec(active_only=False).ordering == ("name",)
        assert build_list_spec(active_only=False).annotations == {}


class TestSearchSpec:
    def test_filters_active_and_lowered_fields(self):
        spec = build_search_spec("Lap")
        expected = Q(is_active=True) & (
            Q(name_lower__contains="lap")
            | Q(description_lower__contains="lap")
            | Q(category_lower__contains="lap")
        )
        assert spec.filters == expected

    def test_lowers_non_ascii_term(self):
        spec = build_search_spec("CAFÉ")
        expected = Q(is_active=True) & (
            Q(name_lower__contains="café")
            | Q(description_lower__contains="café")
            | Q(category_lower__contains="café")
        )
        assert spec.filters == expected

    def test_annotates_lowered_columns_before_rank(self):
        spec = build_search_spec("lap")
        assert list(spec.annotations) == [
            "name_lower",
            "description_lower",
            "category_lower",
            "name_rank",
        ]
        assert isinstance(spec.annotations["name_lower"], UnicodeLower)

    def test_ranks_name_matches_then_orders_by_name(self):
        spec = build_search_spec("lap")
        assert spec.ordering == ("name_rank", "name")
        assert isinstance(spec.annotations["name_rank"], Case)


class TestReadSpecDefaults:
    def test_default_spec_reads_everything_by_name(self):
        spec = ReadSpec()
        assert spec.filters == Q()
        assert spec.ordering == ("name",)
