"""Tests unitarios para OrderFilter y WriteOutcome."""

import dataclasses

import pytest

from order_store.domain.models import OrderFilter, OrderStatus, WriteOutcome
from order_store.utils.error_handler import ValidationException


class TestOrderFilter:
    """Filtros opcionales de los procedimientos almacenados."""

    def test_empty_filter_is_unfiltered(self):
        order_filter = OrderFilter()

        assert order_filter.is_unfiltered
        assert order_filter.describe() == "no filters"

    def test_any_field_makes_it_filtered(self):
        assert not OrderFilter(product_id=3).is_unfiltered
        assert not OrderFilter(status=OrderStatus.NotStarted).is_unfiltered

    def test_params_send_none_for_unset_fields(self):
        """Los campos sin valor deben viajar como NULL."""
        params = OrderFilter(year=2023, status=OrderStatus.InProgress).to_params()

        assert params == {"year": 2023, "month": None, "status": 2, "product_id": None}

    def test_status_zero_is_not_treated_as_unset(self):
        """NotStarted tiene ordinal 0 y aun así es un filtro."""
        params = OrderFilter(status=OrderStatus.NotStarted).to_params()

        assert params["status"] == 0

    def test_describe_lists_set_fields(self):
        order_filter = OrderFilter(year=2023, month=7, status=OrderStatus.Done)

        assert order_filter.describe() == "year=2023, month=7, status=Done"

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_month_out_of_range_is_rejected(self, month):
        with pytest.raises(ValidationException) as exc_info:
            OrderFilter(month=month)

        assert exc_info.value.field == "month"

    def test_filter_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            OrderFilter().year = 2023


class TestWriteOutcome:
    def test_only_not_found_is_not_found(self):
        assert WriteOutcome.UPDATED.found
        assert WriteOutcome.DELETED.found
        assert not WriteOutcome.NOT_FOUND.found
