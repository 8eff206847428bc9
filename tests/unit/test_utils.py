"""
Tests for the coercion and date helpers.
"""

from datetime import date, datetime, time, timezone
from decimal import Decimal

import pytest
from django.test import override_settings

from rail_rest.utils.coercion import coerce_bool_strict, coerce_number, is_numeric
from rail_rest.utils.datetime_utils import (
    end_of_day,
    make_aware_if_needed,
    parse_date,
    parse_iso_datetime,
    start_of_day,
)

pytestmark = pytest.mark.unit


class TestCoercion:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("42", 42),
            (" -7 ", -7),
            ("19.99", 19.99),
            ("1e3", 1000.0),
            (3, 3),
            (Decimal("2.5"), 2.5),
            (True, None),
            ("abc", None),
            ("inf", None),
            (float("nan"), None),
            (None, None),
        ],
    )
    def test_coerce_number(self, value, expected):
        assert coerce_number(value) == expected

    def test_integral_strings_stay_integers(self):
        assert isinstance(coerce_number("42"), int)

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("TRUE", True),
            ("on", True),
            (1, True),
            ("no", False),
            (0, False),
            (False, False),
            ("maybe", None),
            (2, None),
            (None, None),
        ],
    )
    def test_coerce_bool_strict(self, value, expected):
        assert coerce_bool_strict(value) is expected

    def test_is_numeric(self):
        assert is_numeric("1.5")
        assert not is_numeric(False)


class TestDates:
    def test_parse_iso_datetime(self):
        assert parse_iso_datetime("2024-01-15T10:30:00Z") == datetime(
            2024, 1, 15, 10, 30, tzinfo=timezone.utc
        )
        assert parse_iso_datetime("") is None
        assert parse_iso_datetime("yesterday") is None

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-01-15", date(2024, 1, 15)),
            (" 2024-01-15 ", date(2024, 1, 15)),
            ("2024-01-15T10:30:00", date(2024, 1, 15)),
            (datetime(2024, 1, 15, 23, 0), date(2024, 1, 15)),
            (date(2024, 1, 15), date(2024, 1, 15)),
            ("2024-02-30", None),
            (20240115, None),
            (None, None),
        ],
    )
    def test_parse_date(self, value, expected):
        assert parse_date(value) == expected

    def test_day_bounds(self):
        day = date(2024, 1, 15)
        assert start_of_day(day) == datetime(2024, 1, 15, 0, 0)
        assert end_of_day(day).time() == time.max

    def test_make_aware_if_needed(self):
        naive = datetime(2024, 1, 15)
        assert make_aware_if_needed(naive).tzinfo is not None
        assert make_aware_if_needed(naive, enabled=False).tzinfo is None
        with override_settings(USE_TZ=False):
            assert make_aware_if_needed(naive).tzinfo is None
        aware = datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert make_aware_if_needed(aware) is aware
