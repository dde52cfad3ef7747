"""Unit tests for the endpoint builder, response checks and number formatting."""

from __future__ import annotations

import math
from datetime import datetime, timezone

import pytest

from core.errors import ToolArgumentError, UnexpectedResponseError
from core.models import HolidayQuota
from utils.formatting import (
    days_until,
    divide,
    format_fixed,
    format_value,
    parse_date,
    plural,
    raw_json_block,
    round_half_up,
)
from utils.get_endpoint import get_endpoint
from utils.http_client import HttpResponse
from utils.response_utils import ensure_payload, parse_payload, require_argument


class TestGetEndpoint:
    def test_no_params(self):
        assert get_endpoint("get-staffs") == "/tools/analytics/get-staffs"

    def test_absent_values_omitted(self):
        assert get_endpoint("get-staffs-left-holidays", year=None, name=None) == "/tools/analytics/get-staffs-left-holidays"

    def test_order_follows_call(self):
        assert get_endpoint("x", year=2025, name="Ann") == "/tools/analytics/x?year=2025&name=Ann"

    def test_values_are_encoded(self):
        assert get_endpoint("x", name="Jane Doe & Co/1") == "/tools/analytics/x?name=Jane%20Doe%20%26%20Co%2F1"

    def test_flags_only_when_true(self):
        path = get_endpoint("x", **{"name": "a", "available-only": True, "booked-only": False})
        assert path == "/tools/analytics/x?name=a&available-only=true"

    def test_empty_string_omitted(self):
        assert get_endpoint("x", name="") == "/tools/analytics/x"


class TestRequireArgument:
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing(self, value):
        with pytest.raises(ToolArgumentError, match="Staff name is required"):
            require_argument(value, "Staff name is required")

    def test_present(self):
        assert require_argument("Ann", "x") == "Ann"

    def test_is_a_value_error(self):
        assert issubclass(ToolArgumentError, ValueError)


class TestEnsurePayload:
    def test_no_response(self):
        with pytest.raises(UnexpectedResponseError, match="No data received from the API"):
            ensure_payload(None)

    @pytest.mark.parametrize("data", [None, False, 0, ""])
    def test_no_data(self, data):
        with pytest.raises(UnexpectedResponseError, match="No data received from the API"):
            ensure_payload(HttpResponse(200, data))

    @pytest.mark.parametrize("data", [[], {}, {"a": 1}])
    def test_empty_collections_are_data(self, data):
        assert ensure_payload(HttpResponse(200, data)) == data

    @pytest.mark.parametrize("status", [201, 202, 204, 299])
    def test_strict_200(self, status):
        with pytest.raises(UnexpectedResponseError, match=f"Unexpected status code: {status}"):
            ensure_payload(HttpResponse(status, {"a": 1}))

    def test_missing_data_checked_before_status(self):
        with pytest.raises(UnexpectedResponseError, match="No data received"):
            ensure_payload(HttpResponse(204, None))


class TestParsePayload:
    def test_valid(self):
        quota = parse_payload(HolidayQuota, {"quota_total": 20, "taken": 5, "extra": "ignored"})
        assert quota.quota_total == 20
        assert quota.left is None

    def test_wrong_shape(self):
        with pytest.raises(UnexpectedResponseError, match="HolidayQuota"):
            parse_payload(HolidayQuota, ["not", "an", "object"])

    def test_wrong_field_type(self):
        with pytest.raises(UnexpectedResponseError):
            parse_payload(HolidayQuota, {"staff": "Ann"})


class TestFormatting:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, "N/A"),
            (3, "3"),
            (3.0, "3"),
            (2.5, "2.5"),
            (True, "true"),
            (math.nan, "NaN"),
            (math.inf, "Infinity"),
            (-math.inf, "-Infinity"),
            ("text", "text"),
        ],
    )
    def test_format_value(self, value, expected):
        assert format_value(value) == expected

    def test_format_fixed(self):
        assert format_fixed(100.0, 1) == "100.0"
        assert format_fixed(33.3333, 1) == "33.3"
        assert format_fixed(math.nan, 1) == "NaN"
        assert format_fixed(math.inf, 1) == "Infinity"

    def test_divide(self):
        assert divide(9, 3) == 3
        assert math.isnan(divide(0, 0))
        assert divide(5, 0) == math.inf
        assert math.isnan(divide(None, 3))
        assert math.isnan(divide(3, None))

    @pytest.mark.parametrize("value, expected", [(2.5, 3), (3.5, 4), (2.4, 2), (-2.5, -2), (3, 3)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_round_half_up_passes_nan(self):
        assert math.isnan(round_half_up(math.nan))

    def test_plural(self):
        assert plural(1, "day") == "day"
        assert plural(0, "day") == "days"
        assert plural(None, "day") == "days"

    def test_raw_json_block(self):
        assert raw_json_block({"a": 1}) == '**Raw Data:**\n\n```json\n{\n  "a": 1\n}\n```\n'


class TestDates:
    NOW = datetime(2026, 10, 18, 10, 0, tzinfo=timezone.utc)

    def test_date_only_is_utc_midnight(self):
        assert parse_date("2026-10-18") == datetime(2026, 10, 18, tzinfo=timezone.utc)

    def test_zulu_datetime(self):
        assert parse_date("2026-10-18T08:30:00Z") == datetime(2026, 10, 18, 8, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize("value", [None, "", "not a date", 42])
    def test_unparseable(self, value):
        assert parse_date(value) is None

    @pytest.mark.parametrize(
        "value, expected",
        [("2026-10-18", 0), ("2026-10-19", 1), ("2026-10-20", 2), ("2026-10-16", -2), ("2026-10-17", -1)],
    )
    def test_days_until(self, value, expected):
        assert days_until(parse_date(value), self.NOW) == expected
