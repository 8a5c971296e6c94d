"""Tests for normalize.py — pure input normalizers."""

import pytest

from asosuite_cli.models import AppLocator
from asosuite_cli.normalize import (
    normalize_date_only,
    normalize_keyword,
    normalize_keyword_list,
    normalize_period,
    normalize_planned_id,
    normalize_platform,
    normalize_region,
    parse_app_locator,
)


class TestNormalizeRegion:
    def test_lowercase_upcased(self):
        assert normalize_region("se") == "SE"

    def test_strips_whitespace(self):
        assert normalize_region("  us ") == "US"

    @pytest.mark.parametrize("raw", ["swe", "s", "", "1A", None, "é1"])
    def test_invalid(self, raw):
        assert normalize_region(raw) is None

    @pytest.mark.parametrize("raw", ["ß", "ﬀ", "Ｓｅ"])
    def test_non_ascii_not_coerced(self, raw):
        assert normalize_region(raw) is None


class TestNormalizePlatform:
    def test_default_when_missing(self):
        assert normalize_platform(None, "iphone") == "iphone"

    def test_case_insensitive(self):
        assert normalize_platform("IPad") == "ipad"

    def test_unknown(self):
        assert normalize_platform("android", "iphone") is None


class TestParseAppLocator:
    def test_numeric_id(self):
        assert parse_app_locator("1606429298") == AppLocator(app_id="1606429298")

    def test_prefixed_id(self):
        assert parse_app_locator("id1606429298").app_id == "1606429298"

    def test_prefixed_id_uppercase(self):
        assert parse_app_locator("ID1606429298").app_id == "1606429298"

    def test_store_url(self):
        url = "https://apps.apple.com/us/app/watchletic-run-tracker/id1606429298"
        assert parse_app_locator(url).app_id == "1606429298"

    def test_store_url_with_query(self):
        url = "https://apps.apple.com/se/app/x/id1606429298?mt=8"
        assert parse_app_locator(url).app_id == "1606429298"

    def test_embedded_id_in_text(self):
        assert parse_app_locator("see id1234567 here").app_id == "1234567"

    def test_embedded_id_needs_word_boundary(self):
        assert parse_app_locator("myid1234567") is None

    def test_too_short(self):
        assert parse_app_locator("12345") is None
        assert parse_app_locator("id12345") is None

    def test_plain_keyword(self):
        assert parse_app_locator("run tracker") is None

    def test_url_without_id(self):
        assert parse_app_locator("https://example.com/foo") is None

    def test_non_ascii_digits_rejected(self):
        assert parse_app_locator("١٢٣٤٥٦٧") is None
        assert parse_app_locator("id١٢٣٤٥٦٧") is None

    def test_malformed_url_falls_through(self):
        assert parse_app_locator("http://[bad id1234567").app_id == "1234567"

    def test_empty(self):
        assert parse_app_locator("") is None
        assert parse_app_locator(None) is None

    def test_result_is_store_app(self):
        locator = parse_app_locator("1606429298")
        assert locator.is_planned is False
        assert locator.to_payload() == {"appId": "1606429298"}


class TestNormalizePlannedId:
    def test_strips_all_whitespace(self):
        assert normalize_planned_id(" my next app ") == "mynextapp"

    def test_empty(self):
        assert normalize_planned_id("   ") is None

    def test_max_length(self):
        assert normalize_planned_id("a" * 64) == "a" * 64
        assert normalize_planned_id("a" * 65) is None


class TestNormalizeKeyword:
    def test_collapses_whitespace(self):
        assert normalize_keyword("  run   tracker ") == "run tracker"

    def test_strips_quotes(self):
        assert normalize_keyword("\"run tracker'") == "run tracker"

    def test_list_drops_empty(self):
        assert normalize_keyword_list(["a", "  ", '""', " b  c "]) == ["a", "b c"]

    def test_list_none(self):
        assert normalize_keyword_list(None) == []


class TestNormalizeDateOnly:
    def test_valid(self):
        assert normalize_date_only("2026-02-28") == "2026-02-28"

    def test_impossible_date(self):
        assert normalize_date_only("2026-02-30") is None

    @pytest.mark.parametrize("raw", ["2026-2-3", "20260203", "2026-02-03T00:00:00Z", "", None])
    def test_wrong_shape(self, raw):
        assert normalize_date_only(raw) is None


class TestNormalizePeriod:
    @pytest.mark.parametrize("raw,expected", [(7, 7), ("30", 30), (" 90 ", 90)])
    def test_valid(self, raw, expected):
        assert normalize_period(raw) == expected

    @pytest.mark.parametrize("raw", [14, "14", "7.0", "", True, None, -7, "٣٠"])
    def test_invalid(self, raw):
        assert normalize_period(raw) is None
