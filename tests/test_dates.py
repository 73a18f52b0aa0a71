"""날짜 정규화 유닛 테스트.

Date normalizer unit tests — canonical DD/MM/YYYY output, local-zone
handling of aware values, fallback for unparseable input, idempotence.
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from audit_report.utils.dates import (
    is_valid_ddmmyyyy,
    normalize_date,
    parse_ddmmyyyy,
    safe_filename_part,
    to_calendar_date,
    today_ddmmyyyy,
)


class TestNormalizeDate:
    """normalize_date 입력 형식별 검증."""

    def test_slash_format_is_zero_padded(self):
        assert normalize_date("1/6/2024") == "01/06/2024"

    def test_canonical_string_unchanged(self):
        assert normalize_date("15/03/2024") == "15/03/2024"

    def test_iso_date_only_uses_calendar_date_as_written(self):
        assert normalize_date("2024-03-15") == "15/03/2024"

    def test_dashed_day_month_year(self):
        assert normalize_date("5-3-2024") == "05/03/2024"

    @pytest.mark.parametrize("text", ["March 15, 2024", "15 Mar 2024", "Fri Mar 15 2024", "2024/03/15"])
    def test_locale_renderings(self, text):
        assert normalize_date(text) == "15/03/2024"

    def test_naive_datetime(self):
        assert normalize_date(datetime(2024, 6, 1, 23, 59)) == "01/06/2024"

    def test_date_value(self):
        assert normalize_date(date(2024, 12, 31)) == "31/12/2024"

    def test_aware_datetime_converted_to_local_zone(self):
        """aware 값은 UTC가 아니라 로컬 시간대의 날짜를 사용."""
        value = datetime(2024, 6, 1, 22, 30, tzinfo=timezone(timedelta(hours=-10)))
        expected = value.astimezone().strftime("%d/%m/%Y")
        assert normalize_date(value) == expected

    def test_aware_iso_string_converted_to_local_zone(self):
        text = "2024-06-01T22:30:00-10:00"
        expected = datetime.fromisoformat(text).astimezone().strftime("%d/%m/%Y")
        assert normalize_date(text) == expected

    def test_zulu_suffix_accepted(self):
        expected = datetime(2024, 6, 1, 12, tzinfo=timezone.utc).astimezone().strftime("%d/%m/%Y")
        assert normalize_date("2024-06-01T12:00:00Z") == expected

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty_input_returns_empty_string(self, value):
        assert normalize_date(value) == ""

    def test_unparseable_input_returned_unchanged(self):
        assert normalize_date("next tuesday") == "next tuesday"

    @pytest.mark.parametrize("value", [
        "1/6/2024", "2024-03-15", "March 15, 2024", "garbage", "", datetime(2024, 1, 2, 3, 4),
    ])
    def test_idempotent(self, value):
        once = normalize_date(value)
        assert normalize_date(once) == once


class TestDateHelpers:
    """보조 함수 검증."""

    def test_parse_ddmmyyyy(self):
        assert parse_ddmmyyyy("15/03/2024") == date(2024, 3, 15)

    def test_parse_rejects_impossible_date(self):
        assert parse_ddmmyyyy("31/02/2024") is None
        assert not is_valid_ddmmyyyy("31/02/2024")

    def test_parse_rejects_other_formats(self):
        assert parse_ddmmyyyy("2024-03-15") is None
        assert parse_ddmmyyyy(None) is None

    def test_to_calendar_date_accepts_any_format(self):
        assert to_calendar_date("2024-03-15") == date(2024, 3, 15)
        assert to_calendar_date("15 Mar 2024") == date(2024, 3, 15)
        assert to_calendar_date("not a date") is None

    def test_today_uses_given_instant(self):
        assert today_ddmmyyyy(datetime(2024, 6, 1, 9, 0)) == "01/06/2024"

    def test_safe_filename_part(self):
        assert safe_filename_part("HSR  Layout", "Branch") == "HSR_Layout"
        assert safe_filename_part("01/06/2024", "date") == "01-06-2024"
        assert safe_filename_part("  ", "Branch") == "Branch"
