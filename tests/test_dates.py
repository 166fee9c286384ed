"""Tests for date token resolution."""

from datetime import date

import pytest

from core.dates import DATE_FORMATS, BadDateError, resolve_date

REFERENCE = date(2023, 12, 31)


class TestResolveDate:
    """Known formats, precedence, NULL handling and failures."""

    @pytest.mark.parametrize(
        "token, expected",
        [
            ("2023-01-05", date(2023, 1, 5)),
            ("25/12/2023", date(2023, 12, 25)),
            ("12/25/2023", date(2023, 12, 25)),
            ("5-Jan-2023", date(2023, 1, 5)),
            ("5 Jan 2023", date(2023, 1, 5)),
            ("2023/01/05", date(2023, 1, 5)),
            ("01-25-2023", date(2023, 1, 25)),
            ("Jan 5, 2023", date(2023, 1, 5)),
            ("January 5, 2023", date(2023, 1, 5)),
            ("5 January 2023", date(2023, 1, 5)),
            ("2023.01.05", date(2023, 1, 5)),
            ("05.01.2023", date(2023, 1, 5)),
            ("12/25/2023 14:30", date(2023, 12, 25)),
            ("2023-01-05 09:15", date(2023, 1, 5)),
        ],
    )
    def test_supported_formats(self, token, expected):
        assert resolve_date(token, REFERENCE) == expected

    def test_ambiguous_slash_date_is_day_first(self):
        assert resolve_date("01/02/2023", REFERENCE) == date(2023, 2, 1)
        assert resolve_date("10/01/2023", REFERENCE) == date(2023, 1, 10)

    def test_day_first_precedes_month_first(self):
        assert DATE_FORMATS.index("%d/%m/%Y") < DATE_FORMATS.index("%m/%d/%Y")

    def test_month_names_are_case_insensitive(self):
        assert resolve_date("5-JAN-2023", REFERENCE) == date(2023, 1, 5)
        assert resolve_date("5 jan 2023", REFERENCE) == date(2023, 1, 5)

    def test_surrounding_whitespace_is_ignored(self):
        assert resolve_date("  2023-01-05 ", REFERENCE) == date(2023, 1, 5)

    @pytest.mark.parametrize("token", ["NULL", "null", " NULL ", "Null", "", "   ", None])
    def test_null_and_empty_resolve_to_reference(self, token):
        assert resolve_date(token, REFERENCE) == REFERENCE

    def test_reference_defaults_to_today(self):
        assert resolve_date("NULL") == date.today()

    def test_free_form_fallback(self):
        assert resolve_date("2023-01-05T08:00:00", REFERENCE) == date(2023, 1, 5)
        assert resolve_date("Thursday, 5 January 2023", REFERENCE) == date(2023, 1, 5)

    @pytest.mark.parametrize("token", ["BAD-DATE", "garbage", "2023-02-30"])
    def test_bad_dates_raise(self, token):
        with pytest.raises(BadDateError) as exc_info:
            resolve_date(token, REFERENCE)
        assert str(exc_info.value) == f'Bad date: "{token}"'
        assert exc_info.value.raw == token

    def test_bad_date_is_a_value_error(self):
        with pytest.raises(ValueError):
            resolve_date("BAD-DATE", REFERENCE)
