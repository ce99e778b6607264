"""
Tests for transaction date extraction.

Day-first formats are tried before month-first ones; ambiguous dates such
as 05/02/24 resolve to 5 February. This is a known heuristic limitation.
"""

from datetime import date, datetime

import pytest

from receiptscan.services.dates import DateExtractor
from receiptscan.services.preprocess import split_lines

NOW = datetime(2025, 6, 1, 12, 0)


def extract(text: str, now: datetime = NOW):
    return DateExtractor(currency_symbol='£').extract(split_lines(text), now=now)


class TestFormats:
    """Date shapes and their parse order."""

    @pytest.mark.parametrize("text,expected", [
        ("25/12/20", date(2020, 12, 25)),
        ("13/05/20", date(2020, 5, 13)),
        ("25/12/2020", date(2020, 12, 25)),
        ("2024-03-15", date(2024, 3, 15)),
        ("15.03.24", date(2024, 3, 15)),
        ("150324", date(2024, 3, 15)),
        ("25-12-20", date(2020, 12, 25)),
    ])
    def test_day_first_formats(self, text, expected):
        assert extract(text) == expected

    def test_ambiguous_date_is_day_first(self):
        assert extract("05/02/24") == date(2024, 2, 5)

    def test_month_first_when_day_first_impossible(self):
        assert extract("12/25/20") == date(2020, 12, 25)

    def test_date_inside_line(self):
        assert extract("DATE: 03/04/24 14:32 TILL 3") == date(2024, 4, 3)


class TestValidity:
    """Out-of-range dates are never returned."""

    def test_year_before_2000_rejected(self):
        assert extract("01/01/1999") is None

    def test_year_after_next_year_rejected(self):
        assert extract("01/01/2030") is None

    def test_future_date_rejected(self):
        assert extract("25/12/25") is None

    def test_future_day_first_falls_back_to_valid_month_first(self):
        """01/07/25 is 1 July (future), so 7 January wins."""
        assert extract("01/07/25") == date(2025, 1, 7)

    def test_default_now_accepts_past_dates(self):
        extractor = DateExtractor(currency_symbol='£')
        assert extractor.extract(split_lines("25/12/20")) == date(2020, 12, 25)


class TestLineExclusion:
    """Lines about items, totals or prices are not searched."""

    @pytest.mark.parametrize("text", [
        "TOTAL 05/02/24",
        "2 ITEMS 05/02/24",
        "£5.00 05/02/24",
    ])
    def test_excluded_lines(self, text):
        assert extract(text) is None


class TestRanking:
    """Position bonus and recency tie-break."""

    def test_header_date_preferred(self):
        lines = ["01/02/24"] + ["MILK"] * 11 + ["03/04/24"]
        assert extract("\n".join(lines)) == date(2024, 2, 1)

    def test_tie_prefers_more_recent_date(self):
        assert extract("01/02/24\n03/04/24") == date(2024, 4, 3)

    def test_candidates_carry_format(self):
        candidates = DateExtractor(currency_symbol='£').candidates(split_lines("05/02/24"), now=NOW)

        assert [c.value for c in candidates] == [date(2024, 2, 5), date(2024, 5, 2)]
        assert candidates[0].date_format == '%d/%m/%y'
        assert candidates[0].confidence > candidates[1].confidence

    def test_no_dates(self):
        assert extract("WALMART\nTHANK YOU") is None
        assert DateExtractor().extract([]) is None
