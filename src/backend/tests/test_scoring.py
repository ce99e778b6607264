"""
Tests for candidate scoring and money helpers.

Covers:
- Adding a matching signal never lowers a score
- Ranking tie-breaks per field
- Money parsing and formatting
"""

from datetime import date
from decimal import Decimal

import pytest

from receiptscan.utils.candidates import AmountCandidate, DateCandidate, MerchantCandidate
from receiptscan.utils.money import format_money, is_well_formed_amount, parse_money
from receiptscan.utils.scoring import (
    rank_amounts,
    rank_dates,
    rank_merchants,
    score_date,
    score_fallback_amount,
    score_total_amount,
    select_best_candidate,
    select_top_candidates,
)


class TestAmountScores:

    def test_keyword_adds_to_fallback_score(self):
        amount = Decimal('42.50')
        assert score_total_amount(amount, '42.50', strong_keyword=False) > score_fallback_amount(amount, '42.50')

    def test_strong_keyword_beats_bare_total(self):
        amount = Decimal('20.00')
        assert score_total_amount(amount, '20.00', True) > score_total_amount(amount, '20.00', False)

    def test_adjacency_bonuses(self):
        amount = Decimal('12.99')
        same = score_total_amount(amount, '12.99', False)
        nxt = score_total_amount(amount, '12.99', False, adjacency='next')
        prev = score_total_amount(amount, '12.99', False, adjacency='previous')

        assert nxt > prev > same

    @pytest.mark.parametrize("raw,expected", [
        ('20.00', 85),
        ('0.75', 75),
        ('750.00', 75),
        ('0.05', 5),
        ('2000.00', 5),
    ])
    def test_bare_total_scores(self, raw, expected):
        assert score_total_amount(Decimal(raw), raw, False) == expected

    def test_well_formed_bonus(self):
        amount = Decimal('12.99')
        assert score_fallback_amount(amount, '12.99') > score_fallback_amount(amount, '0012.99')


class TestDateScores:

    def test_earlier_format_scores_higher(self):
        assert score_date(0, 15, 3) > score_date(1, 15, 3)

    def test_early_line_bonus(self):
        assert score_date(0, 15, 9) - score_date(0, 15, 10) == 20


class TestRanking:

    def test_amount_ties_keep_discovery_order(self):
        first = AmountCandidate(Decimal('5.00'), 50, 'TOTAL 5.00', 0)
        second = AmountCandidate(Decimal('6.00'), 50, 'TOTAL 6.00', 1)

        assert rank_amounts([first, second]) == [first, second]

    def test_date_ties_prefer_recent(self):
        older = DateCandidate(date(2024, 1, 1), 30, '01/01/24', 0)
        newer = DateCandidate(date(2024, 3, 1), 30, '01/03/24', 1)

        assert rank_dates([older, newer])[0] is newer

    def test_merchant_ties_prefer_earliest_line(self):
        late = MerchantCandidate('BETA', 50, 'BETA', 1)
        early = MerchantCandidate('ACME', 50, 'ACME', 0)

        assert rank_merchants([late, early])[0] is early

    def test_higher_confidence_wins(self):
        low = MerchantCandidate('ACME', 50, 'ACME', 0)
        high = MerchantCandidate('TESCO', 150, 'TESCO', 3)

        assert select_best_candidate(rank_merchants([low, high])) is high

    def test_select_helpers(self):
        assert select_best_candidate([]) is None

        ranked = [MerchantCandidate(str(i), 10 - i, str(i), i) for i in range(5)]
        top = select_top_candidates(ranked, top_n=3)

        assert [score for _, score in top] == [10, 9, 8]


class TestMoney:

    @pytest.mark.parametrize("text,expected", [
        ('12.99', Decimal('12.99')),
        ('£1,234.56', Decimal('1234.56')),
        ('$ 7.50', Decimal('7.50')),
        ('USD 12.00', Decimal('12.00')),
    ])
    def test_parse_money(self, text, expected):
        assert parse_money(text) == expected

    @pytest.mark.parametrize("text", ['', 'abc', '-5.00', 'NaN'])
    def test_parse_money_rejects(self, text):
        assert parse_money(text) is None

    def test_well_formed_amount(self):
        assert is_well_formed_amount('12.99')
        assert is_well_formed_amount('0.50')
        assert not is_well_formed_amount('0012.99')
        assert not is_well_formed_amount('1,234.56')
        assert not is_well_formed_amount('12345.00')

    def test_format_money(self):
        assert format_money(Decimal('1234.56')) == '£1,234.56'
        assert format_money(Decimal('20'), 'USD') == '$20.00'
        assert format_money(Decimal('3.5'), 'EUR') == '€3.50'
        assert format_money(None) == 'N/A'
