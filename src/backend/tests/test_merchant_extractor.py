"""
Tests for merchant name extraction.
"""

import pytest

from receiptscan.services.merchant import MerchantExtractor
from receiptscan.services.preprocess import split_lines
from receiptscan.utils.scoring import score_merchant_line


def extract(text: str):
    return MerchantExtractor().extract(split_lines(text))


class TestScoring:
    """Structural merchant-line scores."""

    def test_known_chain_outscores_generic_line(self):
        """WALMART beats a lower-case generic line at the same position."""
        walmart = MerchantExtractor().candidates(split_lines("WALMART"))[0]
        generic = MerchantExtractor().candidates(split_lines("fresh foods"))[0]

        assert walmart.indicator == 'known_chain'
        assert walmart.confidence == 150
        assert generic.confidence == 35
        assert walmart.confidence > generic.confidence

    def test_position_bonus(self):
        assert score_merchant_line("ACME", 0) == 50
        assert score_merchant_line("ACME", 7) == 40
        assert score_merchant_line("ACME", 12) == 30

    def test_digit_heavy_penalty(self):
        assert score_merchant_line("AB 12345", 0) == 30
        assert score_merchant_line("AB 12345", 0) < score_merchant_line("ABCDEFGH", 0)

    def test_long_line_gets_no_length_bonus(self):
        line = "a very long line of text that goes past thirty characters"
        assert score_merchant_line(line, 0) == 25


class TestSelection:
    """Which line gets picked."""

    def test_first_line_business(self):
        text = "Joe's Diner\n42 Market Street\nTel: 020 7946 0958"
        assert extract(text) == "Joe's Diner"

    def test_brand_line_over_legal_entity(self):
        text = "Sainsbury's\nSainsbury's Supermarkets Ltd\n33 Holborn"
        assert extract(text) == "Sainsbury's"

    def test_tie_goes_to_earliest_line(self):
        assert extract("ACME\nBETA") == "ACME"

    def test_indicator_beats_position(self):
        text = "ACME TRADING\nCORNER SHOP"
        assert extract(text) == "CORNER SHOP"

    def test_non_positive_scores_dropped(self):
        lines = ["1 a"] * 12 + ["x1234"]
        assert MerchantExtractor().candidates(split_lines("\n".join(lines))) == []


class TestSkipPatterns:
    """Lines that are never a merchant name."""

    @pytest.mark.parametrize("line", [
        "THANK YOU FOR SHOPPING",
        "0207 946 0958",
        "Tel: 020 7946 0958",
        "12 High Street",
        "RECEIPT #00123",
        "Save money. Live better.",
        "VISA DEBIT",
        "www.example.com",
        "05/02/24",
        "MILK 1.20",
        "*** CUSTOMER COPY ***",
        "--------",
        "XX",
    ])
    def test_skipped(self, line):
        assert extract(line) is None

    def test_only_skip_lines(self):
        text = "THANK YOU FOR SHOPPING\n0207 946 0958\n12 High Street\nTel: 020 7946 0958"
        assert extract(text) is None

    def test_empty_input(self):
        assert MerchantExtractor().extract([]) is None
