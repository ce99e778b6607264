"""
Scoring functions for extraction candidates.

Scores are unbounded integers; they only rank candidates of the same field.
Every bonus is added when its signal is present, so adding a matching signal
never lowers a score.
"""

from decimal import Decimal
from typing import Callable, List, Optional, Tuple, TypeVar

from .candidates import (
    Candidate,
    AmountCandidate,
    DateCandidate,
    MerchantCandidate,
)
from .money import is_well_formed_amount

__all__ = [
    'score_total_amount', 'score_fallback_amount', 'score_date', 'score_merchant_line',
    'rank_candidates', 'select_best_candidate', 'select_top_candidates',
    'rank_amounts', 'rank_dates', 'rank_merchants',
]

T = TypeVar('T', bound=Candidate)

# Amount scoring weights
STRONG_TOTAL_BASE = 80  # "grand total" / "final total"
TOTAL_BASE = 50  # bare "total"
PLAUSIBLE_RANGE = (Decimal('1.00'), Decimal('500.00'))
PLAUSIBLE_BONUS = 30
WIDE_RANGE = (Decimal('0.50'), Decimal('1000.00'))
WIDE_BONUS = 20
IMPLAUSIBLE_LOW = Decimal('0.10')
IMPLAUSIBLE_HIGH = Decimal('1500.00')
IMPLAUSIBLE_PENALTY = 50
WELL_FORMED_BONUS = 5
ADJACENCY_BONUS = {
    'next': 20,
    'previous': 15,
}

# Date scoring weights
DATE_EARLY_LINES = 10
DATE_EARLY_BONUS = 20

# Merchant scoring weights
MERCHANT_TOP_LINES = 5
MERCHANT_TOP_BONUS = 20
MERCHANT_EARLY_LINES = 10
MERCHANT_EARLY_BONUS = 10
UPPERCASE_BONUS = 15
LENGTH_RANGE = (3, 30)
LENGTH_BONUS = 10
LETTER_BONUS = 5
DIGIT_HEAVY_PENALTY = 20


def _amount_range_score(amount: Decimal, raw_amount: str) -> int:
    score = 0

    if PLAUSIBLE_RANGE[0] <= amount <= PLAUSIBLE_RANGE[1]:
        score += PLAUSIBLE_BONUS
    elif WIDE_RANGE[0] <= amount <= WIDE_RANGE[1]:
        score += WIDE_BONUS

    if amount < IMPLAUSIBLE_LOW or amount > IMPLAUSIBLE_HIGH:
        score -= IMPLAUSIBLE_PENALTY

    if is_well_formed_amount(raw_amount):
        score += WELL_FORMED_BONUS

    return score


def score_total_amount(
    amount: Decimal,
    raw_amount: str,
    strong_keyword: bool,
    adjacency: Optional[str] = None
) -> int:
    """
    Score an amount found on (or next to) a "total" line.

    Scoring factors:
    - Keyword base: 80 for "grand/final total", 50 for bare "total"
    - Range: +30 within 1.00-500.00, else +20 within 0.50-1000.00
    - Penalty: -50 below 0.10 or above 1500.00
    - Formatting: +5 for a plain two-decimal token
    - Adjacency: +20 next line, +15 previous line

    Args:
        amount: Parsed amount
        raw_amount: Amount token as printed
        strong_keyword: Line says "grand total" / "final total"
        adjacency: 'next', 'previous' or None for same-line matches

    Returns:
        Integer confidence
    """
    score = STRONG_TOTAL_BASE if strong_keyword else TOTAL_BASE
    score += _amount_range_score(amount, raw_amount)
    score += ADJACENCY_BONUS.get(adjacency, 0)
    return score


def score_fallback_amount(amount: Decimal, raw_amount: str) -> int:
    """Score an amount found without any total keyword (range and format only)."""
    return _amount_range_score(amount, raw_amount)


def score_date(format_index: int, format_count: int, line_index: int) -> int:
    """
    Score a parsed date.

    Earlier formats in the table score higher; dates within the first
    10 lines get +20 since receipts print the date near the header.
    """
    score = format_count - format_index
    if line_index < DATE_EARLY_LINES:
        score += DATE_EARLY_BONUS
    return score


def score_merchant_line(text: str, line_index: int, indicator_weight: int = 0) -> int:
    """
    Score a line as a potential merchant name.

    Scoring factors:
    - Merchant indicator (known chain or business word): indicator_weight
    - Position: +20 within the first 5 lines, +10 within the first 10
    - Upper case (longer than 2 chars): +15
    - Length 3-30: +10
    - Contains a letter: +5
    - More than half digits: -20

    Args:
        text: Trimmed line text
        line_index: Position in the line list
        indicator_weight: Weight of the matching indicator pattern, 0 if none

    Returns:
        Integer score
    """
    score = indicator_weight

    if line_index < MERCHANT_TOP_LINES:
        score += MERCHANT_TOP_BONUS
    elif line_index < MERCHANT_EARLY_LINES:
        score += MERCHANT_EARLY_BONUS

    length = len(text)

    if text.isupper() and length > 2:
        score += UPPERCASE_BONUS

    if LENGTH_RANGE[0] <= length <= LENGTH_RANGE[1]:
        score += LENGTH_BONUS

    if any(ch.isalpha() for ch in text):
        score += LETTER_BONUS

    digits = sum(ch.isdigit() for ch in text)
    if length and digits > length / 2:
        score -= DIGIT_HEAVY_PENALTY

    return score


def rank_candidates(
    candidates: List[T],
    tie_break: Optional[Callable[[T], object]] = None
) -> List[T]:
    """
    Rank candidates by confidence descending.

    Python's sort is stable, so without a tie_break equal scores keep
    discovery order (first found wins).
    """
    if tie_break is None:
        return sorted(candidates, key=lambda c: -c.confidence)
    return sorted(candidates, key=lambda c: (-c.confidence, tie_break(c)))


def select_best_candidate(candidates: List[T]) -> Optional[T]:
    """Return the first candidate of an already ranked list, or None."""
    if not candidates:
        return None
    return candidates[0]


def select_top_candidates(candidates: List[T], top_n: int = 3) -> List[Tuple[T, int]]:
    """
    Select top N candidates of an already ranked list.

    Returns:
        List of (candidate, confidence) tuples
    """
    return [(c, c.confidence) for c in candidates[:top_n]]


def rank_amounts(candidates: List[AmountCandidate]) -> List[AmountCandidate]:
    """Rank total-amount candidates (ties: first found wins)."""
    return rank_candidates(candidates)


def rank_dates(candidates: List[DateCandidate]) -> List[DateCandidate]:
    """Rank date candidates (ties: more recent date wins)."""
    return rank_candidates(candidates, tie_break=lambda c: -c.value.toordinal())


def rank_merchants(candidates: List[MerchantCandidate]) -> List[MerchantCandidate]:
    """Rank merchant candidates (ties: earliest line wins)."""
    return rank_candidates(candidates, tie_break=lambda c: c.line_index)
