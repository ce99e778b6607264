"""
Candidate dataclasses for extraction scoring.

Each candidate represents a provisional extracted value for one field, with
an integer confidence used only to rank candidates of that same field.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional


@dataclass(frozen=True)
class Candidate:
    """Base class for extraction candidates."""
    value: Any
    confidence: int
    source_text: str  # Line (or "line -> adjacent line") the value came from
    line_index: int
    pattern_name: str = ""


@dataclass(frozen=True)
class AmountCandidate(Candidate):
    """
    Candidate for the total amount.

    Scoring factors:
    - keyword strength: "grand total"/"final total" vs bare "total"
    - plausible receipt range bonus / implausible amount penalty
    - well-formed two-decimal formatting
    - adjacency: amount recovered from the line after/before a standalone
      total marker ('next' / 'previous'), None for same-line matches
    """
    value: Decimal
    adjacency: Optional[str] = None


@dataclass(frozen=True)
class DateCandidate(Candidate):
    """
    Candidate for the transaction date.

    Scoring factors:
    - date_format: strptime format that produced the date (table order = priority)
    - line position: early lines get a bonus
    """
    value: date
    date_format: str = ""


@dataclass(frozen=True)
class MerchantCandidate(Candidate):
    """
    Candidate for the merchant name.

    Scoring factors:
    - merchant indicator match (known chains, business-type words)
    - line position, upper case, length, letters, digit ratio
    """
    value: str
    indicator: Optional[str] = None  # Name of the indicator pattern that matched
