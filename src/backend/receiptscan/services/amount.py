"""
Total amount extraction.

Three tiers, first tier with candidates wins:
1. Amounts on "total" lines (or on the line next to a standalone "TOTAL")
2. Confidence ranking of those candidates
3. Fallback: the largest plausible standalone amount on the receipt
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

from receiptscan.services.patterns import (
    AMOUNT_RE,
    AMOUNT_SKIP_PATTERNS,
    STANDALONE_AMOUNT_RE,
    STANDALONE_TOTAL_RE,
    STRONG_TOTAL_RE,
    TOTAL_KEYWORD_RE,
    first_match,
)
from receiptscan.services.preprocess import RawLine
from receiptscan.utils.candidates import AmountCandidate
from receiptscan.utils.money import parse_money
from receiptscan.utils.scoring import (
    rank_amounts,
    score_fallback_amount,
    score_total_amount,
    select_top_candidates,
)

logger = logging.getLogger(__name__)


class AmountExtractor:
    """Finds the most likely total transaction amount."""

    # Sanity range for any amount read off a total line
    KEYWORD_RANGE = (Decimal('0.01'), Decimal('10000.00'))
    # Fallback scan range, and the narrower range the answer is picked from
    FALLBACK_SCAN_RANGE = (Decimal('0.01'), Decimal('2000.00'))
    FALLBACK_SELECT_RANGE = (Decimal('1.00'), Decimal('1000.00'))

    def extract(self, lines: Sequence[RawLine], _debug: Optional[Dict[str, Any]] = None) -> Optional[Decimal]:
        """
        Extract the total amount.

        Args:
            lines: Preprocessed receipt lines

        Returns:
            Amount as Decimal or None
        """
        candidates = self.candidates(lines)
        if not candidates:
            logger.debug("No amount candidates in %d lines", len(lines))
            return None

        best = candidates[0]

        if _debug is not None:
            _debug['patterns_matched']['amount'] = best.pattern_name
            _debug['confidence_per_field']['amount'] = best.confidence
            _debug['amount_candidates'] = [
                {
                    'value': str(c.value),
                    'score': score,
                    'pattern': c.pattern_name,
                    'line': c.source_text,
                }
                for c, score in select_top_candidates(candidates, top_n=3)
            ]

        logger.debug("Selected amount %s from %r (confidence %d)",
                     best.value, best.source_text, best.confidence)
        return best.value

    def candidates(self, lines: Sequence[RawLine]) -> List[AmountCandidate]:
        """
        Ranked candidates of the first tier that produced any.

        Keyword candidates are ranked by confidence; fallback candidates by
        value (largest plausible figure first).
        """
        skipped = [self.is_skipped(line) for line in lines]

        keyword_candidates = self._keyword_candidates(lines, skipped)
        if keyword_candidates:
            return rank_amounts(keyword_candidates)

        fallback = [
            c for c in self._fallback_candidates(lines, skipped)
            if self.FALLBACK_SELECT_RANGE[0] <= c.value <= self.FALLBACK_SELECT_RANGE[1]
        ]
        return sorted(fallback, key=lambda c: -c.value)

    def is_skipped(self, line: RawLine) -> bool:
        """True if the line can never hold the total (tender, tax, card, ...)."""
        spec = first_match(AMOUNT_SKIP_PATTERNS, line.text)
        if spec is not None:
            logger.debug("Skipping line %d for amount (%s): %r", line.index, spec.name, line.text)
            return True
        return False

    def _keyword_candidates(self, lines: Sequence[RawLine], skipped: List[bool]) -> List[AmountCandidate]:
        candidates: List[AmountCandidate] = []

        for position, line in enumerate(lines):
            if skipped[position]:
                continue

            is_standalone = bool(STANDALONE_TOTAL_RE.match(line.text))
            if not is_standalone and not TOTAL_KEYWORD_RE.search(line.text):
                continue

            strong = bool(STRONG_TOTAL_RE.search(line.text))

            if not is_standalone:
                matches = list(AMOUNT_RE.finditer(line.text))
                if not matches:
                    continue
                # Totals are right-aligned: take the last amount on the line
                raw_amount = matches[-1].group(1)
                candidate = self._keyword_candidate(raw_amount, line, line.text, strong, None)
                if candidate is not None:
                    candidates.append(candidate)
                continue

            # Standalone marker: OCR split the amount onto an adjacent line
            for adjacency, offset in (('next', 1), ('previous', -1)):
                neighbour_pos = position + offset
                if neighbour_pos < 0 or neighbour_pos >= len(lines) or skipped[neighbour_pos]:
                    continue

                neighbour = lines[neighbour_pos]
                match = STANDALONE_AMOUNT_RE.match(neighbour.text)
                if not match:
                    continue

                if adjacency == 'next':
                    source = f"{line.text} -> {neighbour.text}"
                else:
                    source = f"{neighbour.text} -> {line.text}"

                candidate = self._keyword_candidate(match.group(1), neighbour, source, strong, adjacency)
                if candidate is not None:
                    candidates.append(candidate)

        return candidates

    def _keyword_candidate(
        self,
        raw_amount: str,
        line: RawLine,
        source_text: str,
        strong: bool,
        adjacency: Optional[str]
    ) -> Optional[AmountCandidate]:
        amount = parse_money(raw_amount)
        if amount is None:
            return None

        if not self.KEYWORD_RANGE[0] <= amount <= self.KEYWORD_RANGE[1]:
            logger.debug("Amount %s on line %d outside sanity range", amount, line.index)
            return None

        return AmountCandidate(
            value=amount,
            confidence=score_total_amount(amount, raw_amount, strong, adjacency),
            source_text=source_text,
            line_index=line.index,
            pattern_name=f"{adjacency}_line" if adjacency else 'same_line',
            adjacency=adjacency,
        )

    def _fallback_candidates(self, lines: Sequence[RawLine], skipped: List[bool]) -> List[AmountCandidate]:
        candidates: List[AmountCandidate] = []

        for position, line in enumerate(lines):
            if skipped[position]:
                continue

            for match in AMOUNT_RE.finditer(line.text):
                raw_amount = match.group(1)
                amount = parse_money(raw_amount)
                if amount is None:
                    continue
                if not self.FALLBACK_SCAN_RANGE[0] <= amount <= self.FALLBACK_SCAN_RANGE[1]:
                    continue

                candidates.append(AmountCandidate(
                    value=amount,
                    confidence=score_fallback_amount(amount, raw_amount),
                    source_text=line.text,
                    line_index=line.index,
                    pattern_name='fallback',
                ))

        return candidates
