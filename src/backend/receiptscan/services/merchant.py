"""
Merchant name extraction.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from receiptscan.services.patterns import MERCHANT_INDICATORS, MERCHANT_SKIP_PATTERNS, first_match
from receiptscan.services.preprocess import RawLine
from receiptscan.utils.candidates import MerchantCandidate
from receiptscan.utils.scoring import rank_merchants, score_merchant_line, select_top_candidates

logger = logging.getLogger(__name__)


class MerchantExtractor:
    """Finds the most likely business name, usually one of the first lines."""

    def extract(self, lines: Sequence[RawLine], _debug: Optional[Dict[str, Any]] = None) -> Optional[str]:
        """
        Extract the merchant name.

        Args:
            lines: Preprocessed receipt lines

        Returns:
            Merchant name as printed, or None
        """
        candidates = self.candidates(lines)
        if not candidates:
            return None

        best = candidates[0]

        if _debug is not None:
            _debug['patterns_matched']['merchant'] = best.pattern_name
            _debug['confidence_per_field']['merchant'] = best.confidence
            _debug['merchant_candidates'] = [
                {'value': c.value, 'score': score, 'line_index': c.line_index}
                for c, score in select_top_candidates(candidates, top_n=3)
            ]

        logger.debug("Selected merchant %r (score %d)", best.value, best.confidence)
        return best.value

    def candidates(self, lines: Sequence[RawLine]) -> List[MerchantCandidate]:
        """Positive-score candidates ranked by score, ties to the earliest line."""
        candidates: List[MerchantCandidate] = []

        for line in lines:
            skip = first_match(MERCHANT_SKIP_PATTERNS, line.text)
            if skip is not None:
                logger.debug("Skipping line %d for merchant (%s): %r", line.index, skip.name, line.text)
                continue

            indicator = first_match(MERCHANT_INDICATORS, line.text)
            score = score_merchant_line(
                line.text,
                line.index,
                indicator_weight=indicator.weight if indicator else 0,
            )

            if score <= 0:
                continue

            candidates.append(MerchantCandidate(
                value=line.text,
                confidence=score,
                source_text=line.text,
                line_index=line.index,
                pattern_name=indicator.name if indicator else 'structural',
                indicator=indicator.name if indicator else None,
            ))

        return rank_merchants(candidates)
