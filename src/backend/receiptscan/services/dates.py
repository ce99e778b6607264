"""
Transaction date extraction.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Sequence

from receiptscan.config import settings
from receiptscan.services.patterns import DATE_EXCLUDED_LINE_RE, DATE_FORMATS, DATE_PATTERNS
from receiptscan.services.preprocess import RawLine
from receiptscan.utils.candidates import DateCandidate
from receiptscan.utils.scoring import rank_dates, score_date, select_top_candidates

logger = logging.getLogger(__name__)


class DateExtractor:
    """
    Finds the most likely transaction date.

    Every date-shaped substring is parsed against every format in
    DATE_FORMATS. Day-first formats come first, so an ambiguous date such
    as 03/04/24 resolves to 3 April. There is no per-locale disambiguation.
    """

    MIN_YEAR = 2000

    def __init__(self, currency_symbol: Optional[str] = None):
        self.currency_symbol = currency_symbol if currency_symbol is not None else settings.CURRENCY_SYMBOL

    def extract(
        self,
        lines: Sequence[RawLine],
        now: Optional[datetime] = None,
        _debug: Optional[Dict[str, Any]] = None
    ) -> Optional[date]:
        """
        Extract the transaction date.

        Args:
            lines: Preprocessed receipt lines
            now: Moment of scanning; dates after it are rejected (default: now)

        Returns:
            Date or None
        """
        candidates = self.candidates(lines, now=now)
        if not candidates:
            return None

        best = candidates[0]

        if _debug is not None:
            _debug['patterns_matched']['date'] = best.pattern_name
            _debug['confidence_per_field']['date'] = best.confidence
            _debug['date_candidates'] = [
                {
                    'value': c.value.isoformat(),
                    'score': score,
                    'format': c.date_format,
                    'line': c.source_text,
                }
                for c, score in select_top_candidates(candidates, top_n=3)
            ]

        logger.debug("Selected date %s from %r (format %s)", best.value, best.source_text, best.date_format)
        return best.value

    def candidates(self, lines: Sequence[RawLine], now: Optional[datetime] = None) -> List[DateCandidate]:
        """Valid date candidates ranked by confidence, ties to the more recent date."""
        now = now or datetime.now()
        found: List[DateCandidate] = []

        for line in lines:
            if self._is_excluded(line.text):
                continue

            for spec in DATE_PATTERNS:
                for match in spec.compiled.finditer(line.text):
                    found.extend(self._parse_match(match.group(0), spec.name, line))

        valid = [c for c in found if self.is_acceptable(c.value, now)]
        if len(valid) < len(found):
            logger.debug("Rejected %d out-of-range date candidate(s)", len(found) - len(valid))

        return rank_dates(valid)

    def is_acceptable(self, value: date, now: datetime) -> bool:
        """Year within [2000, now.year + 1] and not after now."""
        if value.year < self.MIN_YEAR or value.year > now.year + 1:
            return False
        return value <= now.date()

    def _is_excluded(self, text: str) -> bool:
        if DATE_EXCLUDED_LINE_RE.search(text):
            return True
        return bool(self.currency_symbol) and self.currency_symbol in text

    def _parse_match(self, date_str: str, pattern_name: str, line: RawLine) -> List[DateCandidate]:
        parsed = []

        for format_index, fmt in enumerate(DATE_FORMATS):
            try:
                value = datetime.strptime(date_str, fmt).date()
            except ValueError:
                continue

            parsed.append(DateCandidate(
                value=value,
                confidence=score_date(format_index, len(DATE_FORMATS), line.index),
                source_text=line.text,
                line_index=line.index,
                pattern_name=pattern_name,
                date_format=fmt,
            ))

        return parsed
