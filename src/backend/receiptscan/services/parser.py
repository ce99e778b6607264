"""
Receipt parser service for extracting structured data from OCR text.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from receiptscan.models.receipt import ReceiptData
from receiptscan.services.amount import AmountExtractor
from receiptscan.services.dates import DateExtractor
from receiptscan.services.errors import NoAmountFoundError, NoTextFoundError, OutOfDateRangeError
from receiptscan.services.merchant import MerchantExtractor
from receiptscan.services.preprocess import RawLine, split_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReceiptAcceptanceRule:
    """
    Business rule a caller applies to a parsed receipt.

    The amount must be present and positive. A recovered date must fall
    inside [valid_from, now]; a missing date is accepted.
    """
    valid_from: Optional[date] = None
    now: Optional[datetime] = None
    require_amount: bool = True

    def check(self, receipt: ReceiptData) -> None:
        """Raise if the receipt is unacceptable, return None otherwise."""
        if self.require_amount and (receipt.total_amount is None or receipt.total_amount <= 0):
            raise NoAmountFoundError("no positive total amount recovered")

        if receipt.date is None:
            return

        today = (self.now or datetime.now()).date()
        if self.valid_from is not None and receipt.date < self.valid_from:
            raise OutOfDateRangeError(f"{receipt.date} is before {self.valid_from}")
        if receipt.date > today:
            raise OutOfDateRangeError(f"{receipt.date} is after {today}")


class ReceiptParser:
    """Runs the field extractors over one set of lines and assembles a ReceiptData."""

    def __init__(
        self,
        amount_extractor: Optional[AmountExtractor] = None,
        date_extractor: Optional[DateExtractor] = None,
        merchant_extractor: Optional[MerchantExtractor] = None
    ):
        self.amount_extractor = amount_extractor or AmountExtractor()
        self.date_extractor = date_extractor or DateExtractor()
        self.merchant_extractor = merchant_extractor or MerchantExtractor()

    def parse(
        self,
        text: str,
        now: Optional[datetime] = None,
        _debug: Optional[Dict[str, Any]] = None
    ) -> ReceiptData:
        """
        Parse receipt text and extract all available fields.

        Args:
            text: OCR-extracted text from receipt, one line per OCR observation
            now: Moment of scanning, used to reject future dates

        Returns:
            ReceiptData; fields the extractors could not find are None
        """
        return self.parse_lines(split_lines(text), now=now, _debug=_debug)

    def parse_lines(
        self,
        lines: Sequence[RawLine],
        now: Optional[datetime] = None,
        _debug: Optional[Dict[str, Any]] = None
    ) -> ReceiptData:
        """Same as parse() for already preprocessed lines."""
        if _debug is not None:
            _debug.setdefault('patterns_matched', {})
            _debug.setdefault('confidence_per_field', {})
            _debug['line_count'] = len(lines)

        receipt = ReceiptData(
            merchant_name=self.merchant_extractor.extract(lines, _debug=_debug),
            date=self.date_extractor.extract(lines, now=now, _debug=_debug),
            total_amount=self.amount_extractor.extract(lines, _debug=_debug),
        )

        logger.debug("Parsed receipt from %d lines", len(lines), extra={
            "merchant_found": receipt.merchant_name is not None,
            "date_found": receipt.date is not None,
            "amount_found": receipt.total_amount is not None,
        })
        return receipt

    def recognize(
        self,
        text: str,
        rule: Optional[ReceiptAcceptanceRule] = None,
        _debug: Optional[Dict[str, Any]] = None
    ) -> ReceiptData:
        """
        Parse recognized text and apply the caller's acceptance rule.

        Raises:
            NoTextFoundError: text is empty or blank
            NoAmountFoundError: rule requires an amount and none was found
            OutOfDateRangeError: recovered date outside the rule's window
        """
        lines = split_lines(text)
        if not lines:
            raise NoTextFoundError("recognized text is blank")

        rule = rule or ReceiptAcceptanceRule()
        receipt = self.parse_lines(lines, now=rule.now, _debug=_debug)

        try:
            rule.check(receipt)
        except (NoAmountFoundError, OutOfDateRangeError) as exc:
            logger.info("Receipt rejected: %s", exc, extra={"error": exc.kind})
            raise

        return receipt
