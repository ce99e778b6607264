"""
Photo-to-receipt pipeline: OCR, then field extraction, then acceptance rule.
"""

import logging
from typing import Optional

from receiptscan.models.receipt import ReceiptData
from receiptscan.services.errors import NoResultsError, NoTextFoundError
from receiptscan.services.ocr import OCRService
from receiptscan.services.parser import ReceiptAcceptanceRule, ReceiptParser

logger = logging.getLogger(__name__)


class ReceiptTextRecognizer:
    """Recognizes receipt data from an image."""

    def __init__(self, ocr: Optional[OCRService] = None, parser: Optional[ReceiptParser] = None):
        self.ocr = ocr or OCRService()
        self.parser = parser or ReceiptParser()

    def recognize_receipt_data(
        self,
        image_data: bytes,
        rule: Optional[ReceiptAcceptanceRule] = None
    ) -> ReceiptData:
        """
        Run OCR on image bytes and extract receipt fields.

        Args:
            image_data: Raw image bytes
            rule: Caller's acceptance rule (default: amount required, any past date)

        Returns:
            ReceiptData for an accepted receipt

        Raises:
            InvalidImageError: image could not be decoded
            VisionError: OCR engine failed
            NoResultsError: OCR found no text observations
            NoTextFoundError: observations were all blank
            NoAmountFoundError, OutOfDateRangeError: rejected by the rule
        """
        observations = self.ocr.recognize_lines(image_data)
        if not observations:
            raise NoResultsError("OCR returned no observations")

        text = "\n".join(observations)
        if not text.strip():
            raise NoTextFoundError("OCR observations are blank")

        logger.debug("Extracting fields from %d OCR observation(s)", len(observations))
        return self.parser.recognize(text, rule=rule)
