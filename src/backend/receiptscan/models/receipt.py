"""
Pydantic models for receipt scans.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from receiptscan.config import settings
from receiptscan.utils.money import format_money


class ReceiptData(BaseModel):
    """Fields recovered from one OCR pass. Any of them may be missing."""
    merchant_name: Optional[str] = None
    date: Optional[dt.date] = None
    total_amount: Optional[Decimal] = None

    class Config:
        frozen = True

    @property
    def formatted_date(self) -> Optional[str]:
        """Medium-style date, e.g. "5 Feb 2024"."""
        if self.date is None:
            return None
        return f"{self.date.day} {self.date:%b %Y}"

    @property
    def formatted_amount(self) -> Optional[str]:
        if self.total_amount is None:
            return None
        return format_money(self.total_amount, settings.CURRENCY_CODE)


class ScanTextRequest(BaseModel):
    """Model for scanning text that was recognized on the client."""
    text: str
    valid_from: Optional[dt.date] = None


class ScanResponse(BaseModel):
    """Model for scan API responses."""
    merchant_name: Optional[str] = None
    date: Optional[str] = None  # Store as string (YYYY-MM-DD)
    total_amount: Optional[Decimal] = None
    formatted_date: Optional[str] = None
    formatted_amount: Optional[str] = None

    @classmethod
    def from_receipt(cls, receipt: ReceiptData) -> "ScanResponse":
        return cls(
            merchant_name=receipt.merchant_name,
            date=receipt.date.isoformat() if receipt.date else None,
            total_amount=receipt.total_amount,
            formatted_date=receipt.formatted_date,
            formatted_amount=receipt.formatted_amount,
        )
