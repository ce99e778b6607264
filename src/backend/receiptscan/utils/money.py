"""
Shared money parsing utilities for the single configured receipt locale.

Handles the formats printed on receipts:
- Plain: 12.99
- Currency prefixed: £12.99, $ 12.99
- Thousands separated: 1,234.56
"""

from decimal import Decimal, InvalidOperation
from typing import Optional
import re


CURRENCY_SYMBOLS = '£$€¥₹'

# Amount token with exactly two decimals, optionally comma-grouped.
AMOUNT_TOKEN = r'(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}'

# Well-formed receipt amount: no leading zeros, no grouping, <= 4 integer digits
_WELL_FORMED_RE = re.compile(r'^(?:0|[1-9]\d{0,3})\.\d{2}$')

_CURRENCY_RE = re.compile(r'[' + CURRENCY_SYMBOLS + r']\s*|\b[A-Z]{3}\b\s*')


def parse_money(amount_str: str) -> Optional[Decimal]:
    """
    Parse a money string into a Decimal.

    Args:
        amount_str: String containing amount (e.g., "£1,234.56", "12.99")

    Returns:
        Decimal amount or None if parsing fails

    Examples:
        >>> parse_money("£1,234.56")
        Decimal('1234.56')
        >>> parse_money("12.99")
        Decimal('12.99')
    """
    if not amount_str or not isinstance(amount_str, str):
        return None

    cleaned = _CURRENCY_RE.sub('', amount_str.strip())

    # Remove commas (thousands separator) and stray spaces
    cleaned = cleaned.replace(',', '').replace(' ', '')

    if not cleaned:
        return None

    try:
        result = Decimal(cleaned)
    except (InvalidOperation, ValueError):
        return None

    if not result.is_finite() or result < 0:
        return None

    return result


def is_well_formed_amount(amount_str: str) -> bool:
    """True for a plain two-decimal token such as "12.99" (not "0012.99" or "1,234.56")."""
    return bool(_WELL_FORMED_RE.match(amount_str))


def format_money(amount: Optional[Decimal], currency: str = 'GBP') -> str:
    """
    Format Decimal amount as money string.

    Args:
        amount: Decimal amount
        currency: Currency code (default: GBP)

    Returns:
        Formatted string (e.g., "£1,234.56")

    Examples:
        >>> format_money(Decimal('1234.56'))
        '£1,234.56'
        >>> format_money(Decimal('1234.56'), 'EUR')
        '€1,234.56'
    """
    if amount is None:
        return 'N/A'

    symbol_map = {
        'USD': '$',
        'CAD': '$',
        'EUR': '€',
        'GBP': '£',
        'JPY': '¥',
        'AUD': '$',
    }
    symbol = symbol_map.get(currency.upper(), currency)

    quantized = Decimal(amount).quantize(Decimal('0.01'))
    return f"{symbol}{quantized:,}"
