"""
Static pattern tables shared by the field extractors.

Tables are tuples of PatternSpec built once at import time and treated as
read-only configuration.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional

from receiptscan.utils.money import AMOUNT_TOKEN


@dataclass(frozen=True)
class PatternSpec:
    """A named regex pattern with example and notes for documentation."""
    name: str
    pattern: str
    example: str
    notes: Optional[str] = None
    weight: int = 0
    flags: int = re.IGNORECASE
    compiled: re.Pattern = field(default=None, init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, 'compiled', re.compile(self.pattern, self.flags))

    def search(self, text: str) -> Optional[re.Match]:
        return self.compiled.search(text)


def first_match(specs: Iterable[PatternSpec], text: str) -> Optional[PatternSpec]:
    """Return the first spec (in table order) matching anywhere in text."""
    for spec in specs:
        if spec.compiled.search(text):
            return spec
    return None


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------

# Amount token anywhere on a line, not glued to other digits or words
AMOUNT_RE = re.compile(r'(?<![\w.,])(' + AMOUNT_TOKEN + r')(?!\d)')

# Line holding nothing but an amount (OCR split it off its "TOTAL" label)
STANDALONE_AMOUNT_RE = re.compile(r'^[£$€]?\s*(' + AMOUNT_TOKEN + r')$')

TOTAL_KEYWORD_RE = re.compile(r'total', re.IGNORECASE)

STRONG_TOTAL_RE = re.compile(r'\b(?:grand|final)\s*total', re.IGNORECASE)

# "TOTAL", "GRAND TOTAL", "FINAL TOTAL", "TOTAL:", and OCR noise like "TOTAI."
STANDALONE_TOTAL_RE = re.compile(
    r'^(?:(?:grand|final)\s+)?tota[li1]\s*[:.]?$',
    re.IGNORECASE,
)

AMOUNT_SKIP_PATTERNS = (
    PatternSpec(
        name='payment_tender',
        pattern=r'\b(?:cash|debit|credit|card|visa|cheque|check)\s*tend|^cash\b(?!\s*back)',
        example='CASH 50.00',
        notes='Amount handed over, not the total',
    ),
    PatternSpec(
        name='card_payment',
        pattern=(
            r'\b(?:visa|master\s*card|amex|american\s+express|maestro|contactless'
            r'|chip\s*(?:&|and)?\s*pin|gift\s*card|card\s*(?:no|number|payment|ending)'
            r'|apple\s*pay|google\s*pay|paypal|debit|credit)\b'
        ),
        example='VISA DEBIT 20.00',
    ),
    PatternSpec(
        name='change_refund',
        pattern=r'\b(?:change(?:\s+due)?|refund(?:ed)?|cash\s*back)\b',
        example='CHANGE DUE 0.50',
    ),
    PatternSpec(
        name='account_reference',
        pattern=(
            r'\b(?:account|acct|a/c|approval|approved|appr|auth(?:ori[sz]ation)?'
            r'|terminal|term\s*id|tid|mid|merchant\s*(?:id|no)|ref(?:erence)?'
            r'|trans(?:action)?\s*(?:id|no)|aid)\b'
        ),
        example='TERMINAL ID 12345678',
    ),
    PatternSpec(
        name='balance',
        pattern=r'\b(?:balance|bal)\b',
        example='REMAINING BALANCE 4.20',
        notes='Card/account balances look like totals',
    ),
    PatternSpec(
        name='store_metadata',
        pattern=(
            r'\b(?:manager|mgr|phone|tel|telephone|fax|address|street|road|avenue'
            r'|items?\s*sold|no\.?\s*of\s*items|item\s*count|cashier|operator'
            r'|store\s*(?:no|#)|register)\b'
        ),
        example='ITEMS SOLD 4',
    ),
    PatternSpec(
        name='promotional',
        pattern=(
            r'\b(?:thank\s*you|thanks|you\s+saved|savings?|points|rewards?|clubcard'
            r'|nectar|survey|feedback|visit\s+us|offer|coupon|voucher|discount'
            r'|promo(?:tion)?)\b|www\.|\.com\b|\.co\.uk\b'
        ),
        example='TOTAL SAVINGS 3.00',
    ),
    PatternSpec(
        name='raw_date',
        pattern=r'\b\d{1,2}[/.-]\d{1,2}[/.-]\d{2,4}\b|\b\d{4}[/-]\d{1,2}[/-]\d{1,2}\b',
        example='05/02/24 14:32',
    ),
    PatternSpec(
        name='long_digit_run',
        pattern=r'\d{10,}',
        example='5012345678900',
        notes='Phone numbers and barcodes',
    ),
    PatternSpec(
        name='subtotal_tax',
        pattern=(
            r'\bsub\s*-?\s*total'
            r'|^(?!.*total.*\binc(?:l(?:uding)?)?\.?\s*(?:vat|tax)).*\b(?:tax|vat|gst|hst|pst)\b'
        ),
        example='SUBTOTAL 18.50',
        notes='"TOTAL INC VAT", "Total (incl. VAT)" are still total lines',
    ),
)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

DATE_PATTERNS = (
    PatternSpec(
        name='short_year',
        pattern=r'\b\d{1,2}[/-]\d{1,2}[/-]\d{2}\b',
        example='25/12/20',
        flags=0,
    ),
    PatternSpec(
        name='long_year',
        pattern=r'\b\d{1,2}[/-]\d{1,2}[/-]\d{4}\b',
        example='25/12/2020',
        flags=0,
    ),
    PatternSpec(
        name='iso',
        pattern=r'\b\d{4}[/-]\d{1,2}[/-]\d{1,2}\b',
        example='2020-12-25',
        flags=0,
    ),
    PatternSpec(
        name='dotted',
        pattern=r'\b\d{1,2}\.\d{1,2}\.(?:\d{4}|\d{2})\b',
        example='25.12.20',
        flags=0,
    ),
    PatternSpec(
        name='compact',
        pattern=r'\b\d{6}\b',
        example='251220',
        notes='Undelimited DDMMYY / MMDDYY',
        flags=0,
    ),
)

# Day-first before month-first: table order decides ambiguous dates.
DATE_FORMATS = (
    '%d/%m/%y',
    '%m/%d/%y',
    '%d-%m-%y',
    '%m-%d-%y',
    '%d/%m/%Y',
    '%m/%d/%Y',
    '%d-%m-%Y',
    '%m-%d-%Y',
    '%Y-%m-%d',
    '%Y/%m/%d',
    '%d.%m.%y',
    '%m.%d.%y',
    '%d.%m.%Y',
    '%d%m%y',
    '%m%d%y',
)

# Lines about items, totals or prices never carry the transaction date
DATE_EXCLUDED_LINE_RE = re.compile(r'item|total', re.IGNORECASE)


# ---------------------------------------------------------------------------
# Merchant names
# ---------------------------------------------------------------------------

MERCHANT_SKIP_PATTERNS = (
    PatternSpec(
        name='promotional',
        pattern=(
            r'^(?:give\s+us\s+feedback|thank\s*you|thanks|visit|come\s+again|see\s+you'
            r'|survey|welcome|please\s+(?:retain|keep|come))'
        ),
        example='THANK YOU FOR SHOPPING',
    ),
    PatternSpec(
        name='slogan',
        pattern=(
            r'save\s+money|live\s+better|always\s+low|low\s+prices|every\s+little\s+helps'
            r'|good\s+food\s+for\s+all'
        ),
        example='Save money. Live better.',
    ),
    PatternSpec(
        name='receipt_header',
        pattern=(
            r'^(?:receipt|invoice|bill|order|id\s*#|ref\s*#|ref\s*no|transaction'
            r'|tax\s+invoice|sales\s+receipt|customer\s+copy|merchant\s+copy|duplicate)'
        ),
        example='RECEIPT #00123',
    ),
    PatternSpec(
        name='contact_staff',
        pattern=(
            r'^(?:address|phone|tel|telephone|fax|e-?mail|website|manager|cashier'
            r'|served\s+by|operator|your\s+server)|www\.|https?://|\.com\b|\.co\.uk\b|@'
        ),
        example='Manager: Jane Doe',
    ),
    PatternSpec(
        name='financial_terms',
        pattern=(
            r'\b(?:tax|vat|gst|total|subtotal|sub\s*total|change|cash|card|debit'
            r'|credit|balance|amount|due|paid|payment|tender)\b'
        ),
        example='VISA DEBIT',
    ),
    PatternSpec(
        name='store_info',
        pattern=(
            r'\b(?:store\s+hours|open|opening|closed|appr\s*code|terminal|network'
            r'|items?\s*sold|barcode|scan\s+with|app|vat\s*(?:no|number|reg)|auth\s*code)\b'
        ),
        example='Store hours 8am-10pm',
    ),
    PatternSpec(
        name='address',
        pattern=(
            r'\b(?:street|road|avenue|lane|drive|boulevard|blvd|suite|postcode)\b'
            r'|\b(?:st|rd|ave|ln)\b\.?\s*$|\bsupermarkets\s+(?:ltd|plc)\b'
        ),
        example='High Street',
    ),
    PatternSpec(
        name='starts_with_digit',
        pattern=r'^\d',
        example='123 Main St',
        flags=0,
    ),
    PatternSpec(
        name='date',
        pattern=r'\d{4}[-/]\d{1,2}[-/]\d{1,2}|\d{1,2}[-/.]\d{1,2}[-/.]\d{2,4}',
        example='DATE 05/02/24',
        flags=0,
    ),
    PatternSpec(
        name='currency_amount',
        pattern=r'[£$€¥₹]\s*\d|\d+\.\d{2}',
        example='MILK 1.20',
        flags=0,
    ),
    PatternSpec(
        name='no_letters',
        pattern=r'^[^A-Za-z]*$',
        example='(555) 123-4567',
        flags=0,
    ),
    PatternSpec(
        name='too_short',
        pattern=r'^.{1,2}$',
        example='XX',
        flags=0,
    ),
    PatternSpec(
        name='long_digit_run',
        pattern=r'\d{8,}',
        example='VAT NO 123456789',
        flags=0,
    ),
    PatternSpec(
        name='decoration',
        pattern=r'^[*=#~-]+',
        example='*** CUSTOMER COPY ***',
        flags=0,
    ),
)

MERCHANT_INDICATORS = (
    PatternSpec(
        name='known_chain',
        pattern=(
            r"\b(?:wal-?mart|tesco|sainsbury'?s?|asda|morrisons?|aldi|lidl|waitrose"
            r"|co-?op|iceland|boots|superdrug|marks\s*(?:&|and)\s*spencer|target|costco"
            r"|kroger|safeway|walgreens|cvs|whole\s*foods|trader\s*joe'?s|starbucks"
            r"|mcdonald'?s|greggs|ikea|argos|primark)\b"
        ),
        example='WALMART',
        weight=100,
    ),
    PatternSpec(
        name='store_word',
        pattern=r'\w*(?:market|mart|stores?|shop|shoppe)\b',
        example='CORNER SHOP',
        weight=100,
    ),
    PatternSpec(
        name='business_type',
        pattern=(
            r'\b(?:caf[eé]|coffee|restaurant|pharmacy|chemist|bakery|deli|grocer(?:y|s)?'
            r'|pizzeria|diner|bistro|kitchen|grill|pub|bar)\b'
        ),
        example='Corner Café',
        weight=100,
    ),
)
