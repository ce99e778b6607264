#!/usr/bin/env python3
"""
Debug script to see how the extractors read a receipt.

Usage:
    python scripts/debug_receipt.py receipt.txt
    python scripts/debug_receipt.py --image receipt.jpg
    cat receipt.txt | python scripts/debug_receipt.py -
"""

import argparse
import logging
import sys

from receiptscan.services.amount import AmountExtractor
from receiptscan.services.dates import DateExtractor
from receiptscan.services.errors import ReceiptRecognitionError
from receiptscan.services.merchant import MerchantExtractor
from receiptscan.services.ocr import OCRService
from receiptscan.services.parser import ReceiptParser
from receiptscan.services.preprocess import split_lines


def read_text(args: argparse.Namespace) -> str:
    if args.image:
        with open(args.path, 'rb') as f:
            return "\n".join(OCRService().recognize_lines(f.read()))
    if args.path == '-':
        return sys.stdin.read()
    with open(args.path, encoding='utf-8') as f:
        return f.read()


def print_candidates(title: str, candidates, top_n: int) -> None:
    print(f"\n{title}:")
    if not candidates:
        print("  (none)")
        return
    for c in candidates[:top_n]:
        print(f"  {c.confidence:>5}  {c.value!s:<24} [{c.pattern_name}] line {c.line_index}: {c.source_text}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Show extraction candidates for a receipt")
    parser.add_argument('path', help="OCR text file, image with --image, or - for stdin")
    parser.add_argument('--image', action='store_true', help="Run OCR on an image first")
    parser.add_argument('--top', type=int, default=5, help="Candidates to show per field")
    parser.add_argument('--verbose', '-v', action='store_true', help="Log skipped lines")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        text = read_text(args)
    except ReceiptRecognitionError as exc:
        print(f"OCR failed: {exc.kind} ({exc})")
        return 1

    lines = split_lines(text)

    print("=" * 60)
    print("LINES:")
    print("-" * 60)
    for line in lines:
        print(f"  {line.index:>3}: {line.text}")

    print_candidates("MERCHANT", MerchantExtractor().candidates(lines), args.top)
    print_candidates("DATE", DateExtractor().candidates(lines), args.top)
    print_candidates("AMOUNT", AmountExtractor().candidates(lines), args.top)

    receipt = ReceiptParser().parse_lines(lines)

    print("\n" + "=" * 60)
    print("RESULT:")
    print("=" * 60)
    print(f"Merchant: {receipt.merchant_name}")
    print(f"Date: {receipt.formatted_date}")
    print(f"Amount: {receipt.formatted_amount}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
