"""
Scan API router: receipt photo or recognized text in, receipt fields out.
"""

from datetime import date
from typing import Optional
import logging

from fastapi import APIRouter, File, Form, HTTPException, UploadFile

from receiptscan.config import settings
from receiptscan.models.receipt import ScanResponse, ScanTextRequest
from receiptscan.services.errors import ReceiptRecognitionError
from receiptscan.services.parser import ReceiptAcceptanceRule, ReceiptParser
from receiptscan.services.recognizer import ReceiptTextRecognizer

router = APIRouter(prefix="/scan", tags=["scan"])
logger = logging.getLogger(__name__)

ALLOWED_TYPES = ["image/jpeg", "image/jpg", "image/png"]


def _rejected(exc: ReceiptRecognitionError) -> HTTPException:
    logger.info("Scan rejected", extra={"error": exc.kind, "detail": exc.detail})
    return HTTPException(status_code=422, detail=exc.to_dict())


@router.post("", response_model=ScanResponse)
def scan_receipt(
    file: UploadFile = File(...),
    valid_from: Optional[date] = Form(None)
):
    """
    Scan a receipt photo.

    This endpoint:
    1. Accepts an image upload (JPG, PNG)
    2. Runs OCR
    3. Extracts merchant, date and total
    4. Rejects receipts without a total or dated outside [valid_from, today]

    Args:
        file: Uploaded image
        valid_from: Start of the user's tracking window

    Returns:
        Extracted receipt fields
    """
    if file.content_type not in ALLOWED_TYPES:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type: {file.content_type}. Allowed: JPG, PNG"
        )

    image_data = file.file.read()
    file_size_mb = len(image_data) / (1024 * 1024)

    if file_size_mb > settings.MAX_UPLOAD_MB:
        raise HTTPException(
            status_code=400,
            detail=f"File too large: {file_size_mb:.2f}MB. Maximum: {settings.MAX_UPLOAD_MB}MB"
        )

    logger.info("Scanning uploaded receipt", extra={
        "upload_name": file.filename,
        "size_bytes": len(image_data),
    })

    try:
        receipt = ReceiptTextRecognizer().recognize_receipt_data(
            image_data,
            rule=ReceiptAcceptanceRule(valid_from=valid_from),
        )
    except ReceiptRecognitionError as exc:
        raise _rejected(exc) from exc

    return ScanResponse.from_receipt(receipt)


@router.post("/text", response_model=ScanResponse)
def scan_text(request: ScanTextRequest):
    """
    Extract receipt fields from text already recognized on the client.

    Args:
        request: Recognized text and optional tracking window start

    Returns:
        Extracted receipt fields
    """
    try:
        receipt = ReceiptParser().recognize(
            request.text,
            rule=ReceiptAcceptanceRule(valid_from=request.valid_from),
        )
    except ReceiptRecognitionError as exc:
        raise _rejected(exc) from exc

    return ScanResponse.from_receipt(receipt)
