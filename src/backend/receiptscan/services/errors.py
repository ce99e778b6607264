"""
Errors surfaced when a receipt scan cannot produce an acceptable result.

Field extractors never raise; these come from the OCR step or from the
caller's acceptance rule.
"""


class ReceiptRecognitionError(Exception):
    """Base class. ``kind`` is a stable code, ``message`` is shown to the user."""

    kind = "recognition_error"
    message = "Something went wrong while processing your receipt. Please try again."

    def __init__(self, detail: str = ""):
        super().__init__(detail or self.message)
        self.detail = detail

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class InvalidImageError(ReceiptRecognitionError):
    kind = "invalid_image"
    message = "Photo quality is too poor. Please try taking a clearer picture."


class NoResultsError(ReceiptRecognitionError):
    kind = "no_results"
    message = "We couldn't read this image. Try taking a new photo with better lighting."


class NoTextFoundError(ReceiptRecognitionError):
    kind = "no_text_found"
    message = "No text detected. Make sure your receipt is clearly visible and try again."


class VisionError(ReceiptRecognitionError):
    kind = "vision_error"
    message = "Something went wrong while processing your receipt. Please try again."


class OutOfDateRangeError(ReceiptRecognitionError):
    kind = "out_of_date_range"
    message = "This receipt appears to be very old. Please check and try again."


class NoAmountFoundError(ReceiptRecognitionError):
    kind = "no_amount_found"
    message = "We couldn't find a total on this receipt. Please enter the amount manually."
