"""
OCR service turning a receipt photo into ordered text observations.
"""

import io
import logging
from typing import Dict, List, Tuple

import pytesseract
from PIL import Image, ImageEnhance, UnidentifiedImageError

from receiptscan.config import settings
from receiptscan.services.errors import InvalidImageError, VisionError

logger = logging.getLogger(__name__)


class OCRService:
    """Service for extracting text lines from receipt images with Tesseract."""

    # image_to_data box levels: 1 page, 2 block, 3 paragraph, 4 line, 5 word
    WORD_LEVEL = 5

    def __init__(self, lang: str = None, config: str = None):
        """Initialize OCR service with Tesseract configuration."""
        # Set Tesseract command path
        pytesseract.pytesseract.tesseract_cmd = settings.TESSERACT_CMD
        self.lang = lang or settings.OCR_LANG
        self.config = config or settings.OCR_CONFIG

    def load_image(self, image_data: bytes) -> Image.Image:
        """
        Decode image bytes.

        Raises:
            InvalidImageError: bytes are empty or not a decodable image
        """
        if not image_data:
            raise InvalidImageError("empty image data")

        try:
            image = Image.open(io.BytesIO(image_data))
            image.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise InvalidImageError(str(exc)) from exc

        return image

    def recognize_lines(self, image_data: bytes) -> List[str]:
        """
        Run OCR and return one string per recognized line, in reading order.

        Args:
            image_data: Raw image bytes (JPEG, PNG, etc.)

        Returns:
            Recognized lines (blank for unreadable ones); empty list when
            Tesseract found no words at all

        Raises:
            InvalidImageError: image could not be decoded
            VisionError: Tesseract failed
        """
        image = self._preprocess_image(self.load_image(image_data))

        try:
            data = pytesseract.image_to_data(
                image,
                lang=self.lang,
                config=self.config,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, RuntimeError) as exc:
            logger.warning("Tesseract failed", exc_info=True)
            raise VisionError(str(exc)) from exc

        lines = self._group_lines(data)
        logger.info("OCR recognized %d line(s)", len(lines), extra={"lang": self.lang})
        return lines

    def _group_lines(self, data: Dict[str, List]) -> List[str]:
        """
        Join Tesseract word boxes into lines keyed by (block, paragraph, line).

        Only word-level boxes count as observations. A line whose words are
        all blank is kept as "" so callers can tell "nothing detected" from
        "detected but unreadable". Dict insertion order keeps reading order.
        """
        lines: Dict[Tuple[int, int, int], List[str]] = {}

        for i, word in enumerate(data.get('text', [])):
            if data['level'][i] != self.WORD_LEVEL:
                continue
            key = (data['block_num'][i], data['par_num'][i], data['line_num'][i])
            lines.setdefault(key, []).append(str(word or '').strip())

        return [' '.join(w for w in words if w) for words in lines.values()]

    def _preprocess_image(self, image: Image.Image) -> Image.Image:
        """
        Preprocess image to improve OCR accuracy.

        Args:
            image: PIL Image object

        Returns:
            Preprocessed image
        """
        # Convert to RGB if needed
        if image.mode != 'RGB':
            image = image.convert('RGB')

        # Convert to grayscale
        image = image.convert('L')

        # Increase contrast, helps with faded thermal paper
        enhancer = ImageEnhance.Contrast(image)
        return enhancer.enhance(2.0)
