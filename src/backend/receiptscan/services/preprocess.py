"""
Line preprocessing shared by every field extractor.
"""

from dataclasses import dataclass
from typing import Iterable, List


@dataclass(frozen=True)
class RawLine:
    """One trimmed, non-empty OCR line.

    ``index`` is the position in the filtered sequence (blank lines removed,
    survivors re-numbered from 0), which is the only positional signal the
    extractors get.
    """
    index: int
    text: str


def lines_from_observations(observations: Iterable[str]) -> List[RawLine]:
    """
    Build the line list from OCR observations in reading order.

    Args:
        observations: Recognized text lines (may contain blanks or embedded
            line breaks)

    Returns:
        Trimmed, non-empty lines numbered by filtered position
    """
    texts = []
    for observation in observations:
        for part in (observation or "").splitlines():
            part = part.strip()
            if part:
                texts.append(part)

    return [RawLine(index=i, text=t) for i, t in enumerate(texts)]


def split_lines(text: str) -> List[RawLine]:
    """Split raw recognized text on line breaks. All-blank input gives []."""
    if not text:
        return []
    return lines_from_observations(text.splitlines())
