"""
Response Parser - Turns a free-text OCR answer into ordered text blocks.

The OCR model is prompted to answer with numbered lines:

    1: <text> (from: {x:12, y:34}, to: {x:56, y:78})
    2: <text> (from: {x:90, y:12}, to: {x:34, y:56})
    Number of text blocks: 2

The format is a prompt convention, not a schema, so parsing is lenient:
unnumbered lines are dropped, blocks are sorted by their ordinal, and a
block without a coordinate annotation gets a (0, 0)-(0, 0) box. Parsing
never raises; the worst case is an empty list.
"""
import logging
import re
from typing import Iterator, List, Optional, Tuple

from core.constants import (
    DECLARED_COUNT_PATTERN,
    NO_TEXT_SENTINEL,
    ORDINAL_LINE_PATTERN,
    PAIRING_LINE,
    PAIRING_MODES,
    PAIRING_POSITIONAL,
    SUMMARY_LINE_PATTERN
)
from core.models import ORIGIN, Coordinate, ParsedTextBlock
from utils.bbox_utils import extract_coordinate_annotations, find_coordinate_annotation
from utils.text_utils import clean_block_text

logger = logging.getLogger(__name__)

_SUMMARY_RE = re.compile(SUMMARY_LINE_PATTERN, re.IGNORECASE)
_ORDINAL_RE = re.compile(ORDINAL_LINE_PATTERN)
_DECLARED_COUNT_RE = re.compile(DECLARED_COUNT_PATTERN, re.IGNORECASE)


def _is_empty_answer(response: Optional[str]) -> bool:
    return not response or response.strip() == NO_TEXT_SENTINEL


def _numbered_lines(response: str) -> List[Tuple[int, str, str]]:
    """
    (ordinal, cleaned text, raw line) for every usable numbered line,
    sorted by ordinal. The sort is stable, so duplicate ordinals keep
    their textual order.
    """
    items = []
    for raw_line in re.split(r'\r?\n', response):
        line = raw_line.strip()
        if _SUMMARY_RE.match(line):
            continue

        match = _ORDINAL_RE.match(line)
        if not match:
            continue

        text = clean_block_text(match.group(2))
        if text:
            items.append((int(match.group(1)), text, line))

    items.sort(key=lambda item: item[0])
    return items


def parse_numbered_text_list(response: Optional[str]) -> List[str]:
    """
    Parse a numbered-block response into its texts, ignoring coordinates.

    Args:
        response: Raw OCR answer

    Returns:
        Texts ordered by their ordinal label

    Example:
        >>> parse_numbered_text_list('2: Cookie\\n1: "Abra" (from: {x:1, y:2}, to: {x:3, y:4})')
        ['Abra', 'Cookie']
    """
    if _is_empty_answer(response):
        return []
    return [text for _, text, _ in _numbered_lines(response)]


def parse_coordinates_list(response: Optional[str]) -> List[Tuple[Coordinate, Coordinate]]:
    """
    Scan the whole, unfiltered response for coordinate annotations.

    Returns:
        (from, to) pairs in left-to-right textual order
    """
    if not response:
        return []
    return extract_coordinate_annotations(response)


def extract_declared_count(response: Optional[str]) -> Optional[int]:
    """
    Read the block count the model declared at the end of its answer.

    The last ``Number of text block(s): N`` wins. Without one, a single
    trailing digit of the trimmed response is used. Otherwise None.
    """
    if _is_empty_answer(response):
        return None

    matches = _DECLARED_COUNT_RE.findall(response)
    if matches:
        return int(matches[-1])

    trimmed = response.strip()
    if trimmed and trimmed[-1].isdigit():
        return int(trimmed[-1])
    return None


def iter_text_blocks(
    response: Optional[str],
    pairing: str = PAIRING_LINE
) -> Iterator[ParsedTextBlock]:
    """
    Yield parsed blocks in ordinal order.

    Args:
        response: Raw OCR answer
        pairing: How coordinates are attached to texts.
            ``'line'`` takes the annotation written on the block's own line.
            ``'positional'`` pairs the Nth sorted text with the Nth
            annotation found anywhere in the response.

    Raises:
        ValueError: On an unknown pairing mode
    """
    if pairing not in PAIRING_MODES:
        raise ValueError(
            f"Unknown coordinate pairing '{pairing}'. "
            f"Supported: {', '.join(PAIRING_MODES)}"
        )
    if _is_empty_answer(response):
        return

    lines = _numbered_lines(response)

    if pairing == PAIRING_POSITIONAL:
        coords = parse_coordinates_list(response)
        for idx, (ordinal, text, _) in enumerate(lines):
            from_coord, to_coord = coords[idx] if idx < len(coords) else (ORIGIN, ORIGIN)
            yield ParsedTextBlock(ordinal, text, from_coord, to_coord)
        return

    for ordinal, text, line in lines:
        annotation = find_coordinate_annotation(line)
        from_coord, to_coord = annotation if annotation else (ORIGIN, ORIGIN)
        yield ParsedTextBlock(ordinal, text, from_coord, to_coord)


def parse_text_blocks(response: Optional[str], pairing: str = PAIRING_LINE) -> List[ParsedTextBlock]:
    return list(iter_text_blocks(response, pairing))

class ResponseParser:
    """Parses OCR answers and reports declared/parsed count mismatches."""

    def __init__(self, pairing: str = PAIRING_LINE):
        if pairing not in PAIRING_MODES:
            raise ValueError(
                f"Unknown coordinate pairing '{pairing}'. "
                f"Supported: {', '.join(PAIRING_MODES)}"
            )
        self.pairing = pairing

    def parse(self, response: Optional[str]) -> List[ParsedTextBlock]:
        """
        Parse one OCR answer.

        Returns:
            Ordered list of blocks; empty for "No text found" or garbage
        """
        blocks = parse_text_blocks(response, self.pairing)

        declared = extract_declared_count(response)
        if declared is not None and declared != len(blocks):
            logger.warning(
                "OCR answer declared %d text block(s) but %d were parsed",
                declared, len(blocks)
            )

        if not blocks:
            logger.info("OCR answer yielded no text blocks")
        else:
            missing = sum(1 for b in blocks if b.from_coord == ORIGIN and b.to_coord == ORIGIN)
            if missing:
                logger.warning("%d text block(s) have no coordinates", missing)

        return blocks
