"""
Overlay validation before instructions reach the renderer.
"""
import logging
from typing import Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from core.schemas import OverlayInstruction, OverlayPosition

logger = logging.getLogger(__name__)

InstructionLike = Union[OverlayInstruction, dict]


def _coerce(item: InstructionLike) -> Optional[OverlayInstruction]:
    if isinstance(item, OverlayInstruction):
        return item
    try:
        return OverlayInstruction.model_validate(item)
    except ValidationError as e:
        logger.warning("Skipping malformed overlay instruction: %s", e.errors()[0].get('msg'))
        return None


def filter_valid_instructions(instructions: Iterable[InstructionLike]) -> List[OverlayInstruction]:
    """
    Keep only instructions whose box satisfies x >= 0, y >= 0, x2 > x, y2 > y.

    Invalid or malformed entries are dropped, never raised; the order of
    the remaining ones is preserved.
    """
    instructions = list(instructions)
    valid = []
    for item in instructions:
        instruction = _coerce(item)
        if instruction is None:
            continue
        if not instruction.position.is_valid():
            logger.warning("Skipping invalid overlay element: %r", instruction.text)
            continue
        valid.append(instruction)

    dropped = len(instructions) - len(valid)
    logger.info(
        "Validated %d/%d overlay elements (%d dropped)",
        len(valid), len(instructions), dropped
    )
    return valid


def build_instructions(
    results,
    translations,
    font_size: Optional[str] = None,
    color: Optional[str] = None
) -> List[OverlayInstruction]:
    """
    Pair stored extraction results with translated text.

    Args:
        results: ExtractionResult rows of one image
        translations: Translation rows of that image in one language
        font_size: Optional font size applied to every element
        color: Optional text color applied to every element

    Returns:
        One instruction per result that has a translation, in result order
    """
    by_text_id: Dict[str, str] = {
        t.original_text_id: t.translated_text for t in translations
    }
    instructions = []
    for result in results:
        text = by_text_id.get(result.text_id)
        if text is None or result.location is None:
            continue
        loc = result.location
        instructions.append(OverlayInstruction(
            text=text,
            position=OverlayPosition(x=loc.from_x, y=loc.from_y, x2=loc.to_x, y2=loc.to_y),
            font_size=font_size,
            color=color
        ))
    return instructions
