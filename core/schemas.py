"""
Pydantic schemas for overlay instructions handed to the renderer.
"""
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field


class OverlayPosition(BaseModel):
    """Pixel box of one overlay element; sub-pixel positions are allowed."""
    x: Union[int, float]
    y: Union[int, float]
    x2: Union[int, float]
    y2: Union[int, float]

    def is_valid(self) -> bool:
        return self.x >= 0 and self.y >= 0 and self.x2 > self.x and self.y2 > self.y


class OverlayInstruction(BaseModel):
    """One text element to draw on top of the original image."""
    model_config = ConfigDict(populate_by_name=True)

    text: str
    position: OverlayPosition
    font_size: Optional[str] = Field(default=None, alias="fontSize")
    color: Optional[str] = None
    background_color: Optional[str] = Field(default=None, alias="backgroundColor")
