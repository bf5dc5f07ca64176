"""Best-fit text widgets for unisize."""

from .component_schema import BoundingBox, parse_box_notation
from .text.component import AutoFitTextComponent
from .text.measurers import MonospaceTextMeasurer, PillowTextMeasurer
from .text.renderer import (
    FontSpec,
    TextAppearance,
    TextLayoutMetrics,
    TextMeasureRequest,
    TextMeasurer,
)

__all__ = [
    "AutoFitTextComponent",
    "BoundingBox",
    "FontSpec",
    "MonospaceTextMeasurer",
    "PillowTextMeasurer",
    "TextAppearance",
    "TextLayoutMetrics",
    "TextMeasureRequest",
    "TextMeasurer",
    "parse_box_notation",
]
