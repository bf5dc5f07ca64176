"""Text measurement and best-fit text components."""

from .component import AutoFitTextComponent
from .measurers import MonospaceTextMeasurer, PillowTextMeasurer
from .renderer import (
    FontSpec,
    TextAppearance,
    TextLayoutMetrics,
    TextMeasureRequest,
    TextMeasurer,
    wrap_lines,
)

__all__ = [
    "AutoFitTextComponent",
    "FontSpec",
    "MonospaceTextMeasurer",
    "PillowTextMeasurer",
    "TextAppearance",
    "TextLayoutMetrics",
    "TextMeasureRequest",
    "TextMeasurer",
    "wrap_lines",
]
