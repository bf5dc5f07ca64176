from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
from pathlib import Path

from PIL import ImageFont

from .renderer import FontSpec, TextLayoutMetrics, TextMeasureRequest, wrap_lines

LOGGER = logging.getLogger(__name__)

FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "liberationsans",
    "helvetica",
    "arial",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


@dataclass(frozen=True)
class MonospaceTextMeasurer:
    """Deterministic measurer: every glyph advances `advance_ratio * size`."""

    advance_ratio: float = 0.6

    def __post_init__(self) -> None:
        if self.advance_ratio <= 0:
            raise ValueError("advance_ratio must be > 0")

    def measure_text(self, request: TextMeasureRequest) -> TextLayoutMetrics:
        if request.font_size_px <= 0:
            raise ValueError("font size must be > 0")
        size = float(request.font_size_px)
        spacing = float(request.appearance.letter_spacing_px)

        def advance(line: str) -> float:
            if not line:
                return 0.0
            return len(line) * size * self.advance_ratio + (len(line) - 1) * spacing

        lines = wrap_lines(request.text, max_width_px=request.max_width_px, line_advance=advance)
        line_h = size * request.appearance.line_height_multiplier
        return TextLayoutMetrics(
            width_px=max(advance(line) for line in lines),
            height_px=max(size, len(lines) * line_h),
            line_count=len(lines),
        )


class PillowTextMeasurer:
    """Measures text with Pillow font metrics (FreeType when available)."""

    def measure_text(self, request: TextMeasureRequest) -> TextLayoutMetrics:
        if request.font_size_px <= 0:
            raise ValueError("font size must be > 0")
        font = _load_font(_resolve_font_path(request.font), int(round(request.font_size_px)))
        spacing = float(request.appearance.letter_spacing_px)

        def advance(line: str) -> float:
            if not line:
                return 0.0
            return float(font.getlength(line)) + (len(line) - 1) * spacing

        lines = wrap_lines(request.text, max_width_px=request.max_width_px, line_advance=advance)
        ascent, descent = _font_metrics(font, request.font_size_px)
        line_h = max(float(ascent + descent), request.font_size_px * request.appearance.line_height_multiplier)
        return TextLayoutMetrics(
            width_px=max(advance(line) for line in lines),
            height_px=max(request.font_size_px, len(lines) * line_h),
            line_count=len(lines),
        )


def _resolve_font_path(font: FontSpec) -> str | None:
    file_path = font.normalized_file_path
    if file_path is not None:
        return str(file_path.resolve())
    return _resolve_system_font_path(font.family)


@lru_cache(maxsize=16)
def _resolve_system_font_path(family: str) -> str | None:
    wanted = family.strip().lower()
    patterns = ((wanted,) if wanted else ()) + FONT_FALLBACK_PATTERNS

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if stem == p or stem.startswith(p + "-"):
                return str(path)
    return None


@lru_cache(maxsize=64)
def _load_font(font_path: str | None, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, size)
    if font_path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(font_path, size=size)
    except OSError:
        LOGGER.debug("cannot load font %s, using Pillow default", font_path)
        return ImageFont.load_default(size=size)


def _font_metrics(font: ImageFont.FreeTypeFont | ImageFont.ImageFont, size_px: float) -> tuple[int, int]:
    if isinstance(font, ImageFont.FreeTypeFont):
        ascent, descent = font.getmetrics()
        return int(max(1, ascent)), int(max(0, descent))
    return int(max(1, size_px * 0.8)), int(max(0, size_px * 0.2))
