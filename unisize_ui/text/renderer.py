from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Literal, Protocol


FontSlant = Literal["regular", "italic", "oblique"]


@dataclass(frozen=True)
class FontSpec:
    """Font definition from either system lookup or explicit file path.

    If `file_path` is set, measurers should prefer file-backed font loading.
    """

    family: str = "DejaVu Sans"
    file_path: str | None = None
    weight: int = 400
    slant: FontSlant = "regular"

    def __post_init__(self) -> None:
        if not self.family.strip() and self.file_path is None:
            raise ValueError("FontSpec requires `family` when `file_path` is not set")
        if self.file_path is not None and not str(self.file_path).strip():
            raise ValueError("FontSpec `file_path` must be non-empty when provided")
        if self.weight < 1 or self.weight > 1000:
            raise ValueError("FontSpec `weight` must be in [1, 1000]")

    @property
    def normalized_file_path(self) -> Path | None:
        if self.file_path is None:
            return None
        return Path(self.file_path)


@dataclass(frozen=True)
class TextAppearance:
    letter_spacing_px: float = 0.0
    line_height_multiplier: float = 1.2

    def __post_init__(self) -> None:
        if self.line_height_multiplier <= 0:
            raise ValueError("TextAppearance line_height_multiplier must be > 0")


@dataclass(frozen=True)
class TextMeasureRequest:
    text: str
    font: FontSpec
    font_size_px: float
    appearance: TextAppearance
    max_width_px: float | None = None


@dataclass(frozen=True)
class TextLayoutMetrics:
    width_px: float
    height_px: float
    line_count: int = 1


class TextMeasurer(Protocol):
    """Backend-agnostic text measurement used by best-fit layout."""

    def measure_text(self, request: TextMeasureRequest) -> TextLayoutMetrics:
        ...


def wrap_lines(text: str, *, max_width_px: float | None, line_advance: Callable[[str], float]) -> list[str]:
    """Greedy word wrap; a single word wider than the limit keeps its own line."""

    if text == "":
        return [""]
    out: list[str] = []
    for raw_line in text.splitlines() or [""]:
        if max_width_px is None:
            out.append(raw_line)
            continue
        words = raw_line.split(" ")
        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if line_advance(candidate) <= max_width_px:
                current = candidate
            else:
                out.append(current)
                current = word
        out.append(current)
    return out or [""]
