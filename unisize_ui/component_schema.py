from __future__ import annotations

from dataclasses import dataclass


DEFAULT_FRAME = "screen_tl"


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float
    frame: str | None = None

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("BoundingBox width/height must be >= 0")

    def fits(self, width: float, height: float) -> bool:
        return width <= self.width and height <= self.height


def parse_box_notation(notation: str, default_frame: str | None = DEFAULT_FRAME) -> BoundingBox:
    """Parse `x,y,w,h` or `frame:x,y,w,h` into a BoundingBox."""

    raw = notation.strip()
    if not raw:
        raise ValueError("box notation must be non-empty")
    frame: str | None = default_frame
    coords = raw
    if ":" in raw:
        maybe_frame, maybe_coords = raw.split(":", 1)
        if not maybe_frame.strip():
            raise ValueError("box frame name must be non-empty")
        frame = maybe_frame.strip()
        coords = maybe_coords
    parts = [p.strip() for p in coords.split(",")]
    if len(parts) != 4:
        raise ValueError("box must use `x,y,w,h` format")
    x, y, width, height = (float(p) for p in parts)
    return BoundingBox(x=x, y=y, width=width, height=height, frame=frame)
