from __future__ import annotations

from dataclasses import dataclass, field

from unisize_ui.component_schema import BoundingBox

from .renderer import FontSpec, TextAppearance, TextMeasureRequest, TextMeasurer


@dataclass(eq=False)
class AutoFitTextComponent:
    """Text component that best-fits its font size into its box.

    - The fitted size is the largest integer size in
      `[resize_min_size, resize_max_size]` whose wrapped text fits the box, or
      `resize_min_size` when nothing fits.
    - The component is dirty whenever its text, box, font, appearance or bounds
      differ from the values of the last `fit(...)`, however they were changed.
      The layout host refits dirty components.
    - Components compare by identity.
    """

    component_id: str
    text: str = ""
    box: BoundingBox = field(default_factory=lambda: BoundingBox(0.0, 0.0, 100.0, 20.0))
    font: FontSpec = field(default_factory=FontSpec)
    appearance: TextAppearance = field(default_factory=TextAppearance)
    resize_min_size: int = 1
    resize_max_size: int = 250
    _fitted_size: int | None = field(default=None, init=False, repr=False)
    _fitted_inputs: tuple[object, ...] | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        _check_size(self.resize_min_size, "resize_min_size")
        _check_size(self.resize_max_size, "resize_max_size")

    @property
    def layout_dirty(self) -> bool:
        return self._fitted_inputs != self._layout_inputs()

    @property
    def lower_bound(self) -> int:
        return self.resize_min_size

    @lower_bound.setter
    def lower_bound(self, value: int) -> None:
        _check_size(value, "lower_bound")
        self.resize_min_size = value

    @property
    def upper_bound(self) -> int:
        return self.resize_max_size

    @upper_bound.setter
    def upper_bound(self, value: int) -> None:
        _check_size(value, "upper_bound")
        self.resize_max_size = value

    def set_text(self, text: str) -> None:
        self.text = text

    def set_box(self, box: BoundingBox) -> None:
        self.box = box

    def current_fitted_size(self) -> int:
        """Size chosen by the last fit; stale until the host refits a dirty component."""

        if self._fitted_size is None:
            return self.resize_max_size
        return self._fitted_size

    def fit(self, measurer: TextMeasurer) -> int:
        lo = min(self.resize_min_size, self.resize_max_size)
        hi = self.resize_max_size
        best = lo
        while lo <= hi:
            mid = (lo + hi) // 2
            if self._fits(measurer, mid):
                best = mid
                lo = mid + 1
            else:
                hi = mid - 1
        self._fitted_size = best
        self._fitted_inputs = self._layout_inputs()
        return best

    def _layout_inputs(self) -> tuple[object, ...]:
        return (self.text, self.box, self.font, self.appearance, self.resize_min_size, self.resize_max_size)

    def _fits(self, measurer: TextMeasurer, size: int) -> bool:
        metrics = measurer.measure_text(
            TextMeasureRequest(
                text=self.text,
                font=self.font,
                font_size_px=float(size),
                appearance=self.appearance,
                max_width_px=self.box.width,
            )
        )
        return self.box.fits(metrics.width_px, metrics.height_px)


def _check_size(value: int, name: str) -> None:
    if value < 1:
        raise ValueError(f"{name} must be >= 1")
