from __future__ import annotations

from typing import Callable, Protocol


TickCallback = Callable[[], None]


class FitWidgetHandle(Protocol):
    """Text widget whose font size is best-fit by its host between two bounds.

    Writing a bound does not refit the widget. `current_fitted_size()` is only
    meaningful after a host layout pass that followed the last bound change.
    """

    @property
    def lower_bound(self) -> int:
        ...

    @lower_bound.setter
    def lower_bound(self, value: int) -> None:
        ...

    @property
    def upper_bound(self) -> int:
        ...

    @upper_bound.setter
    def upper_bound(self, value: int) -> None:
        ...

    def current_fitted_size(self) -> int:
        ...


class ScheduledTask(Protocol):
    def cancel(self) -> None:
        ...


class LayoutHost(Protocol):
    """Layout and tick scheduling owned by the embedding application."""

    def force_layout_pass(self) -> None:
        ...

    def schedule_after_next_tick(self, callback: TickCallback) -> ScheduledTask:
        ...
