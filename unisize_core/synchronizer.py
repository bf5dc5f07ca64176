from __future__ import annotations

import logging
import time
from typing import Callable, Iterable

from .config import DEFAULT_MAX_SIZE, DEFAULT_MIN_SIZE, SyncConfig
from .diagnostics import DUPLICATE_WIDGET_ACTION
from .widget_handle import FitWidgetHandle, LayoutHost, ScheduledTask

LOGGER = logging.getLogger(__name__)

DiagnosticsLogger = Callable[[dict[str, object]], None]


class UnifiedTextSizeSynchronizer:
    """Keeps a set of best-fit text widgets at one shared font size.

    The shared size is the smallest natural fit size among the managed widgets,
    clamped to `[min_size, max_size]`, and is pushed to every widget as its
    upper bound. Recalculation is either immediate (forces a host layout pass)
    or deferred until after the host's next tick. Deferred requests coalesce:
    only the most recent one runs.
    """

    def __init__(
        self,
        host: LayoutHost,
        widgets: Iterable[FitWidgetHandle] = (),
        *,
        min_size: int = DEFAULT_MIN_SIZE,
        max_size: int = DEFAULT_MAX_SIZE,
        immediate_setup: bool = True,
        diagnostics_logger: DiagnosticsLogger | None = None,
    ) -> None:
        self._config = SyncConfig(min_size=min_size, max_size=max_size, immediate_setup=immediate_setup)
        self._host = host
        self._widgets: list[FitWidgetHandle] = list(widgets)
        self._diagnostics_logger = diagnostics_logger
        self._unified_size = self._config.max_size
        self._pending_task: ScheduledTask | None = None
        if self._config.immediate_setup:
            self.recalculate_immediately()
        else:
            self.recalculate_best_fit()

    @classmethod
    def from_config(
        cls,
        host: LayoutHost,
        config: SyncConfig,
        widgets: Iterable[FitWidgetHandle] = (),
        *,
        diagnostics_logger: DiagnosticsLogger | None = None,
    ) -> "UnifiedTextSizeSynchronizer":
        return cls(
            host,
            widgets,
            min_size=config.min_size,
            max_size=config.max_size,
            immediate_setup=config.immediate_setup,
            diagnostics_logger=diagnostics_logger,
        )

    @property
    def min_size(self) -> int:
        return self._config.min_size

    @property
    def max_size(self) -> int:
        return self._config.max_size

    @property
    def unified_size(self) -> int:
        return self._unified_size

    @property
    def managed_count(self) -> int:
        return len(self._widgets)

    @property
    def widgets(self) -> tuple[FitWidgetHandle, ...]:
        return tuple(self._widgets)

    @property
    def has_pending_recalculation(self) -> bool:
        return self._pending_task is not None

    def add_widget(self, widget: FitWidgetHandle) -> None:
        """Adds a widget and lowers the shared size right away if it needs less room.

        A larger shared size is never picked up here; call `recalculate_best_fit`
        or `recalculate_immediately` for that. The host must already lay the
        widget out (e.g. `HeadlessLayoutHost.attach`); otherwise its fitted size
        is never refreshed by the forced layout pass.
        """

        if self._index_of(widget) is not None:
            LOGGER.warning("adding duplicate entry for widget %r; it will be managed twice", widget)
            self._report(DUPLICATE_WIDGET_ACTION, widget)
        _constrain(widget, self._unified_size)
        self._widgets.append(widget)
        self._host.force_layout_pass()
        self._update_sizes()

    def remove_widget(self, widget: FitWidgetHandle) -> bool:
        index = self._index_of(widget)
        if index is None:
            return False
        del self._widgets[index]
        return True

    def clear_managed_widgets(self) -> None:
        self._widgets.clear()

    def recalculate_immediately(self) -> None:
        """Resets the bounds and recalculates within this call.

        Forces a full host layout pass, so this is the expensive path.
        """

        if not self._widgets:
            LOGGER.debug("recalculate_immediately skipped: no managed widgets")
            return
        self._reset_bounds()
        self._host.force_layout_pass()
        self._update_sizes()

    def recalculate_best_fit(self) -> None:
        """Resets the bounds and recalculates after the host's next tick.

        A request still waiting for its tick is cancelled and replaced.
        """

        if self._pending_task is not None:
            LOGGER.debug("cancelling pending best-fit recalculation")
            self._pending_task.cancel()
            self._pending_task = None
        if not self._widgets:
            LOGGER.debug("recalculate_best_fit skipped: no managed widgets")
            return
        self._reset_bounds()
        self._pending_task = self._host.schedule_after_next_tick(self._finish_best_fit)

    def _finish_best_fit(self) -> None:
        self._update_sizes()
        self._pending_task = None

    def _reset_bounds(self) -> None:
        lo = self._config.min_size
        hi = self._config.max_size
        for widget in self._widgets:
            # Whichever write goes first must keep lower <= upper.
            if lo <= widget.upper_bound:
                widget.lower_bound = lo
                widget.upper_bound = hi
            else:
                widget.upper_bound = hi
                widget.lower_bound = lo
        self._unified_size = self._config.max_size

    def _update_sizes(self) -> None:
        if not self._widgets:
            return
        smallest = self._smallest_fitted_size()
        if smallest == self._unified_size:
            LOGGER.debug("unified size unchanged at %d", smallest)
            return
        for widget in self._widgets:
            _constrain(widget, smallest)
        LOGGER.debug("unified size %d -> %d across %d widgets", self._unified_size, smallest, len(self._widgets))
        self._unified_size = smallest

    def _smallest_fitted_size(self) -> int:
        lo = self._config.min_size
        hi = self._config.max_size
        smallest = min(min(max(widget.current_fitted_size(), lo), hi) for widget in self._widgets)
        return max(lo, smallest)

    def _index_of(self, widget: FitWidgetHandle) -> int | None:
        for i, managed in enumerate(self._widgets):
            if managed is widget:
                return i
        return None

    def _report(self, action: str, widget: FitWidgetHandle) -> None:
        if self._diagnostics_logger is None:
            return
        self._diagnostics_logger(
            {
                "ts_ns": time.time_ns(),
                "action": action,
                "widget": _widget_label(widget),
                "actor": "unified_text_size",
            }
        )


def _constrain(widget: FitWidgetHandle, size: int) -> None:
    # Lower first so lower <= upper holds between the two writes.
    widget.lower_bound = min(widget.lower_bound, size)
    widget.upper_bound = size


def _widget_label(widget: FitWidgetHandle) -> str:
    component_id = getattr(widget, "component_id", None)
    if component_id is not None:
        return str(component_id)
    return repr(widget)
