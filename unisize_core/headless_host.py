from __future__ import annotations

from dataclasses import dataclass
import logging

from unisize_ui.text.component import AutoFitTextComponent
from unisize_ui.text.renderer import TextMeasurer

from .widget_handle import TickCallback

LOGGER = logging.getLogger(__name__)


@dataclass
class TickTask:
    callback: TickCallback
    scheduled_at_tick: int
    cancelled: bool = False
    done: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class HeadlessLayoutHost:
    """Layout host that refits attached text components without a window.

    Each `tick()` runs a layout pass over dirty components, then runs the
    tasks scheduled before that tick began. Tasks scheduled while a tick is
    running wait for the following tick.
    """

    def __init__(self, measurer: TextMeasurer) -> None:
        self._measurer = measurer
        self._components: list[AutoFitTextComponent] = []
        self._tasks: list[TickTask] = []
        self._tick_count = 0
        self._layout_pass_count = 0

    @property
    def tick_count(self) -> int:
        return self._tick_count

    @property
    def layout_pass_count(self) -> int:
        return self._layout_pass_count

    @property
    def pending_task_count(self) -> int:
        return sum(1 for task in self._tasks if not task.cancelled)

    @property
    def components(self) -> tuple[AutoFitTextComponent, ...]:
        return tuple(self._components)

    def attach(self, component: AutoFitTextComponent) -> None:
        if any(c is component for c in self._components):
            return
        self._components.append(component)

    def detach(self, component: AutoFitTextComponent) -> bool:
        for i, c in enumerate(self._components):
            if c is component:
                del self._components[i]
                return True
        return False

    def force_layout_pass(self) -> None:
        refitted = 0
        for component in self._components:
            if component.layout_dirty:
                component.fit(self._measurer)
                refitted += 1
        self._layout_pass_count += 1
        LOGGER.debug("layout pass %d refitted %d components", self._layout_pass_count, refitted)

    def schedule_after_next_tick(self, callback: TickCallback) -> TickTask:
        task = TickTask(callback=callback, scheduled_at_tick=self._tick_count)
        self._tasks.append(task)
        return task

    def tick(self) -> int:
        """Advance one tick; returns the number of tasks that ran.

        A task leaves the queue just before its callback runs. If a callback
        raises, the due tasks after it stay queued and run on the next tick.
        """

        due = [task for task in self._tasks if task.scheduled_at_tick <= self._tick_count]
        self._tick_count += 1
        self.force_layout_pass()
        ran = 0
        for task in due:
            self._discard(task)
            if task.cancelled:
                continue
            task.callback()
            task.done = True
            ran += 1
        return ran

    def run(self, max_ticks: int) -> int:
        if max_ticks <= 0:
            raise ValueError("max_ticks must be > 0")
        ran = 0
        for _ in range(max_ticks):
            ran += self.tick()
        return ran

    def _discard(self, task: TickTask) -> None:
        for i, queued in enumerate(self._tasks):
            if queued is task:
                del self._tasks[i]
                return
