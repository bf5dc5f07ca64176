from __future__ import annotations

import unittest

from unisize_core.headless_host import HeadlessLayoutHost
from unisize_core.synchronizer import UnifiedTextSizeSynchronizer
from unisize_ui.component_schema import BoundingBox
from unisize_ui.text.component import AutoFitTextComponent
from unisize_ui.text.measurers import MonospaceTextMeasurer


def _label(component_id: str, text: str, width: float, height: float = 100.0) -> AutoFitTextComponent:
    return AutoFitTextComponent(
        component_id=component_id,
        text=text,
        box=BoundingBox(0.0, 0.0, width, height),
        resize_min_size=4,
        resize_max_size=64,
    )


class HeadlessLayoutHostTests(unittest.TestCase):
    def test_tick_runs_layout_before_tasks(self) -> None:
        host = HeadlessLayoutHost(MonospaceTextMeasurer())
        label = _label("a", "Hello", width=100.0)
        host.attach(label)
        seen: list[bool] = []
        host.schedule_after_next_tick(lambda: seen.append(label.layout_dirty))
        self.assertTrue(label.layout_dirty)
        self.assertEqual(host.tick(), 1)
        self.assertEqual(seen, [False])
        self.assertEqual(host.tick_count, 1)

    def test_cancelled_task_is_skipped(self) -> None:
        host = HeadlessLayoutHost(MonospaceTextMeasurer())
        calls: list[str] = []
        task = host.schedule_after_next_tick(lambda: calls.append("x"))
        self.assertEqual(host.pending_task_count, 1)
        task.cancel()
        self.assertEqual(host.pending_task_count, 0)
        self.assertEqual(host.tick(), 0)
        self.assertEqual(calls, [])
        self.assertFalse(task.done)

    def test_task_scheduled_during_tick_waits_for_next_tick(self) -> None:
        host = HeadlessLayoutHost(MonospaceTextMeasurer())
        calls: list[int] = []

        def first() -> None:
            calls.append(host.tick_count)
            host.schedule_after_next_tick(lambda: calls.append(host.tick_count))

        host.schedule_after_next_tick(first)
        host.tick()
        self.assertEqual(calls, [1])
        self.assertEqual(host.pending_task_count, 1)
        host.tick()
        self.assertEqual(calls, [1, 2])

    def test_raising_task_leaves_later_tasks_queued(self) -> None:
        host = HeadlessLayoutHost(MonospaceTextMeasurer())
        wide = _label("wide", "Hi", width=200.0, height=40.0)
        narrow = _label("narrow", "Hello", width=60.0, height=40.0)
        host.attach(wide)
        host.attach(narrow)
        sync = UnifiedTextSizeSynchronizer(host, [wide, narrow], min_size=4, max_size=64)

        def boom() -> None:
            raise RuntimeError("boom")

        failing = host.schedule_after_next_tick(boom)
        sync.recalculate_best_fit()
        with self.assertRaises(RuntimeError):
            host.tick()
        self.assertFalse(failing.done)
        self.assertTrue(sync.has_pending_recalculation)
        self.assertEqual(host.pending_task_count, 1)

        self.assertEqual(host.tick(), 1)
        self.assertFalse(sync.has_pending_recalculation)
        self.assertEqual(sync.unified_size, 20)
        self.assertEqual(host.pending_task_count, 0)

    def test_force_layout_refits_dirty_components_only(self) -> None:
        host = HeadlessLayoutHost(MonospaceTextMeasurer())
        a = _label("a", "Hello", width=100.0)
        b = _label("b", "Hello", width=100.0)
        host.attach(a)
        host.attach(b)
        host.force_layout_pass()
        self.assertEqual(a.current_fitted_size(), 33)
        b.set_text("Hello world, longer")
        host.force_layout_pass()
        self.assertEqual(a.current_fitted_size(), 33)
        self.assertLess(b.current_fitted_size(), 33)
        self.assertEqual(host.layout_pass_count, 2)

    def test_attach_is_idempotent_and_detach_reports(self) -> None:
        host = HeadlessLayoutHost(MonospaceTextMeasurer())
        label = _label("a", "Hello", width=100.0)
        host.attach(label)
        host.attach(label)
        self.assertEqual(host.components, (label,))
        self.assertTrue(host.detach(label))
        self.assertFalse(host.detach(label))

    def test_run_rejects_non_positive_ticks(self) -> None:
        host = HeadlessLayoutHost(MonospaceTextMeasurer())
        with self.assertRaises(ValueError):
            host.run(0)

    def test_synchronizer_with_headless_host(self) -> None:
        host = HeadlessLayoutHost(MonospaceTextMeasurer())
        wide = _label("wide", "Hi", width=200.0, height=40.0)
        narrow = _label("narrow", "Hello", width=60.0, height=40.0)
        host.attach(wide)
        host.attach(narrow)
        sync = UnifiedTextSizeSynchronizer(host, [wide, narrow], min_size=4, max_size=64)
        # "Hello" at 20px: 5 * 0.6 * 20 = 60 wide.
        self.assertEqual(sync.unified_size, 20)
        self.assertEqual(wide.upper_bound, 20)
        host.tick()
        self.assertEqual(wide.current_fitted_size(), 20)

        narrow.set_box(BoundingBox(0.0, 0.0, 120.0, 40.0))
        sync.recalculate_best_fit()
        self.assertEqual(host.run(2), 1)
        self.assertEqual(sync.unified_size, 33)
        self.assertEqual(narrow.current_fitted_size(), 33)


if __name__ == "__main__":
    unittest.main()
