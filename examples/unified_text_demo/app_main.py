from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import tomllib
from typing import Any

from unisize_core.config import CONFIG_TABLE, SyncConfig, sync_config_from_mapping
from unisize_core.headless_host import HeadlessLayoutHost
from unisize_core.synchronizer import DiagnosticsLogger, UnifiedTextSizeSynchronizer
from unisize_ui.component_schema import parse_box_notation
from unisize_ui.text.component import AutoFitTextComponent
from unisize_ui.text.measurers import MonospaceTextMeasurer, PillowTextMeasurer
from unisize_ui.text.renderer import TextMeasurer


APP_DIR = Path(__file__).resolve().parent
DEMO_TOML = APP_DIR / "demo.toml"
RESIZED_TEXT = "The Font Resized!"
WIDGET_ROLES = ("managed", "overfilled", "spare")


@dataclass
class DemoUI:
    """Two-button demo: shorten the overfilled label, or add the spare label."""

    synchronizer: UnifiedTextSizeSynchronizer
    host: HeadlessLayoutHost
    overfilled_text: AutoFitTextComponent
    text_to_add: AutoFitTextComponent

    def on_recalculate_clicked(self) -> None:
        self.overfilled_text.set_text(RESIZED_TEXT)
        self.synchronizer.recalculate_best_fit()

    def on_add_text_clicked(self) -> None:
        self.host.attach(self.text_to_add)
        self.synchronizer.add_widget(self.text_to_add)


@dataclass(frozen=True)
class DemoStep:
    label: str
    tick: int
    unified_size: int
    managed_count: int


def build_demo(
    config_path: str | Path = DEMO_TOML,
    *,
    measurer: TextMeasurer | None = None,
    diagnostics_logger: DiagnosticsLogger | None = None,
) -> DemoUI:
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"demo config not found: {path}")
    with path.open("rb") as f:
        raw = tomllib.load(f)
    config = sync_config_from_mapping(raw.get(CONFIG_TABLE, {}))
    host = HeadlessLayoutHost(measurer or _build_measurer(raw.get("measurer", {})))

    by_role: dict[str, list[AutoFitTextComponent]] = {role: [] for role in WIDGET_ROLES}
    for entry in raw.get("widgets", []):
        role, component = _build_widget(entry, config)
        if role != "spare":
            host.attach(component)
        by_role[role].append(component)
    if len(by_role["overfilled"]) != 1 or len(by_role["spare"]) != 1:
        raise ValueError("demo needs exactly one `overfilled` and one `spare` widget")

    managed = by_role["managed"] + by_role["overfilled"]
    synchronizer = UnifiedTextSizeSynchronizer.from_config(
        host,
        config,
        managed,
        diagnostics_logger=diagnostics_logger,
    )
    return DemoUI(
        synchronizer=synchronizer,
        host=host,
        overfilled_text=by_role["overfilled"][0],
        text_to_add=by_role["spare"][0],
    )


def run_script(demo: DemoUI, *, ticks: int = 2) -> list[DemoStep]:
    """Start, press "recalculate", let ticks pass, then press "add text"."""

    if ticks <= 0:
        raise ValueError("ticks must be > 0")
    steps = [_step(demo, "start")]
    demo.on_recalculate_clicked()
    steps.append(_step(demo, "recalculate_clicked"))
    for _ in range(ticks):
        demo.host.tick()
        steps.append(_step(demo, "tick"))
    demo.on_add_text_clicked()
    steps.append(_step(demo, "add_text_clicked"))
    return steps


def _step(demo: DemoUI, label: str) -> DemoStep:
    return DemoStep(
        label=label,
        tick=demo.host.tick_count,
        unified_size=demo.synchronizer.unified_size,
        managed_count=demo.synchronizer.managed_count,
    )


def _build_measurer(table: Any) -> TextMeasurer:
    if not isinstance(table, dict):
        raise ValueError("`measurer` must be a table")
    kind = table.get("kind", "monospace")
    if kind == "monospace":
        return MonospaceTextMeasurer(advance_ratio=float(table.get("advance_ratio", 0.6)))
    if kind == "pillow":
        return PillowTextMeasurer()
    raise ValueError(f"unknown measurer kind: {kind}")


def _build_widget(entry: Any, config: SyncConfig) -> tuple[str, AutoFitTextComponent]:
    if not isinstance(entry, dict):
        raise ValueError("each `widgets` entry must be a table")
    try:
        component_id = str(entry["id"])
        box = parse_box_notation(str(entry["box"]))
    except KeyError as exc:
        raise ValueError(f"widget missing required field: {exc.args[0]}") from exc
    role = str(entry.get("role", "managed"))
    if role not in WIDGET_ROLES:
        raise ValueError(f"widget `{component_id}` has unknown role: {role}")
    component = AutoFitTextComponent(
        component_id=component_id,
        text=str(entry.get("text", "")),
        box=box,
        resize_min_size=config.min_size,
        resize_max_size=config.max_size,
    )
    return role, component
