from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from examples.unified_text_demo.app_main import DEMO_TOML, build_demo, run_script
from unisize_core.diagnostics import JsonlDiagnosticsSink


def main() -> None:
    parser = argparse.ArgumentParser(prog="unisize")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Run the scripted unified text size demo headless.")
    demo.add_argument("--config", type=Path, default=DEMO_TOML)
    demo.add_argument("--ticks", type=int, default=2, help="Ticks to advance after the recalculate click.")
    demo.add_argument("--diagnostics-jsonl", type=Path, default=None)

    report = sub.add_parser("diagnostics-report", help="Print a summary of a JSONL diagnostics file.")
    report.add_argument("--jsonl", type=Path, required=True)

    prune = sub.add_parser("diagnostics-prune", help="Keep only the newest diagnostics rows.")
    prune.add_argument("--jsonl", type=Path, required=True)
    prune.add_argument("--max-rows", type=int, required=True)
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "demo":
        sink = JsonlDiagnosticsSink(args.diagnostics_jsonl) if args.diagnostics_jsonl is not None else None
        ui = build_demo(args.config, diagnostics_logger=sink.log if sink is not None else None)
        for step in run_script(ui, ticks=args.ticks):
            print(
                f"{step.label}: tick={step.tick} unified_size={step.unified_size} "
                f"managed={step.managed_count}"
            )
        for component in ui.host.components:
            print(
                f"  {component.component_id}: bounds=[{component.lower_bound}, {component.upper_bound}] "
                f"fitted={component.current_fitted_size()}"
            )
        return

    if args.command == "diagnostics-report":
        print(json.dumps(JsonlDiagnosticsSink(args.jsonl).summarize(), indent=2, sort_keys=True))
        return

    if args.command == "diagnostics-prune":
        deleted = JsonlDiagnosticsSink(args.jsonl).prune(max_rows=args.max_rows)
        print(f"pruned rows={deleted}")
        return

    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    main()
