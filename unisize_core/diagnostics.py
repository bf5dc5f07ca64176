from __future__ import annotations

import json
from pathlib import Path
import threading
from typing import Any

DUPLICATE_WIDGET_ACTION = "duplicate_widget"


class JsonlDiagnosticsSink:
    """Append-only JSONL file for synchronizer usage warnings (duplicate adds)."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def log(self, entry: dict[str, Any]) -> None:
        with self._lock:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(json.dumps(entry, separators=(",", ":"), sort_keys=True))
                f.write("\n")

    def summarize(self) -> dict[str, Any]:
        """Counts entries by action, plus duplicate adds per widget.

        `duplicates` maps each widget label to how often it was added twice and
        the first/last `ts_ns` seen.
        """

        action_counts: dict[str, int] = {}
        duplicates: dict[str, dict[str, int | None]] = {}
        total = 0
        for row in self._read_rows():
            total += 1
            action = str(row.get("action", ""))
            action_counts[action] = action_counts.get(action, 0) + 1
            if action != DUPLICATE_WIDGET_ACTION:
                continue
            ts_ns = row.get("ts_ns")
            if not isinstance(ts_ns, int) or isinstance(ts_ns, bool):
                ts_ns = None
            stats = duplicates.setdefault(
                str(row.get("widget", "")),
                {"count": 0, "first_ts_ns": ts_ns, "last_ts_ns": ts_ns},
            )
            stats["count"] = int(stats["count"] or 0) + 1
            if ts_ns is not None:
                first = stats["first_ts_ns"]
                last = stats["last_ts_ns"]
                stats["first_ts_ns"] = ts_ns if first is None else min(first, ts_ns)
                stats["last_ts_ns"] = ts_ns if last is None else max(last, ts_ns)
        return {"total": total, "by_action": action_counts, "duplicates": duplicates}

    def prune(self, *, max_rows: int | None = None) -> int:
        if max_rows is None or max_rows <= 0 or not self.path.exists():
            return 0
        with self._lock:
            rows = [line for line in self.path.read_text(encoding="utf-8").splitlines() if line.strip()]
            if len(rows) <= max_rows:
                return 0
            kept = rows[-max_rows:]
            with self.path.open("w", encoding="utf-8") as f:
                for row in kept:
                    f.write(row)
                    f.write("\n")
        return len(rows) - len(kept)

    def _read_rows(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            return []
        rows: list[dict[str, Any]] = []
        with self.path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    row = json.loads(line)
                except json.JSONDecodeError:
                    # torn write from an interrupted process
                    continue
                if isinstance(row, dict):
                    rows.append(row)
        return rows
