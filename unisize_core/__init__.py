from .config import (
    CONFIG_TABLE,
    DEFAULT_MAX_SIZE,
    DEFAULT_MIN_SIZE,
    SizeBoundsError,
    SyncConfig,
    load_sync_config,
    sync_config_from_mapping,
)
from .diagnostics import DUPLICATE_WIDGET_ACTION, JsonlDiagnosticsSink
from .headless_host import HeadlessLayoutHost, TickTask
from .synchronizer import DiagnosticsLogger, UnifiedTextSizeSynchronizer
from .widget_handle import FitWidgetHandle, LayoutHost, ScheduledTask, TickCallback

__all__ = [
    "CONFIG_TABLE",
    "DEFAULT_MAX_SIZE",
    "DEFAULT_MIN_SIZE",
    "DUPLICATE_WIDGET_ACTION",
    "DiagnosticsLogger",
    "FitWidgetHandle",
    "HeadlessLayoutHost",
    "JsonlDiagnosticsSink",
    "LayoutHost",
    "ScheduledTask",
    "SizeBoundsError",
    "SyncConfig",
    "TickCallback",
    "TickTask",
    "UnifiedTextSizeSynchronizer",
    "load_sync_config",
    "sync_config_from_mapping",
]
