"""Monitoring for container-packing.

Provides run/benchmark metrics with JSON and CSV export, and Telegram
notifications for long benchmarks.
"""

from .metrics import (
    BenchmarkMetrics,
    RunMetrics,
    export_to_csv,
    export_to_json,
    format_run_summary,
    format_summary,
)
from .telegram_notifier import (
    format_benchmark_start,
    format_error,
    format_final_summary,
    format_run_milestone,
    send_telegram,
)

__all__ = [
    # Metrics
    "BenchmarkMetrics",
    "RunMetrics",
    "export_to_csv",
    "export_to_json",
    "format_run_summary",
    "format_summary",
    # Telegram
    "send_telegram",
    "format_benchmark_start",
    "format_run_milestone",
    "format_error",
    "format_final_summary",
]
