"""Metrics tracking and export for packing runs.

Provides dataclasses for per-run and per-benchmark metrics and utilities
for exporting them to JSON and CSV.
"""

from __future__ import annotations

import csv
import json
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from container_packing.core.models import PackingResult

RUN_CSV_FIELDS = [
    "run_id", "container_id", "items_total", "items_packed", "items_unpacked",
    "utilization_pct", "packed_volume", "container_volume", "runtime_ms",
    "completed_at",
]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class RunMetrics:
    """Metrics for a single packing run.

    Attributes:
        run_id: Identifier of the run (dataset name or generated id).
        container_id: Container the items were packed into.
        items_total: Number of items submitted.
        items_packed: Number of items placed.
        items_unpacked: Number of items that did not fit.
        utilization_pct: Volume utilization percentage (0-100).
        packed_volume: Sum of placed item volumes in cubic cm.
        container_volume: Container volume in cubic cm.
        runtime_ms: Wall-clock time of the packing pass.
        completed_at: Timestamp when the run finished.
    """

    run_id: str
    container_id: str
    items_total: int
    items_packed: int
    items_unpacked: int
    utilization_pct: float
    packed_volume: float
    container_volume: float
    runtime_ms: float = 0.0
    completed_at: datetime = field(default_factory=_utcnow)

    @classmethod
    def from_result(
        cls, run_id: str, result: PackingResult, runtime_ms: float = 0.0
    ) -> "RunMetrics":
        """Build metrics from a PackingResult.

        Example:
            >>> from container_packing.core.models import Container, PackingResult
            >>> c = Container("c", 10, 10, 10)
            >>> m = RunMetrics.from_result("run_1", PackingResult.build(c, [], []))
            >>> m.items_total
            0
        """
        return cls(
            run_id=run_id,
            container_id=result.container.id,
            items_total=result.packed_count + result.unpacked_count,
            items_packed=result.packed_count,
            items_unpacked=result.unpacked_count,
            utilization_pct=result.utilization_pct,
            packed_volume=result.packed_volume,
            container_volume=result.container_volume,
            runtime_ms=runtime_ms,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with ISO timestamp."""
        d = asdict(self)
        d["completed_at"] = self.completed_at.isoformat()
        return d


@dataclass
class BenchmarkMetrics:
    """Aggregate metrics over many packing runs.

    Attributes:
        benchmark_id: Unique identifier for the benchmark.
        container_id: Container used for every run.
        total_runs: Number of runs planned.
        completed_runs: Number of runs recorded so far.
        total_items: Items submitted across all runs.
        total_packed: Items placed across all runs.
        avg_utilization_pct: Mean utilization across runs.
        median_utilization_pct: Median utilization across runs.
        min_utilization_pct: Minimum utilization across runs.
        max_utilization_pct: Maximum utilization across runs.
        runtime_seconds: Total runtime in seconds.
        errors_count: Number of failed runs.
        started_at: Benchmark start timestamp.
        completed_at: Completion timestamp (None while running).
        run_metrics: Per-run metrics.
    """

    benchmark_id: str
    container_id: str
    total_runs: int = 0
    completed_runs: int = 0
    total_items: int = 0
    total_packed: int = 0
    avg_utilization_pct: float = 0.0
    median_utilization_pct: float = 0.0
    min_utilization_pct: float = 0.0
    max_utilization_pct: float = 0.0
    runtime_seconds: float = 0.0
    errors_count: int = 0
    started_at: datetime = field(default_factory=_utcnow)
    completed_at: datetime | None = None
    run_metrics: list[RunMetrics] = field(default_factory=list)

    def add_run(self, run: RunMetrics) -> None:
        """Add a run's metrics and refresh the aggregates."""
        self.run_metrics.append(run)
        self.completed_runs += 1
        self.total_items += run.items_total
        self.total_packed += run.items_packed
        self._recalculate_stats()

    def record_error(self) -> None:
        self.errors_count += 1

    def mark_complete(self) -> None:
        """Mark the benchmark complete and compute its runtime."""
        self.completed_at = _utcnow()
        self.runtime_seconds = (self.completed_at - self.started_at).total_seconds()

    def _recalculate_stats(self) -> None:
        if not self.run_metrics:
            return

        utilizations = [r.utilization_pct for r in self.run_metrics]
        self.avg_utilization_pct = sum(utilizations) / len(utilizations)
        self.min_utilization_pct = min(utilizations)
        self.max_utilization_pct = max(utilizations)

        sorted_utils = sorted(utilizations)
        n = len(sorted_utils)
        if n % 2 == 0:
            self.median_utilization_pct = (sorted_utils[n // 2 - 1] + sorted_utils[n // 2]) / 2
        else:
            self.median_utilization_pct = sorted_utils[n // 2]

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["started_at"] = self.started_at.isoformat()
        d["completed_at"] = self.completed_at.isoformat() if self.completed_at else None
        d["run_metrics"] = [r.to_dict() for r in self.run_metrics]
        return d

    def to_summary_dict(self) -> dict[str, Any]:
        """Aggregate metrics only, without the per-run list."""
        d = self.to_dict()
        del d["run_metrics"]
        return d


def export_to_json(metrics: BenchmarkMetrics, output_path: Path | str, include_runs: bool = True) -> None:
    """Export benchmark metrics to a JSON file.

    Args:
        metrics: BenchmarkMetrics instance to export.
        output_path: Path to output JSON file.
        include_runs: If False, write the summary only.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = metrics.to_dict() if include_runs else metrics.to_summary_dict()

    with output_path.open("w") as f:
        json.dump(data, f, indent=2)


def export_to_csv(metrics: BenchmarkMetrics, output_path: Path | str) -> None:
    """Export per-run metrics to a CSV file (header only when empty)."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with output_path.open("w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=RUN_CSV_FIELDS)
        writer.writeheader()
        for run in metrics.run_metrics:
            writer.writerow(run.to_dict())


def format_run_summary(result: PackingResult) -> str:
    """Human-readable summary of a single packing result."""
    c = result.container
    lines = [
        "=" * 60,
        f"Container: {c.name or c.id} ({c.length:g} x {c.width:g} x {c.height:g} cm)",
        "=" * 60,
        f"Items packed:     {result.packed_count}",
        f"Items unpacked:   {result.unpacked_count}",
        f"Container volume: {result.container_volume:,.0f} cm3",
        f"Packed volume:    {result.packed_volume:,.0f} cm3",
        f"Utilization:      {result.utilization_pct:.2f}%",
    ]
    if result.unpacked:
        lines.append(f"Unpacked ids:     {', '.join(result.unpacked_ids)}")
    lines.append("=" * 60)
    return "\n".join(lines)


def format_summary(metrics: BenchmarkMetrics) -> str:
    """Human-readable summary of a benchmark."""
    lines = [
        "=" * 60,
        f"Benchmark: {metrics.benchmark_id}",
        f"Container: {metrics.container_id}",
        "=" * 60,
        f"Runs: {metrics.completed_runs}/{metrics.total_runs}",
        f"Items packed: {metrics.total_packed}/{metrics.total_items}",
        "",
        "Utilization Statistics:",
        f"  Average: {metrics.avg_utilization_pct:.2f}%",
        f"  Median:  {metrics.median_utilization_pct:.2f}%",
        f"  Min:     {metrics.min_utilization_pct:.2f}%",
        f"  Max:     {metrics.max_utilization_pct:.2f}%",
        "",
        f"Runtime: {metrics.runtime_seconds:.1f} seconds",
        f"Errors: {metrics.errors_count}",
        "",
        f"Started:   {metrics.started_at.isoformat()}",
        f"Completed: {metrics.completed_at.isoformat() if metrics.completed_at else 'In Progress'}",
        "=" * 60,
    ]
    return "\n".join(lines)
