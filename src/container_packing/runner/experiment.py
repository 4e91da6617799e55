"""Packing runner and command-line interface."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from container_packing.algorithms.placement_engine import PlacementEngine
from container_packing.algorithms.verification import verify_result
from container_packing.core.config import PackingConfig, load_config
from container_packing.core.errors import PackingError
from container_packing.core.models import (
    CONTAINER_PRESETS,
    Container,
    Item,
    PackingResult,
    get_container_preset,
)
from container_packing.monitoring.metrics import (
    BenchmarkMetrics,
    RunMetrics,
    export_to_csv,
    export_to_json,
    format_run_summary,
    format_summary,
)
from container_packing.monitoring.telegram_notifier import (
    format_benchmark_start,
    format_error,
    format_final_summary,
    format_run_milestone,
    send_telegram,
)
from container_packing.runner.dataset import generate_items, load_request, sample_items

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_container(value: str) -> Container:
    """
    Parse a container argument: a preset key or "LxWxH" in cm.

    Raises:
        UnknownContainerError: for an unknown preset key.
        ValueError: for a malformed or non-positive "LxWxH".
    """
    if value in CONTAINER_PRESETS:
        return get_container_preset(value)
    parts = value.lower().split("x")
    if len(parts) != 3:
        return get_container_preset(value)
    dims = [float(p) for p in parts]
    if any(d <= 0 for d in dims):
        raise ValueError(f"container dimensions must be positive: {value}")
    return Container(id=value, name=f"Custom {value}", length=dims[0],
                     width=dims[1], height=dims[2])


class PackingRunner:
    """
    Orchestrates packing runs and benchmarks.

    Packs item lists with the PlacementEngine, records metrics, saves
    results and (optionally) sends Telegram progress updates.
    """

    def __init__(
        self,
        config: Optional[PackingConfig] = None,
        results_dir: Path | str = "results",
        send_telegram_updates: bool = False,
        verify: bool = False,
    ):
        """
        Args:
            config: Packing tolerances (default: PackingConfig()).
            results_dir: Directory for benchmark output files.
            send_telegram_updates: Whether to send Telegram notifications.
            verify: Re-check every result's invariants after packing.
        """
        self.engine = PlacementEngine(config)
        self.results_dir = Path(results_dir)
        self.send_telegram_updates = send_telegram_updates
        self.verify = verify

    @property
    def config(self) -> PackingConfig:
        return self.engine.config

    def run(
        self,
        items: Sequence[Item],
        container: Container,
        run_id: Optional[str] = None,
    ) -> Tuple[PackingResult, RunMetrics]:
        """Pack one item list and measure it."""
        run_id = run_id or f"run_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
        t0 = time.perf_counter()
        result = self.engine.pack(items, container)
        elapsed_ms = (time.perf_counter() - t0) * 1000
        if self.verify:
            verify_result(result, self.config)
        return result, RunMetrics.from_result(run_id, result, runtime_ms=elapsed_ms)

    async def run_benchmark(
        self,
        num_datasets: int = 10,
        items_per_dataset: int = 50,
        container: Optional[Container] = None,
    ) -> BenchmarkMetrics:
        """
        Pack `num_datasets` seeded random item lists into `container`.

        Flow:
            1. Create benchmark metrics and send the start notification
            2. For each dataset: generate items (seed = index), pack,
               record metrics, save interim results
            3. Mark complete, save final results, send the summary
        """
        container = container or get_container_preset("20ft")
        benchmark_id = f"bench_{datetime.now(timezone.utc).strftime('%Y%m%d_%H%M%S')}"
        metrics = BenchmarkMetrics(
            benchmark_id=benchmark_id,
            container_id=container.id,
            total_runs=num_datasets,
        )

        if self.send_telegram_updates:
            await send_telegram(format_benchmark_start(
                total_runs=num_datasets,
                items_per_run=items_per_dataset,
                container_dims=container.dimensions,
            ))

        for idx in range(num_datasets):
            run_id = f"dataset_{idx:03d}"
            items = generate_items(count=items_per_dataset, seed=idx)
            try:
                _, run_metrics = self.run(items, container, run_id=run_id)
            except PackingError as exc:
                metrics.record_error()
                logger.error("run %s failed: %s", run_id, exc)
                if self.send_telegram_updates:
                    await send_telegram(format_error(type(exc).__name__, str(exc), {"run": run_id}))
                continue

            metrics.add_run(run_metrics)
            self._save_results(metrics, suffix="_interim")

            if self.send_telegram_updates and idx % 5 == 4:
                await send_telegram(format_run_milestone(
                    runs_completed=metrics.completed_runs,
                    total_runs=metrics.total_runs,
                    avg_utilization=metrics.avg_utilization_pct,
                ))

        metrics.mark_complete()
        self._save_results(metrics, suffix="_final")

        if self.send_telegram_updates:
            await send_telegram(format_final_summary(
                total_runs=metrics.completed_runs,
                total_packed=metrics.total_packed,
                total_items=metrics.total_items,
                avg_utilization=metrics.avg_utilization_pct,
                runtime_seconds=metrics.runtime_seconds,
                errors=metrics.errors_count,
            ))

        return metrics

    def _save_results(self, metrics: BenchmarkMetrics, suffix: str = "") -> None:
        """Save metrics as JSON (summary for interim files) and CSV."""
        base_filename = f"{metrics.benchmark_id}{suffix}"
        json_path = self.results_dir / f"{base_filename}.json"
        export_to_json(metrics, json_path, include_runs=suffix.endswith("_final"))
        csv_path = self.results_dir / f"{base_filename}_runs.csv"
        export_to_csv(metrics, csv_path)
        logger.debug("saved results to %s and %s", json_path, csv_path)


def save_result(result: PackingResult, path: Path | str) -> None:
    """Write a packing result record as JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w") as f:
        json.dump(result.to_dict(), f, indent=2)


# ─────────────────────────────────────────────────────────────────────────────
# CLI
# ─────────────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="container-pack",
        description="Pack rectangular cargo into a shipping container",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log every placement decision")
    parser.add_argument("--config", type=Path, default=None,
                        help="YAML file with packing tolerances")
    sub = parser.add_subparsers(dest="command", required=True)

    pack = sub.add_parser("pack", help="Pack items from a JSON/YAML file")
    pack.add_argument("--items", type=Path, required=True,
                      help="Dataset file with item descriptors")
    pack.add_argument("--container", default=None,
                      help="Preset (20ft, 40ft) or LxWxH; overrides the file")
    pack.add_argument("--output", type=Path, default=None,
                      help="Write the packing result as JSON")
    pack.add_argument("--verify", action="store_true",
                      help="Re-check result invariants")

    sample = sub.add_parser("sample", help="Pack the built-in sample cargo")
    sample.add_argument("--container", default="20ft")
    sample.add_argument("--output", type=Path, default=None)

    bench = sub.add_parser("benchmark", help="Pack seeded random datasets")
    bench.add_argument("--datasets", type=int, default=10,
                       help="Number of datasets (default: 10)")
    bench.add_argument("--items", type=int, default=50,
                       help="Items per dataset (default: 50)")
    bench.add_argument("--container", default="20ft")
    bench.add_argument("--results-dir", type=Path, default=Path("results"))
    bench.add_argument("--notify", action="store_true",
                       help="Send Telegram progress updates")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``container-pack``; returns the process exit code."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
    )

    try:
        config = load_config(args.config) if args.config else PackingConfig()

        if args.command == "benchmark":
            runner = PackingRunner(config, results_dir=args.results_dir,
                                   send_telegram_updates=args.notify)
            metrics = asyncio.run(runner.run_benchmark(
                num_datasets=args.datasets,
                items_per_dataset=args.items,
                container=parse_container(args.container),
            ))
            print(format_summary(metrics))
            return 0

        if args.command == "pack":
            request = load_request(args.items)
            if args.container:
                container = parse_container(args.container)
            else:
                container = request.to_container() or get_container_preset("20ft")
            items = request.to_items()
            runner = PackingRunner(config, verify=args.verify)
            run_id = request.name or args.items.stem
        else:
            container = parse_container(args.container)
            items = sample_items()
            runner = PackingRunner(config)
            run_id = "sample"

        result, _ = runner.run(items, container, run_id=run_id)
        print(format_run_summary(result))
        if args.output:
            save_result(result, args.output)
            logger.info("result written to %s", args.output)
        return 0
    except (PackingError, ValueError, OSError) as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
