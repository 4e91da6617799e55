"""Tests for run/benchmark metrics and the Telegram notifier."""

import csv
import json

import httpx
import pytest

from container_packing.algorithms.placement_engine import pack_items
from container_packing.monitoring.metrics import (
    RUN_CSV_FIELDS,
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

from conftest import cube


@pytest.fixture
def result(cube_container):
    return pack_items([cube("a"), cube("b"), cube("c")], cube_container)


def make_run(run_id, utilization):
    return RunMetrics(
        run_id=run_id, container_id="c", items_total=10, items_packed=8,
        items_unpacked=2, utilization_pct=utilization, packed_volume=1.0,
        container_volume=2.0,
    )


class TestRunMetrics:
    def test_from_result(self, result):
        m = RunMetrics.from_result("r1", result, runtime_ms=4.5)
        assert m.container_id == "pair"
        assert (m.items_total, m.items_packed, m.items_unpacked) == (3, 2, 1)
        assert m.utilization_pct == 100.0
        assert m.runtime_ms == 4.5

    def test_to_dict_has_iso_timestamp(self, result):
        d = RunMetrics.from_result("r1", result).to_dict()
        assert isinstance(d["completed_at"], str)
        assert set(d) == set(RUN_CSV_FIELDS)


class TestBenchmarkMetrics:
    def test_aggregates(self):
        metrics = BenchmarkMetrics(benchmark_id="b", container_id="c", total_runs=4)
        for i, u in enumerate([50.0, 70.0, 60.0, 80.0]):
            metrics.add_run(make_run(f"r{i}", u))
        assert metrics.completed_runs == 4
        assert metrics.total_items == 40
        assert metrics.total_packed == 32
        assert metrics.avg_utilization_pct == pytest.approx(65.0)
        assert metrics.median_utilization_pct == pytest.approx(65.0)
        assert metrics.min_utilization_pct == 50.0
        assert metrics.max_utilization_pct == 80.0

    def test_odd_median(self):
        metrics = BenchmarkMetrics(benchmark_id="b", container_id="c")
        for i, u in enumerate([10.0, 30.0, 20.0]):
            metrics.add_run(make_run(f"r{i}", u))
        assert metrics.median_utilization_pct == 20.0

    def test_mark_complete(self):
        metrics = BenchmarkMetrics(benchmark_id="b", container_id="c")
        metrics.record_error()
        metrics.mark_complete()
        assert metrics.completed_at is not None
        assert metrics.runtime_seconds >= 0
        assert metrics.errors_count == 1
        assert "Errors: 1" in format_summary(metrics)

    def test_export(self, tmp_path):
        metrics = BenchmarkMetrics(benchmark_id="b", container_id="c", total_runs=2)
        metrics.add_run(make_run("r0", 40.0))
        metrics.add_run(make_run("r1", 60.0))

        json_path = tmp_path / "out" / "bench.json"
        export_to_json(metrics, json_path)
        data = json.loads(json_path.read_text())
        assert data["benchmark_id"] == "b"
        assert len(data["run_metrics"]) == 2

        export_to_json(metrics, json_path, include_runs=False)
        assert "run_metrics" not in json.loads(json_path.read_text())

        csv_path = tmp_path / "out" / "runs.csv"
        export_to_csv(metrics, csv_path)
        with csv_path.open() as f:
            rows = list(csv.DictReader(f))
        assert [r["run_id"] for r in rows] == ["r0", "r1"]
        assert rows[1]["utilization_pct"] == "60.0"


def test_format_run_summary(result):
    text = format_run_summary(result)
    assert "Utilization:      100.00%" in text
    assert "Unpacked ids:     c" in text


# ---------------------------------------------------------------------------
# Telegram
# ---------------------------------------------------------------------------

class TestTelegram:
    @pytest.mark.asyncio
    async def test_missing_token_is_a_noop(self, monkeypatch):
        monkeypatch.delenv("TELEGRAM_BOT_TOKEN", raising=False)
        monkeypatch.delenv("TELEGRAM_CHAT_ID", raising=False)
        assert await send_telegram("hello") is False

    @pytest.mark.asyncio
    async def test_missing_chat_id_is_a_noop(self, monkeypatch):
        monkeypatch.delenv("TELEGRAM_CHAT_ID", raising=False)
        assert await send_telegram("hello", token="t") is False

    @pytest.mark.asyncio
    async def test_sends_message(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True})

        ok = await send_telegram("hi", chat_id="42", token="secret",
                                 transport=httpx.MockTransport(handler))
        assert ok is True
        assert seen["url"] == "https://api.telegram.org/botsecret/sendMessage"
        assert seen["body"] == {"chat_id": "42", "text": "hi"}

    @pytest.mark.asyncio
    async def test_rejected_message(self):
        transport = httpx.MockTransport(
            lambda request: httpx.Response(400, json={"ok": False})
        )
        assert await send_telegram("hi", chat_id="42", token="t", transport=transport) is False

    @pytest.mark.asyncio
    async def test_network_error_returns_false(self):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        ok = await send_telegram("hi", chat_id="42", token="t",
                                 transport=httpx.MockTransport(handler))
        assert ok is False

    def test_formatters(self):
        assert "Container: 589 x 235 x 239 cm" in format_benchmark_start(10, 50, (589.0, 235.0, 239.0))
        assert "Completed: 5/10 runs (50%)" in format_run_milestone(5, 10, 60.0)
        assert format_error("ValueError", "bad", {"run": 1}).endswith("Context: run=1")
        assert "Items packed: 8/10" in format_final_summary(1, 8, 10, 60.0, 1.0, 0)
