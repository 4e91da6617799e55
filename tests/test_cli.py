"""Tests for the PackingRunner and the ``container-pack`` command line."""

import json

import pytest

from container_packing.core.errors import UnknownContainerError
from container_packing.runner.dataset import save_items, sample_items
from container_packing.runner import experiment
from container_packing.runner.experiment import PackingRunner, main, parse_container


class TestParseContainer:
    def test_preset(self):
        assert parse_container("40ft").length == 1203

    def test_dimensions(self):
        c = parse_container("300x200x100")
        assert c.dimensions == (300.0, 200.0, 100.0)

    def test_unknown_preset(self):
        with pytest.raises(UnknownContainerError):
            parse_container("45ft")

    @pytest.mark.parametrize("value", ["0x10x10", "axbxc"])
    def test_bad_dimensions(self, value):
        with pytest.raises(ValueError):
            parse_container(value)


class TestPackingRunner:
    def test_run_returns_metrics(self, container_20ft):
        runner = PackingRunner(verify=True)
        result, metrics = runner.run(sample_items(), container_20ft, run_id="demo")
        assert metrics.run_id == "demo"
        assert metrics.items_packed == result.packed_count == 5
        assert metrics.utilization_pct == result.utilization_pct

    @pytest.mark.asyncio
    async def test_benchmark_writes_results(self, tmp_path, cube_container):
        runner = PackingRunner(results_dir=tmp_path)
        metrics = await runner.run_benchmark(
            num_datasets=3, items_per_dataset=10, container=cube_container,
        )
        assert metrics.completed_runs == 3
        assert metrics.total_items == 30
        assert metrics.completed_at is not None

        final = list(tmp_path.glob("*_final.json"))
        assert len(final) == 1
        data = json.loads(final[0].read_text())
        assert len(data["run_metrics"]) == 3
        assert list(tmp_path.glob("*_final_runs.csv"))

    @pytest.mark.asyncio
    async def test_benchmark_is_offline_by_default(self, tmp_path, cube_container, monkeypatch):
        async def fail(*args, **kwargs):
            raise AssertionError("telegram called without send_telegram_updates")

        monkeypatch.setattr(experiment, "send_telegram", fail)
        runner = PackingRunner(results_dir=tmp_path)
        metrics = await runner.run_benchmark(
            num_datasets=2, items_per_dataset=5, container=cube_container,
        )
        assert metrics.completed_runs == 2


class TestMain:
    def test_sample(self, capsys):
        assert main(["sample"]) == 0
        out = capsys.readouterr().out
        assert "Items packed:     5" in out
        assert "Utilization:" in out

    def test_pack_writes_output(self, tmp_path, capsys):
        items_path = tmp_path / "items.json"
        save_items(sample_items(), items_path, name="demo")
        out_path = tmp_path / "result.json"

        code = main(["pack", "--items", str(items_path), "--container", "40ft",
                     "--output", str(out_path), "--verify"])
        assert code == 0
        record = json.loads(out_path.read_text())
        assert record["container"]["id"] == "40ft"
        assert len(record["placed"]) == 5
        assert record["unpacked"] == []
        assert set(record["placed"][0]) >= {"itemId", "x", "y", "z", "orientation"}

    def test_pack_uses_container_from_file(self, tmp_path, capsys):
        items_path = tmp_path / "order.yaml"
        items_path.write_text(
            "container: {id: box, length: 100, width: 100, height: 100}\n"
            "items:\n"
            "  - {id: a, length: 100, width: 100, height: 100, quantity: 2}\n"
        )
        out_path = tmp_path / "result.json"
        assert main(["pack", "--items", str(items_path), "--output", str(out_path)]) == 0
        record = json.loads(out_path.read_text())
        assert record["unpacked"] == ["a-2"]
        assert record["utilizationPct"] == 100.0

    def test_invalid_file_returns_error(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"items": [{"id": "x", "length": 0, "width": 1, "height": 1}]}))
        assert main(["pack", "--items", str(bad)]) == 1

    def test_missing_file_returns_error(self, tmp_path):
        assert main(["pack", "--items", str(tmp_path / "missing.json")]) == 1

    def test_bad_config_returns_error(self, tmp_path):
        cfg = tmp_path / "packing.yaml"
        cfg.write_text("packing:\n  min_support_ratio: 2\n")
        assert main(["--config", str(cfg), "sample"]) == 1

    def test_benchmark(self, tmp_path, capsys):
        code = main(["benchmark", "--datasets", "2", "--items", "5",
                     "--results-dir", str(tmp_path)])
        assert code == 0
        assert "Runs: 2/2" in capsys.readouterr().out
