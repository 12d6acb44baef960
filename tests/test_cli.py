"""Tests for suite loading and the unitbench CLI."""

import json
import textwrap

import pytest

import unitbench.cli as unitbench_cli
from unitbench import Benchmark, RunnerConfig
from unitbench.suite import load_suite
from unitbench.utils.errors import SuiteLoadError

REGISTER_SUITE = textwrap.dedent(
    """
    def register(bench):
        bench.add("join", lambda: "".join(["a", "b", "c"]))
        bench.add("concat", lambda: "a" + "b" + "c")
    """
)

MODULE_SUITE = textwrap.dedent(
    """
    from unitbench import Benchmark

    benchmark = Benchmark().set_runs_per_unit(2).add("noop", lambda: None)
    """
)


@pytest.fixture
def suite_file(tmp_path):
    path = tmp_path / "strings_suite.py"
    path.write_text(REGISTER_SUITE)
    return path


class TestLoadSuite:
    """Suite file discovery."""

    def test_register_function(self, suite_file):
        bench = load_suite(suite_file)
        assert isinstance(bench, Benchmark)
        assert [u.name for u in bench.units] == ["join", "concat"]

    def test_module_level_benchmark(self, tmp_path):
        path = tmp_path / "module_suite.py"
        path.write_text(MODULE_SUITE)
        bench = load_suite(path)
        assert bench.get_runs_per_unit() == 2

    def test_config_applied(self, suite_file):
        bench = load_suite(suite_file, config=RunnerConfig(0, 20, 2))
        assert bench.to_config() == RunnerConfig(0, 20, 2)

    def test_missing_file(self, tmp_path):
        with pytest.raises(SuiteLoadError, match="not found"):
            load_suite(tmp_path / "nope.py")

    def test_import_error_wrapped(self, tmp_path):
        path = tmp_path / "broken.py"
        path.write_text("raise RuntimeError('bad suite')\n")
        with pytest.raises(SuiteLoadError, match="bad suite"):
            load_suite(path)

    def test_no_benchmark_defined(self, tmp_path):
        path = tmp_path / "empty.py"
        path.write_text("x = 1\n")
        with pytest.raises(SuiteLoadError, match="register"):
            load_suite(path)

    def test_no_units_registered(self, tmp_path):
        path = tmp_path / "nounits.py"
        path.write_text("def register(bench):\n    pass\n")
        with pytest.raises(SuiteLoadError, match="no units"):
            load_suite(path)


class TestCli:
    """`unitbench` entry point."""

    def test_version_flag(self, capsys):
        parser = unitbench_cli.build_parser()
        with pytest.raises(SystemExit) as exc:
            parser.parse_args(["--version"])
        assert exc.value.code == 0
        assert "unitbench" in capsys.readouterr().out.lower()

    def test_no_command_prints_help(self, capsys):
        assert unitbench_cli.main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_run_writes_table_and_json(self, suite_file, tmp_path, capsys):
        output = tmp_path / "results.json"
        code = unitbench_cli.main(
            [
                "run",
                str(suite_file),
                "--warmup-time",
                "0",
                "--max-unit-time",
                "20",
                "--runs-per-unit",
                "2",
                "--sort",
                "avg",
                "--output",
                str(output),
            ]
        )

        assert code == 0
        out = capsys.readouterr().out
        assert "join:" in out
        assert "relative" in out
        payload = json.loads(output.read_text())
        assert [r["name"] for r in payload["results"]] == ["join", "concat"]
        assert all(len(r["samples"]) == 2 and r["warmup"] is None for r in payload["results"])

    def test_run_with_config_file(self, suite_file, tmp_path, capsys):
        config = tmp_path / "bench.yaml"
        config.write_text("benchmark:\n  warmup_time: 0\n  max_unit_time: 10\n  runs_per_unit: 1\n")
        output = tmp_path / "results.json"

        code = unitbench_cli.main(["run", str(suite_file), "-c", str(config), "-q", "-o", str(output)])

        assert code == 0
        payload = json.loads(output.read_text())
        assert all(r["totals"]["runs"] == 1 for r in payload["results"])
        assert "join:" not in capsys.readouterr().out

    def test_bad_suite_returns_error_code(self, tmp_path, capsys):
        code = unitbench_cli.main(["run", str(tmp_path / "missing.py")])
        assert code == 1
        assert "Error" in capsys.readouterr().err

    def test_bad_config_returns_error_code(self, suite_file, tmp_path, capsys):
        config = tmp_path / "bench.json"
        config.write_text('{"runs_per_unit": 0}')
        assert unitbench_cli.main(["run", str(suite_file), "--config", str(config)]) == 1

    def test_aborted_run_exit_code(self, tmp_path, capsys):
        path = tmp_path / "abort_suite.py"
        path.write_text(
            textwrap.dedent(
                """
                from unitbench import Benchmark

                benchmark = Benchmark().set_max_unit_time(20).set_runs_per_unit(2)
                benchmark.add("aborts", lambda: benchmark.abort())
                """
            )
        )
        assert unitbench_cli.main(["run", str(path)]) == unitbench_cli.EXIT_ABORTED
        assert "aborted" in capsys.readouterr().err.lower()
