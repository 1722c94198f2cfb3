import importlib.util
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "run.py"


def _load_runner():
    spec = importlib.util.spec_from_file_location("heat_route_run_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _record_commands(monkeypatch, runner, returncode=0):
    calls = []

    def fake_run(cmd, env=None):
        calls.append(cmd)
        return SimpleNamespace(returncode=returncode)

    monkeypatch.setattr(runner.subprocess, "run", fake_run)
    return calls


def test_parser_registers_all_tasks():
    runner = _load_runner()
    parser = runner.build_parser()
    for argv in (["lint"], ["format"], ["test"], ["solve", "--input", "g.txt"]):
        assert parser.parse_args(argv).command == argv[0]
    assert parser.parse_args(["sweep", "--input", "g.txt"]).func is runner.cmd_sweep
    assert parser.parse_args(["invariants"]).func is runner.cmd_invariants


def test_solve_runs_default_profile_sweep(monkeypatch):
    runner = _load_runner()
    calls = _record_commands(monkeypatch, runner)

    assert runner.main(["solve", "--input", "grid.txt"]) == 0

    assert calls == [[sys.executable, "-m", "heat_route.eval.sweep", "--input", "grid.txt"]]


def test_sweep_forwards_profiles_and_budget(monkeypatch, tmp_path):
    runner = _load_runner()
    calls = _record_commands(monkeypatch, runner)
    out_dir = tmp_path / "out"

    argv = ["sweep", "--input", "grid.txt", "--profile", "2:5", "--max-states", "99"]
    assert runner.main(argv + ["--out", str(out_dir)]) == 0

    cmd = calls[0]
    assert cmd[2] == "heat_route.eval.sweep"
    assert cmd[cmd.index("--out") + 1] == str(out_dir)
    assert cmd[cmd.index("--profile") + 1] == "2:5"
    assert cmd[cmd.index("--max-states") + 1] == "99"


def test_failed_command_returns_nonzero(monkeypatch):
    runner = _load_runner()
    _record_commands(monkeypatch, runner, returncode=3)
    assert runner.main(["solve", "--input", "grid.txt"]) == 1


def test_invariants_needs_results(monkeypatch, tmp_path):
    runner = _load_runner()
    monkeypatch.setenv(runner.ARTIFACTS_ENV, str(tmp_path / "none"))
    assert runner.main(["invariants"]) == 1
    with pytest.raises(SystemExit):
        runner.main(["solve"])
