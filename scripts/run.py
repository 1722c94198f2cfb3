"""Cross-platform task runner for heat-route.

All commands use the currently active Python interpreter (sys.executable) so they work
on POSIX and Windows without Make.
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path

ARTIFACTS_ENV = "ARTIFACTS"
DEFAULT_ARTIFACTS = "artifacts"


class RunError(Exception):
    """Raised when an invoked command fails."""


def _log(msg: str) -> None:
    print(f"[run] {msg}")


def _run(cmd: list[str], *, env: dict[str, str] | None = None) -> None:
    _log("$ " + " ".join(cmd))
    result = subprocess.run(cmd, env=env)
    if result.returncode != 0:
        raise RunError(f"Command failed with exit code {result.returncode}: {' '.join(cmd)}")


def _artifacts_root() -> Path:
    return Path(os.environ.get(ARTIFACTS_ENV, DEFAULT_ARTIFACTS))


def _latest_sweep_run(root: Path | None = None) -> Path | None:
    base = root or (_artifacts_root() / "sweep")
    if not base.exists():
        return None
    runs = [p for p in base.iterdir() if p.is_dir()]
    if not runs:
        return None
    return max(runs, key=lambda p: p.stat().st_mtime)


def cmd_lint(_: argparse.Namespace) -> None:
    _run([sys.executable, "-m", "ruff", "check", "."])
    _run([sys.executable, "-m", "ruff", "format", "--check", "."])


def cmd_format(_: argparse.Namespace) -> None:
    _run([sys.executable, "-m", "ruff", "format", "."])
    _run([sys.executable, "-m", "ruff", "check", "--fix", "."])


def cmd_test(args: argparse.Namespace) -> None:
    pytest_cmd = [sys.executable, "-m", "pytest"]
    if args.quiet:
        pytest_cmd.append("-q")
    _run(pytest_cmd)


def cmd_solve(args: argparse.Namespace) -> None:
    _run([sys.executable, "-m", "heat_route.eval.sweep", "--input", str(args.input)])


def cmd_sweep(args: argparse.Namespace) -> None:
    out_dir = args.out or (_artifacts_root() / "sweep" / args.input.stem)
    cmd = [
        sys.executable,
        "-m",
        "heat_route.eval.sweep",
        "--input",
        str(args.input),
        "--out",
        str(out_dir),
    ]
    for profile in args.profiles or []:
        cmd += ["--profile", profile]
    if args.max_states is not None:
        cmd += ["--max-states", str(args.max_states)]
    _run(cmd)


def cmd_invariants(args: argparse.Namespace) -> None:
    results = args.results
    if results is None:
        latest_run = _latest_sweep_run()
        if not latest_run:
            raise RunError("No sweep runs found; provide --results explicitly")
        results = latest_run / "results.csv"
    if not results.exists():
        raise RunError("Could not locate sweep results CSV; provide --results")
    out_dir = args.out or (results.parent / "invariants")
    _run(
        [
            sys.executable,
            "-m",
            "heat_route.eval.invariants",
            "--results",
            str(results),
            "--out",
            str(out_dir),
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    lint_p = sub.add_parser("lint", help="Run ruff checks")
    lint_p.set_defaults(func=cmd_lint)

    fmt_p = sub.add_parser("format", help="Apply ruff format and fixes")
    fmt_p.set_defaults(func=cmd_format)

    test_p = sub.add_parser("test", help="Run pytest")
    test_p.add_argument("--quiet", action="store_true", help="Quiet pytest output")
    test_p.set_defaults(func=cmd_test)

    sweep = sub.add_parser("sweep", help="Solve a grid file under one or more profiles")
    sweep.add_argument("--input", type=Path, required=True, help="Digit grid text file")
    sweep.add_argument(
        "--profile", action="append", dest="profiles", help="Preset name or MIN:MAX"
    )
    sweep.add_argument("--max-states", type=int, help="Finalized-state budget per search")
    sweep.add_argument("--out", type=Path, help="Output directory (defaults under ARTIFACTS)")
    sweep.set_defaults(func=cmd_sweep)

    solve = sub.add_parser("solve", help="Print direct and long-haul costs for a grid file")
    solve.add_argument("--input", type=Path, required=True, help="Digit grid text file")
    solve.set_defaults(func=cmd_solve)

    inv = sub.add_parser("invariants", help="Run invariant checks on results CSV")
    inv.add_argument(
        "--results", type=Path, help="Path to results CSV (defaults to latest sweep results)"
    )
    inv.add_argument("--out", type=Path, help="Output directory for report")
    inv.set_defaults(func=cmd_invariants)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except RunError as exc:  # pragma: no cover - simple CLI error
        _log(str(exc))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
