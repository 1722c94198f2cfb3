"""Invariant checks over sweep results (monotone in min_run, non-negative costs)."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

import pandas as pd

from heat_route.eval.sweep import STATUS_OK, STATUS_UNREACHABLE


def _monotonic_min_run(df: pd.DataFrame) -> list[dict]:
    """Raising min_run at fixed max_run can only remove paths."""
    issues = []
    solved = df[df["status"] == STATUS_OK]
    for max_run, group in solved.groupby("max_run"):
        costs = group.sort_values("min_run")[["min_run", "cost"]].to_numpy()
        for (prev_min, prev_cost), (min_run, cost) in zip(costs, costs[1:]):
            if cost < prev_cost:
                issues.append(
                    {
                        "type": "monotonic_min_run",
                        "max_run": int(max_run),
                        "min_run": int(min_run),
                        "cost": float(cost),
                        "previous_min_run": int(prev_min),
                        "previous_cost": float(prev_cost),
                    }
                )
    return issues


def _reachability(df: pd.DataFrame) -> list[dict]:
    # once min_run blocks the goal, a larger min_run must block it too
    issues = []
    for max_run, group in df.groupby("max_run"):
        blocked = group.loc[group["status"] == STATUS_UNREACHABLE, "min_run"]
        if blocked.empty:
            continue
        first_blocked = int(blocked.min())
        solved = group[(group["status"] == STATUS_OK) & (group["min_run"] > first_blocked)]
        for min_run in solved["min_run"]:
            issues.append(
                {
                    "type": "reachability",
                    "max_run": int(max_run),
                    "min_run": int(min_run),
                    "blocked_from_min_run": first_blocked,
                }
            )
    return issues


def _negative_costs(df: pd.DataFrame) -> list[dict]:
    return [
        {"type": "negative_cost", "profile": profile, "cost": float(cost)}
        for profile, cost in zip(df["profile"], df["cost"])
        if cost < 0
    ]


def check(df: pd.DataFrame) -> dict:
    """Run every check; returns issues, per-type counts and an overall verdict."""
    issues = _monotonic_min_run(df) + _reachability(df) + _negative_costs(df)
    counts = pd.Series([item["type"] for item in issues], dtype=object).value_counts()
    return {
        "issues": issues,
        "counts": {kind: int(n) for kind, n in counts.items()},
        "checked_rows": int(len(df)),
        "passed": not issues,
    }


def _write_report(out_dir: Path, summary: dict) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    lines = ["# Sweep Invariants", "", f"- rows checked: {summary['checked_rows']}"]
    if summary["passed"]:
        lines.append("- no violations")
    for issue in summary["issues"]:
        detail = ", ".join(f"{k}={v}" for k, v in issue.items() if k != "type")
        lines.append(f"- {issue['type']}: {detail}")
    (out_dir / "report.md").write_text("\n".join(lines) + "\n")
    (out_dir / "summary.json").write_text(json.dumps(summary, indent=2))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--results", type=Path, required=True, help="Sweep results.csv.")
    parser.add_argument("--out", type=Path, help="Report directory (default: next to results).")
    args = parser.parse_args(argv)

    results_path = args.results.expanduser()
    summary = check(pd.read_csv(results_path))
    out_dir = args.out or results_path.parent / "invariants"
    _write_report(out_dir, summary)
    verdict = "passed" if summary["passed"] else f"failed {summary['counts']}"
    print(f"[invariants] {verdict}; report in {out_dir}")
    return 0 if summary["passed"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
