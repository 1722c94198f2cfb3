"""Evaluate minimum path cost for one grid across several movement profiles."""

from __future__ import annotations

import argparse
import json
import math
import os
import time
from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

from heat_route.grid.model import Grid, InvalidGrid
from heat_route.routing.constrained import (
    PROFILES,
    ConstrainedPathSearch,
    MovementProfile,
    ResourceExhausted,
    Unreachable,
)

MAX_STATES_ENV = "HEAT_ROUTE_MAX_STATES"
DEFAULT_PROFILES = ("direct", "long_haul")
STATUS_OK = "ok"
STATUS_UNREACHABLE = "unreachable"
STATUS_EXHAUSTED = "exhausted"
RESULT_COLUMNS = [
    "profile",
    "min_run",
    "max_run",
    "status",
    "cost",
    "expanded",
    "pushed",
    "path_len",
    "elapsed_s",
]


def _log(msg: str) -> None:
    print(f"[sweep] {msg}")


def parse_profile(text: str) -> MovementProfile:
    """Accept a preset name (``direct``, ``long_haul``) or ``MIN:MAX``."""
    key = text.strip().lower().replace("-", "_")
    if key in PROFILES:
        return PROFILES[key]
    parts = key.split(":")
    if len(parts) != 2:
        msg = f"profile {text!r} is neither a preset nor MIN:MAX."
        raise ValueError(msg)
    try:
        min_run, max_run = (int(p) for p in parts)
    except ValueError:
        msg = f"profile {text!r} has non-integer bounds."
        raise ValueError(msg) from None
    return MovementProfile(min_run=min_run, max_run=max_run)


def evaluate_profiles(
    grid: Grid,
    profiles: Mapping[str, MovementProfile] | Iterable[MovementProfile],
    *,
    max_states: int | None = None,
) -> pd.DataFrame:
    """Run one search per profile.

    Every profile yields a row. ``status`` is ``ok``, ``unreachable`` or
    ``exhausted`` (state budget hit); only ``ok`` rows carry a cost, the
    others get ``cost=NaN``.
    """
    if isinstance(profiles, Mapping):
        named = list(profiles.items())
    else:
        named = [(p.label, p) for p in profiles]
    rows: list[dict[str, object]] = []
    for name, profile in named:
        row: dict[str, object] = {
            "profile": name,
            "min_run": profile.min_run,
            "max_run": profile.max_run,
        }
        t0 = time.perf_counter()
        try:
            result = ConstrainedPathSearch(grid, profile, max_states=max_states).run()
        except Unreachable:
            row.update(status=STATUS_UNREACHABLE, cost=math.nan)
        except ResourceExhausted:
            row.update(status=STATUS_EXHAUSTED, cost=math.nan)
        else:
            row.update(
                status=STATUS_OK,
                cost=result.cost,
                expanded=result.expanded,
                pushed=result.pushed,
                path_len=len(result.path),
            )
        row["elapsed_s"] = time.perf_counter() - t0
        rows.append(row)
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def solve(text: str) -> tuple[int, int]:
    """Minimum cost under the direct and long-haul profiles for a digit grid."""
    grid = Grid.from_text(text)
    search_direct = ConstrainedPathSearch(grid, PROFILES["direct"])
    search_long = ConstrainedPathSearch(grid, PROFILES["long_haul"])
    return search_direct.run().cost, search_long.run().cost


def _max_states_default() -> int | None:
    val = os.environ.get(MAX_STATES_ENV)
    if val is None:
        return None
    try:
        return int(val)
    except ValueError:
        _log(f"invalid {MAX_STATES_ENV}={val!r}; running without a state budget")
        return None


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--input", type=Path, required=True, help="Digit grid text file.")
    parser.add_argument(
        "--profile",
        action="append",
        dest="profiles",
        help="Preset name or MIN:MAX (repeatable; defaults to direct and long_haul).",
    )
    parser.add_argument("--out", type=Path, help="Directory for results.csv and summary.json.")
    parser.add_argument(
        "--max-states",
        type=int,
        default=None,
        help=f"Finalized-state budget per search (env {MAX_STATES_ENV}).",
    )
    args = parser.parse_args(argv)
    names = args.profiles or list(DEFAULT_PROFILES)
    try:
        args.profiles = {name: parse_profile(name) for name in names}
    except ValueError as exc:
        parser.error(str(exc))
    return args


def _write_outputs(out_dir: Path, df: pd.DataFrame, grid: Grid, source: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    df.to_csv(out_dir / "results.csv", index=False)
    summary = {
        "input": str(source),
        "width": grid.width,
        "height": grid.height,
        "costs": {
            row["profile"]: (int(row["cost"]) if row["status"] == STATUS_OK else None)
            for _, row in df.iterrows()
        },
        "status": dict(zip(df["profile"], df["status"])),
    }
    (out_dir / "summary.json").write_text(json.dumps(summary, indent=2))


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    source = args.input.expanduser()
    try:
        grid = Grid.from_text(source.read_text())
    except InvalidGrid as exc:
        _log(f"invalid grid in {source}: {exc}")
        return 2
    max_states = args.max_states if args.max_states is not None else _max_states_default()

    df = evaluate_profiles(grid, args.profiles, max_states=max_states)
    for _, row in df.iterrows():
        cost = int(row["cost"]) if row["status"] == STATUS_OK else row["status"]
        _log(f"{row['profile']}: {cost}")
    if args.out:
        _write_outputs(args.out, df, grid, source)
        _log(f"wrote results to {args.out}")
    exhausted = df.loc[df["status"] == STATUS_EXHAUSTED, "profile"].tolist()
    if exhausted:
        _log(f"state budget of {max_states} exhausted for: {', '.join(exhausted)}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
