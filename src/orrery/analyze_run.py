"""Analyze a recorded orrery run and generate diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from orrery.core.logging_utils import (
    EVENTS_FILENAME,
    LAST_RUN_FILENAME,
    META_FILENAME,
    TIMESERIES_FILENAME,
)

FIGS_SUBDIR = "figs"
NUMERIC_COLUMNS = ("t", "x", "y", "mean_anomaly", "true_anomaly", "r", "iterations")


def resolve_run_dir(run_dir: Optional[str], runs_root: Path) -> Path:
    """Find the run folder, falling back to the most recent recorded run."""

    if run_dir:
        run_path = Path(run_dir)
        if not run_path.is_dir():
            run_path = runs_root / run_dir
    else:
        last_run_file = runs_root / LAST_RUN_FILENAME
        if not last_run_file.exists():
            raise FileNotFoundError(f"No run given and {last_run_file} is missing")
        run_path = runs_root / last_run_file.read_text(encoding="utf-8").strip()
    if not run_path.is_dir():
        raise FileNotFoundError(f"Run directory not found: {run_path}")
    return run_path


def load_timeseries(path: Path) -> Dict[str, Dict[str, np.ndarray]]:
    """Per-body columns from ``timeseries.csv``, keyed by body name."""

    columns: Dict[str, Dict[str, List[float]]] = {}
    with path.open("r", newline="") as fh:
        for row in csv.DictReader(fh):
            body_columns = columns.setdefault(row["body"], {name: [] for name in NUMERIC_COLUMNS})
            for name in NUMERIC_COLUMNS:
                body_columns[name].append(float(row[name]))
    return {
        body: {name: np.asarray(values) for name, values in body_columns.items()}
        for body, body_columns in columns.items()
    }


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        return [
            {"t": float(row["t"]), "type": row["type"], "body": row["body"], "details": row.get("details", "")}
            for row in csv.DictReader(fh)
            if row
        ]


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {}
    for event in events:
        summary[event["type"]] = summary.get(event["type"], 0) + 1
    return summary


def radius_deviation(meta: dict, ts: Dict[str, Dict[str, np.ndarray]]) -> Dict[str, float]:
    """Largest distance a recorded body strayed outside its perihelion/aphelion band."""

    deviations: Dict[str, float] = {}
    for body in meta.get("bodies", []):
        series = ts.get(body["name"])
        if series is None or not series["r"].size:
            continue
        a = body["semi_major_axis"]
        e = body["eccentricity"]
        below = a * (1.0 - e) - float(series["r"].min())
        above = float(series["r"].max()) - a * (1.0 + e)
        deviations[body["name"]] = max(0.0, below, above)
    return deviations


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def plot_orbits(fig_dir: Path, ts: Dict[str, Dict[str, np.ndarray]]) -> Path:
    fig, ax = plt.subplots(figsize=(7, 7))
    for body, series in ts.items():
        ax.plot(series["x"], series["y"], lw=1.2, label=body)
    ax.scatter([0.0], [0.0], color="#ffd43b", s=60, label="Sun")
    ax.set_aspect("equal", "box")
    ax.set_xlabel("x [scaled AU]")
    ax.set_ylabel("y [scaled AU]")
    ax.set_title("Traced orbits")
    ax.legend(loc="upper right", fontsize="small")
    fig.tight_layout()
    out = fig_dir / "orbits.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def plot_radius(fig_dir: Path, ts: Dict[str, Dict[str, np.ndarray]]) -> Path:
    fig, ax = plt.subplots(figsize=(8, 4))
    for body, series in ts.items():
        ax.plot(series["t"], series["r"], lw=1.0, label=body)
    ax.set_xlabel("t [years]")
    ax.set_ylabel("r [scaled AU]")
    ax.set_title("Distance from the Sun")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right", fontsize="small")
    fig.tight_layout()
    out = fig_dir / "radius.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def print_summary(
    run_dir: Path,
    meta: dict,
    ts: Dict[str, Dict[str, np.ndarray]],
    deviations: Dict[str, float],
    event_summary: Dict[str, int],
) -> None:
    print(f"Run: {run_dir.name}")
    print(f" Seed: {meta.get('seed')}")
    for body, series in ts.items():
        frames = series["t"].size
        mean_iter = float(series["iterations"].mean()) if frames else 0.0
        print(
            f" {body:<8} frames={frames} mean solver iterations={mean_iter:.2f}"
            f" band deviation={deviations.get(body, 0.0):.2e}"
        )
    if event_summary:
        print(" Events: " + ", ".join(f"{etype}: {count}" for etype, count in event_summary.items()))
    else:
        print(" Events: none")


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded orrery run and write figures.")
    parser.add_argument("run_dir", nargs="?", help="path or id of a run directory")
    parser.add_argument("--runs-root", type=Path, default=Path("data") / "runs")
    args = parser.parse_args(argv)

    try:
        run_path = resolve_run_dir(args.run_dir, args.runs_root)
    except FileNotFoundError as exc:
        parser.error(str(exc))

    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME
    if not meta_path.exists() or not ts_path.exists() or not ev_path.exists():
        parser.error("Run directory is missing meta/timeseries/events files.")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)
    ts = load_timeseries(ts_path)
    if not ts:
        parser.error("timeseries.csv is empty, nothing to analyze.")
    events = load_events(ev_path)

    fig_dir = ensure_fig_dir(run_path)
    plot_orbits(fig_dir, ts)
    plot_radius(fig_dir, ts)
    print_summary(run_path, meta, ts, radius_deviation(meta, ts), summarize_events(events))


if __name__ == "__main__":
    main()
