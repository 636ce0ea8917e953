"""Analyze a recorded orrery run and generate camera diagnostic figures."""
from __future__ import annotations

import argparse
import csv
import json
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from orrery.core.logging_utils import LAST_RUN_MARKER


TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"
NUMERIC_COLUMNS = (
    "t",
    "tick",
    "zoom",
    "center_x",
    "center_y",
    "target_zoom",
    "target_x",
    "target_y",
    "speed",
)
EVENT_COLORS = {
    "focus": "#4dabf7",
    "unfocus": "#94d82d",
    "focus_lost": "#fa5252",
    "reset_zoom": "#ffa94d",
    "full_reset": "#9775fa",
    "pause": "#868e96",
    "resume": "#ced4da",
    "speed": "#e599f7",
}


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[object]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                if key in NUMERIC_COLUMNS:
                    columns.setdefault(key, []).append(float(value))
                else:
                    columns.setdefault(key, []).append(value)
    return {
        key: np.asarray(values, dtype=float if key in NUMERIC_COLUMNS else object)
        for key, values in columns.items()
    }


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            event = {
                "t": float(row["t"]),
                "type": row["type"],
                "body": row.get("body") or None,
                "zoom": float(row["zoom"]) if row.get("zoom") else None,
            }
            details_raw = row.get("details", "")
            if details_raw:
                try:
                    event["details"] = json.loads(details_raw)
                except json.JSONDecodeError:
                    event["details"] = details_raw
            events.append(event)
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def summarize_events(events: List[dict]) -> Dict[str, int]:
    summary: Dict[str, int] = {name: 0 for name in EVENT_COLORS}
    for event in events:
        summary[event["type"]] = summary.get(event["type"], 0) + 1
    return summary


def focused_bodies(events: List[dict]) -> List[str]:
    """Bodies in the order they were first focused."""

    seen: List[str] = []
    for event in events:
        body = event.get("body")
        if event["type"] == "focus" and body and body not in seen:
            seen.append(body)
    return seen


def settle_ticks(ts: Dict[str, np.ndarray], tolerance: float = 1e-3) -> int:
    """Number of samples in which zoom or center still differed from target."""

    if not ts or ts.get("zoom") is None or ts["zoom"].size == 0:
        return 0
    moving = (
        (np.abs(ts["target_zoom"] - ts["zoom"]) > tolerance)
        | (np.abs(ts["target_x"] - ts["center_x"]) > tolerance)
        | (np.abs(ts["target_y"] - ts["center_y"]) > tolerance)
    )
    return int(np.count_nonzero(moving))


def _mark_events(ax, events: List[dict]) -> None:
    seen: set[str] = set()
    for event in events:
        color = EVENT_COLORS.get(event["type"], "#adb5bd")
        label = event["type"] if event["type"] not in seen else None
        seen.add(event["type"])
        ax.axvline(event["t"], color=color, linestyle="--", alpha=0.6, label=label)


def plot_zoom(fig_dir: Path, ts: Dict[str, np.ndarray], events: List[dict]) -> None:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["zoom"], color="#4dabf7", label="zoom")
    ax.plot(ts["t"], ts["target_zoom"], color="#ffa94d", linestyle=":", label="target")
    _mark_events(ax, events)
    ax.set_xlabel("t [s]")
    ax.set_ylabel("zoom [-]")
    ax.set_title("Camera zoom over time")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best", fontsize="small")
    fig.tight_layout()
    fig.savefig(fig_dir / "zoom.png", dpi=150)
    plt.close(fig)


def plot_center_path(fig_dir: Path, ts: Dict[str, np.ndarray]) -> None:
    fig, ax = plt.subplots(figsize=(6, 6))
    ax.plot(ts["center_x"], ts["center_y"], color="#6bc5c0", lw=1.5, label="center")
    ax.plot(ts["target_x"], ts["target_y"], color="#ffa94d", lw=1.0, alpha=0.6, label="target")
    ax.scatter([0.0], [0.0], color="#fcc419", s=60, label="Sun")
    ax.set_aspect("equal", "box")
    # screen coordinates: y grows downwards
    ax.invert_yaxis()
    ax.set_xlabel("x [world]")
    ax.set_ylabel("y [world]")
    ax.set_title("Camera center path")
    ax.legend()
    fig.tight_layout()
    fig.savefig(fig_dir / "center_path.png", dpi=150)
    plt.close(fig)


def plot_event_timeline(fig_dir: Path, events: List[dict]) -> None:
    """One row per event type, one dot per occurrence."""

    types = [name for name in EVENT_COLORS if any(e["type"] == name for e in events)]
    types += sorted({e["type"] for e in events} - set(types))
    fig, ax = plt.subplots(figsize=(7, 0.5 * max(len(types), 1) + 1.5))
    for row, etype in enumerate(types):
        times = [e["t"] for e in events if e["type"] == etype]
        ax.scatter(times, [row] * len(times), color=EVENT_COLORS.get(etype, "#adb5bd"), s=30)
    ax.set_yticks(range(len(types)))
    ax.set_yticklabels(types)
    ax.set_xlabel("t [s]")
    ax.set_title("Interaction events")
    ax.grid(True, axis="x", alpha=0.3)
    fig.tight_layout()
    fig.savefig(fig_dir / "events.png", dpi=150)
    plt.close(fig)


def print_summary(
    run_dir: Path,
    meta: dict,
    ts: Dict[str, np.ndarray],
    events: List[dict],
) -> None:
    summary = summarize_events(events)
    duration = float(ts["t"][-1]) if ts.get("t") is not None and ts["t"].size else 0.0
    print(f"Run: {run_dir.name}")
    print(f" Seed: {meta.get('seed')}")
    print(f" Duration: {duration:.1f} s, {ts['t'].size if 't' in ts else 0} camera samples")
    print(f" Samples still converging: {settle_ticks(ts)}")
    bodies = focused_bodies(events)
    print(f" Focused bodies: {', '.join(bodies) if bodies else 'none'}")
    print(
        " Events:"
        + ",".join(f" {etype}: {count}" for etype, count in summary.items() if count)
    )


def resolve_run_dir(parser: argparse.ArgumentParser, run_dir: str | None, base_runs_dir: Path) -> Path:
    if run_dir:
        run_path = Path(run_dir)
        if not run_path.is_dir():
            run_path = base_runs_dir / run_dir
    else:
        last_run_file = base_runs_dir / LAST_RUN_MARKER
        if not last_run_file.exists():
            parser.error("No run given and last_run.txt is missing.")
        run_path = base_runs_dir / last_run_file.read_text(encoding="utf-8").strip()
    if not run_path.is_dir():
        parser.error(f"Could not find run directory: {run_path}")
    return run_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a logged orrery run and create figures.")
    parser.add_argument("run_dir", nargs="?", help="Path or id of a specific run folder")
    parser.add_argument(
        "--runs-dir",
        type=Path,
        default=Path("data") / "runs",
        help="Folder holding the runs (default: data/runs)",
    )
    args = parser.parse_args(argv)

    run_path = resolve_run_dir(parser, args.run_dir, args.runs_dir)
    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME

    if not ts_path.exists() or not ev_path.exists():
        parser.error("Run folder is missing timeseries.csv or events.csv.")

    meta: dict = {}
    if meta_path.exists():
        with meta_path.open("r", encoding="utf-8") as fh:
            meta = json.load(fh)

    ts = load_timeseries(ts_path)
    events = load_events(ev_path)
    if not ts or ts["t"].size == 0:
        parser.error("timeseries.csv is empty - nothing to analyze.")

    fig_dir = ensure_fig_dir(run_path)
    plot_zoom(fig_dir, ts, events)
    plot_center_path(fig_dir, ts)
    plot_event_timeline(fig_dir, events)
    print_summary(run_path, meta, ts, events)


if __name__ == "__main__":
    main()
