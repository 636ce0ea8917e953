"""Run logging for the orrery: camera timeseries and interaction events."""
from __future__ import annotations

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

LAST_RUN_MARKER = "last_run.txt"


def unique_run_id(root_dir: Path, run_id: Optional[str] = None) -> str:
    """First unused folder name under ``root_dir``.

    Timestamped ids get a two digit suffix (``..._run_01``), custom ids a
    plain one (``demo_1``).
    """

    base = run_id or datetime.now().strftime("%Y%m%d_%H%M%S") + "_run"
    candidate = base
    suffix = 0
    while (root_dir / candidate).exists():
        suffix += 1
        candidate = f"{base}_{suffix}" if run_id else f"{base}_{suffix:02d}"
    return candidate


class _CsvStream:
    """One CSV file with a header and a row buffer flushed in batches."""

    def __init__(self, path: Path, header: Sequence[str], threshold: int) -> None:
        self.path = path
        self._fh = path.open("w", newline="")
        self._writer = csv.writer(self._fh, lineterminator="\n")
        self._writer.writerow(header)
        self._fh.flush()
        self._rows: list[list[str]] = []
        self._threshold = max(1, threshold)

    def append(self, row: list[str]) -> None:
        self._rows.append(row)
        if len(self._rows) >= self._threshold:
            self.flush()

    def flush(self) -> None:
        if not self._rows:
            return
        self._writer.writerows(self._rows)
        self._fh.flush()
        self._rows.clear()

    def close(self) -> None:
        self.flush()
        self._fh.close()


class RunLogger:
    """Buffered logger that stores camera samples and events to CSV files.

    Parameters
    ----------
    root_dir:
        Root directory where run folders should be created.
    run_id:
        Optional custom run identifier. If omitted a timestamp based
        identifier in the form ``YYYYmmdd_HHMMSS_run`` is used; a numeric
        suffix is appended if the folder already exists.
    timeseries_flush_threshold:
        Number of buffered timeseries rows before an automatic flush.
    events_flush_threshold:
        Number of buffered event rows before an automatic flush.
    """

    TIMESERIES_HEADER = [
        "t",
        "tick",
        "zoom",
        "center_x",
        "center_y",
        "target_zoom",
        "target_x",
        "target_y",
        "selected",
        "speed",
    ]
    EVENTS_HEADER = ["t", "type", "body", "zoom", "details"]

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 50,
    ) -> None:
        self.root_dir = Path(root_dir)
        self.root_dir.mkdir(parents=True, exist_ok=True)

        self.run_id = unique_run_id(self.root_dir, run_id)
        self.run_dir = self.root_dir / self.run_id
        self.run_dir.mkdir(parents=True, exist_ok=False)
        self.meta_path = self.run_dir / "meta.json"

        self._timeseries = _CsvStream(
            self.run_dir / "timeseries.csv", self.TIMESERIES_HEADER, timeseries_flush_threshold
        )
        self._events = _CsvStream(
            self.run_dir / "events.csv", self.EVENTS_HEADER, events_flush_threshold
        )
        self._closed = False

        (self.root_dir / LAST_RUN_MARKER).write_text(self.run_id, encoding="utf-8")

    @property
    def timeseries_path(self) -> Path:
        return self._timeseries.path

    @property
    def events_path(self) -> Path:
        return self._events.path

    @property
    def closed(self) -> bool:
        return self._closed

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_ts(self, values: Sequence[object]) -> None:
        self._timeseries.append([self._format_value(v) for v in values])

    def log_event(
        self,
        t: float,
        event_type: str,
        body: str | None = None,
        zoom: float | None = None,
        details: dict | None = None,
    ) -> None:
        self._events.append(
            [
                self._format_value(t),
                event_type,
                body or "",
                self._format_value(zoom),
                json.dumps(details, sort_keys=True) if details else "",
            ]
        )

    def flush(self) -> None:
        self._timeseries.flush()
        self._events.flush()

    def close(self) -> None:
        if self._closed:
            return
        self._timeseries.close()
        self._events.close()
        self._closed = True

    @staticmethod
    def _format_value(value: object) -> str:
        if value is None:
            return ""
        if isinstance(value, bool):
            return "1" if value else "0"
        if isinstance(value, (int, float)):
            return f"{value:.10g}"
        return str(value)

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = ["LAST_RUN_MARKER", "RunLogger", "unique_run_id"]
