"""Recording of headless animation runs to disk."""
from __future__ import annotations

import csv
import json
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

TIMESERIES_FILENAME = "timeseries.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
LAST_RUN_FILENAME = "last_run.txt"

TIMESERIES_HEADERS: dict[str, tuple[str, ...]] = {
    "motion": ("t", "v", "s"),
    "terminal": ("t", "y", "v", "drag", "net_force", "a"),
    "momentum": ("frame", "x1", "x2", "v1", "v2", "p_total", "ke_total"),
}


def allocate_run_dir(root_dir: Path, run_id: Optional[str] = None) -> Path:
    """Create and return a fresh run folder below ``root_dir``.

    Without ``run_id`` the folder is named ``YYYYmmdd_HHMMSS_run``. Taken
    names get a numeric suffix (``demo_1``, ``20240101_120000_run_01``).
    """

    root_dir.mkdir(parents=True, exist_ok=True)
    base = run_id or datetime.now().strftime("%Y%m%d_%H%M%S") + "_run"
    name = base
    attempt = 0
    while (root_dir / name).exists():
        attempt += 1
        name = f"{base}_{attempt}" if run_id else f"{base}_{attempt:02d}"
    run_dir = root_dir / name
    run_dir.mkdir(exist_ok=False)
    return run_dir


class _BufferedCsv:
    """CSV file that collects rows in memory and writes them in batches."""

    def __init__(self, path: Path, header: Sequence[str], threshold: int) -> None:
        self.path = path
        self._fh = path.open("w", newline="", encoding="utf-8")
        self._writer = csv.writer(self._fh, lineterminator="\n")
        self._writer.writerow(header)
        self._rows: list[list[str]] = []
        self._threshold = max(1, threshold)

    def append(self, row: list[str]) -> None:
        self._rows.append(row)
        if len(self._rows) >= self._threshold:
            self.flush()

    def flush(self) -> None:
        if self._rows:
            self._writer.writerows(self._rows)
            self._fh.flush()
            self._rows.clear()

    def close(self) -> None:
        self.flush()
        self._fh.close()


class RunLogger:
    """Buffered logger that stores one animation run as CSV and JSON files.

    Parameters
    ----------
    root_dir:
        Directory in which run folders are created.
    header:
        Column names of ``timeseries.csv``.
    run_id:
        Optional run identifier, see :func:`allocate_run_dir`.
    timeseries_flush_threshold, events_flush_threshold:
        Number of buffered rows that triggers a write to disk.
    """

    EVENTS_HEADER = ("t", "type", "details")

    def __init__(
        self,
        root_dir: str | Path = "data/runs",
        header: Sequence[str] = ("t",),
        run_id: Optional[str] = None,
        *,
        timeseries_flush_threshold: int = 200,
        events_flush_threshold: int = 50,
    ) -> None:
        if not header:
            raise ValueError("header must contain at least one column")
        self.header = tuple(header)
        self.root_dir = Path(root_dir)
        self.run_dir = allocate_run_dir(self.root_dir, run_id)
        self.run_id = self.run_dir.name

        self.timeseries_path = self.run_dir / TIMESERIES_FILENAME
        self.events_path = self.run_dir / EVENTS_FILENAME
        self.meta_path = self.run_dir / META_FILENAME
        self._timeseries = _BufferedCsv(
            self.timeseries_path, self.header, timeseries_flush_threshold
        )
        try:
            self._events = _BufferedCsv(
                self.events_path, self.EVENTS_HEADER, events_flush_threshold
            )
        except OSError:
            self._timeseries.close()
            raise

        (self.root_dir / LAST_RUN_FILENAME).write_text(self.run_id, encoding="utf-8")

    def write_meta(self, meta: dict) -> None:
        with self.meta_path.open("w", encoding="utf-8") as fh:
            json.dump(meta, fh, indent=2, sort_keys=True)

    def log_ts(self, values: Sequence[float]) -> None:
        if len(values) != len(self.header):
            raise ValueError(
                f"Expected {len(self.header)} timeseries values, got {len(values)}"
            )
        self._timeseries.append([f"{value:.10g}" for value in values])

    def log_event(self, t: float, event_type: str, details: Optional[dict] = None) -> None:
        payload = json.dumps(details, sort_keys=True) if details else ""
        self._events.append([f"{t:.10g}", event_type, payload])

    def close(self) -> None:
        self._timeseries.close()
        self._events.close()

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None


__all__ = [
    "EVENTS_FILENAME",
    "LAST_RUN_FILENAME",
    "META_FILENAME",
    "TIMESERIES_FILENAME",
    "TIMESERIES_HEADERS",
    "RunLogger",
    "allocate_run_dir",
]
