"""Analyze a recorded animation run and generate figures."""
from __future__ import annotations

import argparse
import csv
import json
import math
from pathlib import Path
from typing import Dict, List, Sequence

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from mechlab.core.config import FIGURE_CFG, FigureCfg
from mechlab.core.logging_utils import (
    EVENTS_FILENAME,
    LAST_RUN_FILENAME,
    META_FILENAME,
    TIMESERIES_FILENAME,
)

FIGS_SUBDIR = "figs"


def load_timeseries(path: Path) -> Dict[str, np.ndarray]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        columns: Dict[str, List[float]] = {name: [] for name in reader.fieldnames or []}
        for row in reader:
            for key, value in row.items():
                if key is None:
                    continue
                columns.setdefault(key, []).append(float(value))
    return {key: np.asarray(values) for key, values in columns.items()}


def load_events(path: Path) -> List[dict]:
    with path.open("r", newline="") as fh:
        reader = csv.DictReader(fh)
        events: List[dict] = []
        for row in reader:
            if not row:
                continue
            event = {"t": float(row["t"]), "type": row["type"], "details": {}}
            details_raw = row.get("details", "")
            if details_raw:
                try:
                    event["details"] = json.loads(details_raw)
                except json.JSONDecodeError:
                    event["details"] = {"raw": details_raw}
            events.append(event)
    return events


def ensure_fig_dir(run_dir: Path) -> Path:
    fig_dir = run_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def find_event(events: Sequence[dict], event_type: str) -> dict | None:
    for event in events:
        if event["type"] == event_type:
            return event
    return None


def plot_motion(fig_dir: Path, ts: Dict[str, np.ndarray], cfg: FigureCfg = FIGURE_CFG) -> List[Path]:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["v"], color=cfg.velocity_color, lw=2.0)
    ax.fill_between(ts["t"], 0.0, ts["v"], color=cfg.area_fill_color, alpha=cfg.area_fill_alpha)
    ax.axhline(0.0, color="black", lw=0.8)
    ax.set_xlabel("t [s]")
    ax.set_ylabel("v [m/s]")
    ax.set_title("Velocity-time graph (area = displacement)")
    ax.grid(True, alpha=cfg.grid_alpha)
    fig.tight_layout()
    vt_path = fig_dir / "velocity_time.png"
    fig.savefig(vt_path, dpi=cfg.dpi)
    plt.close(fig)

    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["s"], color=cfg.marker_color, lw=2.0)
    ax.set_xlabel("t [s]")
    ax.set_ylabel("s [m]")
    ax.set_title("Displacement-time graph")
    ax.grid(True, alpha=cfg.grid_alpha)
    fig.tight_layout()
    st_path = fig_dir / "displacement_time.png"
    fig.savefig(st_path, dpi=cfg.dpi)
    plt.close(fig)
    return [vt_path, st_path]


def plot_fall(
    fig_dir: Path,
    ts: Dict[str, np.ndarray],
    terminal_velocity: float,
    cfg: FigureCfg = FIGURE_CFG,
) -> List[Path]:
    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["t"], ts["v"], color=cfg.velocity_color, lw=2.0, label="v")
    if math.isfinite(terminal_velocity):
        ax.axhline(
            terminal_velocity,
            color=cfg.terminal_color,
            linestyle="--",
            alpha=0.7,
            label=f"Terminal velocity {terminal_velocity:.2f} m/s",
        )
    ax.set_xlabel("t [s]")
    ax.set_ylabel("v [m/s]")
    ax.set_title("Falling body approaching terminal velocity")
    ax.grid(True, alpha=cfg.grid_alpha)
    ax.legend()
    fig.tight_layout()
    velocity_path = fig_dir / "fall_velocity.png"
    fig.savefig(velocity_path, dpi=cfg.dpi)
    plt.close(fig)

    fig, ax = plt.subplots(figsize=(7, 4))
    weight = ts["net_force"] + ts["drag"]
    ax.plot(ts["t"], weight, color=cfg.weight_color, lw=1.5, label="Weight")
    ax.plot(ts["t"], ts["drag"], color=cfg.drag_color, lw=1.5, label="Air resistance")
    ax.plot(ts["t"], ts["net_force"], color=cfg.terminal_color, lw=1.0, linestyle=":", label="Net force")
    ax.set_xlabel("t [s]")
    ax.set_ylabel("F [N]")
    ax.set_title("Forces on the falling body")
    ax.grid(True, alpha=cfg.grid_alpha)
    ax.legend()
    fig.tight_layout()
    forces_path = fig_dir / "fall_forces.png"
    fig.savefig(forces_path, dpi=cfg.dpi)
    plt.close(fig)
    return [velocity_path, forces_path]


def plot_collision(
    fig_dir: Path,
    ts: Dict[str, np.ndarray],
    events: Sequence[dict],
    cfg: FigureCfg = FIGURE_CFG,
) -> List[Path]:
    contact = find_event(events, "contact")

    fig, ax = plt.subplots(figsize=(7, 4))
    ax.plot(ts["frame"], ts["x1"], color=cfg.body1_color, lw=2.0, label="Body 1")
    ax.plot(ts["frame"], ts["x2"], color=cfg.body2_color, lw=2.0, label="Body 2")
    if contact is not None:
        ax.axvline(contact["t"], color="black", linestyle="--", alpha=0.5, label="Contact")
    ax.set_xlabel("frame")
    ax.set_ylabel("x")
    ax.set_title("Positions of the colliding bodies")
    ax.grid(True, alpha=cfg.grid_alpha)
    ax.legend()
    fig.tight_layout()
    positions_path = fig_dir / "collision_positions.png"
    fig.savefig(positions_path, dpi=cfg.dpi)
    plt.close(fig)

    fig, (ax_p, ax_ke) = plt.subplots(2, 1, figsize=(7, 6), sharex=True)
    ax_p.plot(ts["frame"], ts["p_total"], color=cfg.velocity_color)
    ax_p.set_ylabel("p [kg·m/s]")
    ax_p.set_title("Total momentum and kinetic energy")
    ax_p.grid(True, alpha=cfg.grid_alpha)
    ax_ke.plot(ts["frame"], ts["ke_total"], color=cfg.marker_color)
    ax_ke.set_xlabel("frame")
    ax_ke.set_ylabel("KE [J]")
    ax_ke.grid(True, alpha=cfg.grid_alpha)
    if contact is not None:
        for ax in (ax_p, ax_ke):
            ax.axvline(contact["t"], color="black", linestyle="--", alpha=0.5)
    fig.tight_layout()
    conservation_path = fig_dir / "collision_conservation.png"
    fig.savefig(conservation_path, dpi=cfg.dpi)
    plt.close(fig)
    return [positions_path, conservation_path]


def summarize(meta: dict, ts: Dict[str, np.ndarray], events: Sequence[dict]) -> List[str]:
    """Summary lines for the console."""

    topic = meta.get("topic", "unknown")
    lines = [f" Topic: {topic}", f" Frames: {meta.get('frames', len(next(iter(ts.values()))))}"]
    if not meta.get("completed", True):
        lines.append(" Animation stopped at the frame limit")

    if topic == "motion":
        complete = find_event(events, "complete")
        if complete is not None:
            details = complete["details"]
            lines.append(f" Final velocity v = {details['v']:.3f} m/s")
            lines.append(f" Displacement s = {details['s']:.3f} m")
            lines.append(f" Area under v-t graph = {details['area']:.3f} m")
        if ts["t"].size >= 2:
            v, t = ts["v"], ts["t"]
            sampled_area = float(np.sum(0.5 * (v[1:] + v[:-1]) * np.diff(t)))
            lines.append(f" Area from samples (0 to {ts['t'][-1]:.1f} s) = {sampled_area:.3f} m")
    elif topic == "terminal":
        floor = find_event(events, "floor")
        terminal = float(meta.get("readout", {}).get("terminal_velocity", math.nan))
        lines.append(f" Terminal velocity = {terminal:.3f} m/s")
        if floor is not None:
            v_floor = floor["details"]["v"]
            lines.append(f" Speed at the floor = {v_floor:.3f} m/s (t = {floor['t']:.1f} s)")
            if math.isfinite(terminal) and terminal > 0:
                lines.append(f" Fraction of terminal velocity = {v_floor / terminal:.1%}")
    elif topic == "momentum":
        p = ts["p_total"]
        ke = ts["ke_total"]
        if p.size:
            lines.append(f" Momentum before/after = {p[0]:.3f} / {p[-1]:.3f} kg·m/s")
            lines.append(f" Kinetic energy before/after = {ke[0]:.3f} / {ke[-1]:.3f} J")
        contact = find_event(events, "contact")
        if contact is not None:
            conserved = contact["details"].get("conserved")
            lines.append(f" Momentum conserved: {'Yes' if conserved else 'No'}")
        else:
            lines.append(" No contact recorded")
    return lines


def resolve_run_dir(run_dir: str | None, runs_dir: Path) -> Path:
    """Locate a run folder by path or id; defaults to the last recorded run."""

    if run_dir:
        run_path = Path(run_dir)
        if not run_path.is_dir():
            run_path = runs_dir / run_dir
        return run_path
    last_run_file = runs_dir / LAST_RUN_FILENAME
    if not last_run_file.exists():
        raise FileNotFoundError(f"No run given and {last_run_file} is missing")
    return runs_dir / last_run_file.read_text(encoding="utf-8").strip()


def analyze(run_path: Path) -> tuple[List[Path], List[str]]:
    """Write the figures for ``run_path`` and return them with the summary lines."""

    meta_path = run_path / META_FILENAME
    ts_path = run_path / TIMESERIES_FILENAME
    ev_path = run_path / EVENTS_FILENAME
    if not meta_path.exists() or not ts_path.exists() or not ev_path.exists():
        raise FileNotFoundError(f"{run_path} is missing meta/timeseries/events files")

    with meta_path.open("r", encoding="utf-8") as fh:
        meta = json.load(fh)
    ts = load_timeseries(ts_path)
    events = load_events(ev_path)
    if not ts or not next(iter(ts.values())).size:
        raise ValueError(f"{ts_path} is empty")

    fig_dir = ensure_fig_dir(run_path)
    topic = meta.get("topic")
    if topic == "motion":
        figures = plot_motion(fig_dir, ts)
    elif topic == "terminal":
        terminal = float(meta.get("readout", {}).get("terminal_velocity", math.nan))
        figures = plot_fall(fig_dir, ts, terminal)
    elif topic == "momentum":
        figures = plot_collision(fig_dir, ts, events)
    else:
        raise ValueError(f"Unknown topic in {meta_path}: {topic!r}")
    return figures, summarize(meta, ts, events)


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Analyze a recorded run and create figures.")
    parser.add_argument("run_dir", nargs="?", help="Path or id of a run folder")
    parser.add_argument("--runs-dir", default="data/runs", help="Root directory for runs")
    args = parser.parse_args(argv)

    try:
        run_path = resolve_run_dir(args.run_dir, Path(args.runs_dir))
    except FileNotFoundError as exc:
        parser.error(str(exc))
    if not run_path.is_dir():
        parser.error(f"Could not find run folder: {run_path}")

    try:
        figures, lines = analyze(run_path)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))

    print(f"Run: {run_path.name}")
    for line in lines:
        print(line)
    for figure in figures:
        print(f" Figure: {figure}")


if __name__ == "__main__":
    main()
