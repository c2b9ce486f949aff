"""
MechLab - Interactive Mechanics Explorer
========================================

Command line front-end for the topic panels: print the readout of a topic,
record a topic animation to ``data/runs`` or list the available presets.

    mechlab show momentum --preset car_crash
    mechlab show force --set force1=40 --set mass=0
    mechlab record terminal --preset skydiver
"""
from __future__ import annotations

import argparse
from typing import Sequence

from mechlab.core.inputs import parse_inputs
from mechlab.core.readouts import compute_readout
from mechlab.core.recording import RECORDABLE_TOPICS, record_run
from mechlab.data.scenarios import DEFAULT_PRESET_KEY, TOPICS, presets_for


def parse_assignments(assignments: Sequence[str]) -> dict[str, str]:
    """Turn ``["name=value", ...]`` into a mapping."""

    values: dict[str, str] = {}
    for item in assignments:
        name, sep, value = item.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got {item!r}")
        values[name] = value
    return values


def print_lines(title: str, lines: Sequence[tuple[str, str]]) -> None:
    print(title)
    width = max(len(label) for label, _ in lines)
    for label, value in lines:
        print(f"  {label:<{width}}  {value}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mechlab",
        description="Explore classical mechanics topics from the command line.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_topic_arguments(cmd: argparse.ArgumentParser, topics: Sequence[str]) -> None:
        cmd.add_argument("topic", choices=topics)
        cmd.add_argument("--preset", default=DEFAULT_PRESET_KEY, help="Preset to start from")
        cmd.add_argument(
            "--set",
            dest="assignments",
            action="append",
            default=[],
            metavar="NAME=VALUE",
            help="Override a single input (repeatable)",
        )

    show = sub.add_parser("show", help="Print the readout of a topic")
    add_topic_arguments(show, TOPICS)

    record = sub.add_parser("record", help="Play a topic animation and record it")
    add_topic_arguments(record, RECORDABLE_TOPICS)
    record.add_argument("--runs-dir", default="data/runs", help="Root directory for runs")
    record.add_argument("--run-id", default=None, help="Custom run identifier")
    record.add_argument("--max-frames", type=int, default=None, help="Frame limit")

    presets = sub.add_parser("presets", help="List presets")
    presets.add_argument("topic", nargs="?", choices=TOPICS)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "presets":
        topics = [args.topic] if args.topic else list(TOPICS)
        for topic in topics:
            print(f"{topic}:")
            for preset in presets_for(topic):
                values = ", ".join(f"{name}={value:g}" for name, value in preset.values)
                print(f"  {preset.key:<16} {preset.name} ({values})")
                print(f"  {'':<16} {preset.description}")
        return

    try:
        raw = parse_assignments(args.assignments)
        inputs = parse_inputs(args.topic, raw, preset_key=args.preset)
    except (KeyError, ValueError) as exc:
        parser.error(str(exc.args[0]) if exc.args else str(exc))

    if args.command == "show":
        readout = compute_readout(inputs)
        print_lines(f"{args.topic} ({args.preset})", readout.lines())
        return

    if args.max_frames is not None and args.max_frames < 0:
        parser.error("--max-frames must be non-negative")
    run_dir = record_run(
        inputs,
        root_dir=args.runs_dir,
        run_id=args.run_id,
        max_frames=args.max_frames,
    )
    print(f"Recorded {args.topic} run to {run_dir}")


if __name__ == "__main__":
    main()
