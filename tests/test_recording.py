import json

import numpy as np
import pytest

from mechlab.analyze_run import analyze, load_events, load_timeseries, resolve_run_dir
from mechlab.core import logging_utils
from mechlab.core.inputs import MomentumInputs, parse_inputs
from mechlab.core.logging_utils import (
    EVENTS_FILENAME,
    LAST_RUN_FILENAME,
    META_FILENAME,
    TIMESERIES_FILENAME,
    RunLogger,
)
from mechlab.core.recording import record_run


def _read_meta(run_dir):
    return json.loads((run_dir / META_FILENAME).read_text(encoding="utf-8"))


def test_run_logger_writes_files_and_marker(tmp_path):
    with RunLogger(tmp_path, ("t", "v"), "demo", timeseries_flush_threshold=1) as logger:
        logger.log_ts([0.0, 1.5])
        logger.log_ts([0.1, 2.5])
        logger.log_event(0.1, "contact", {"note": 'say "hi"', "v": 2.5})
        logger.write_meta({"topic": "demo"})

    run_dir = tmp_path / "demo"
    assert (tmp_path / LAST_RUN_FILENAME).read_text(encoding="utf-8") == "demo"
    ts = load_timeseries(run_dir / TIMESERIES_FILENAME)
    np.testing.assert_allclose(ts["t"], [0.0, 0.1])
    np.testing.assert_allclose(ts["v"], [1.5, 2.5])
    events = load_events(run_dir / EVENTS_FILENAME)
    assert events == [{"t": 0.1, "type": "contact", "details": {"note": 'say "hi"', "v": 2.5}}]
    assert _read_meta(run_dir) == {"topic": "demo"}


def test_run_logger_never_reuses_a_run_folder(tmp_path):
    first = RunLogger(tmp_path, ("t",), "demo")
    second = RunLogger(tmp_path, ("t",), "demo")
    first.close()
    second.close()
    assert first.run_id == "demo"
    assert second.run_id == "demo_1"
    assert (tmp_path / LAST_RUN_FILENAME).read_text(encoding="utf-8") == "demo_1"


def test_run_logger_validates_rows(tmp_path):
    with pytest.raises(ValueError):
        RunLogger(tmp_path, (), "empty")
    with RunLogger(tmp_path, ("t", "v"), "rows") as logger:
        with pytest.raises(ValueError):
            logger.log_ts([1.0])


def test_record_motion_run(tmp_path):
    run_dir = record_run(parse_inputs("motion"), root_dir=tmp_path, run_id="motion")
    meta = _read_meta(run_dir)
    assert meta["topic"] == "motion"
    assert meta["completed"]
    assert meta["readout"]["displacement"] == 100

    ts = load_timeseries(run_dir / TIMESERIES_FILENAME)
    assert ts["t"][0] == 0
    assert ts["t"][-1] <= 10
    np.testing.assert_allclose(ts["v"], 2.0 * ts["t"], atol=1e-9)

    events = load_events(run_dir / EVENTS_FILENAME)
    assert [event["type"] for event in events] == ["start", "complete"]
    assert events[-1]["details"]["s"] == 100


def test_record_fall_run(tmp_path):
    run_dir = record_run(parse_inputs("terminal"), root_dir=tmp_path, run_id="fall")
    meta = _read_meta(run_dir)
    assert meta["completed"]
    assert meta["readout"]["terminal_velocity"] == pytest.approx(14)

    events = load_events(run_dir / EVENTS_FILENAME)
    assert [event["type"] for event in events] == ["start", "floor"]
    assert 0 < events[-1]["details"]["v"] <= 14
    ts = load_timeseries(run_dir / TIMESERIES_FILENAME)
    np.testing.assert_allclose(ts["net_force"] + ts["drag"], 19.6, rtol=1e-6)


def test_record_collision_run(tmp_path):
    run_dir = record_run(parse_inputs("momentum"), root_dir=tmp_path, run_id="collision")
    events = load_events(run_dir / EVENTS_FILENAME)
    assert [event["type"] for event in events] == ["start", "contact", "complete"]
    contact = events[1]
    assert contact["t"] == 16
    assert contact["details"]["conserved"] is True
    assert contact["details"]["v1f"] == pytest.approx(-1)

    ts = load_timeseries(run_dir / TIMESERIES_FILENAME)
    np.testing.assert_allclose(ts["p_total"], 28, atol=1e-6)
    np.testing.assert_allclose(ts["ke_total"], 184, atol=1e-6)
    assert _read_meta(run_dir)["frames"] == 28


def test_record_stops_at_the_frame_limit(tmp_path):
    inputs = MomentumInputs(mass1=5, velocity1=0, mass2=3, velocity2=0, elastic=True)
    run_dir = record_run(inputs, root_dir=tmp_path, run_id="stuck", max_frames=10)
    meta = _read_meta(run_dir)
    assert not meta["completed"]
    assert meta["frames"] == 11
    events = load_events(run_dir / EVENTS_FILENAME)
    assert events[-1]["type"] == "frame_limit"
    assert events[-1]["details"] == {"max_frames": 10}


def test_record_rejects_static_topics(tmp_path):
    with pytest.raises(ValueError):
        record_run(parse_inputs("moment"), root_dir=tmp_path)


@pytest.mark.parametrize(
    "topic, expected",
    [
        ("motion", {"velocity_time.png", "displacement_time.png"}),
        ("terminal", {"fall_velocity.png", "fall_forces.png"}),
        ("momentum", {"collision_positions.png", "collision_conservation.png"}),
    ],
)
def test_analyze_writes_figures(tmp_path, topic, expected):
    run_dir = record_run(parse_inputs(topic), root_dir=tmp_path, run_id=topic)
    figures, lines = analyze(run_dir)
    assert {figure.name for figure in figures} == expected
    assert all(figure.exists() for figure in figures)
    assert lines[0] == f" Topic: {topic}"


def test_analyze_summary_for_collision(tmp_path):
    run_dir = record_run(parse_inputs("momentum"), root_dir=tmp_path, run_id="collision")
    _, lines = analyze(run_dir)
    assert " Momentum before/after = 28.000 / 28.000 kg·m/s" in lines
    assert " Momentum conserved: Yes" in lines


def test_resolve_run_dir(tmp_path):
    record_run(parse_inputs("motion"), root_dir=tmp_path, run_id="first")
    record_run(parse_inputs("motion"), root_dir=tmp_path, run_id="second")
    assert resolve_run_dir(None, tmp_path) == tmp_path / "second"
    assert resolve_run_dir("first", tmp_path) == tmp_path / "first"
    with pytest.raises(FileNotFoundError):
        resolve_run_dir(None, tmp_path / "missing")


def test_fall_run_logs_the_step_forces_and_the_floor_frame(tmp_path):
    inputs = parse_inputs("terminal")
    run_dir = record_run(inputs, root_dir=tmp_path, run_id="fall")
    ts = load_timeseries(run_dir / TIMESERIES_FILENAME)
    events = load_events(run_dir / EVENTS_FILENAME)
    floor = events[-1]

    assert ts["t"].size == _read_meta(run_dir)["frames"]
    assert np.all(np.diff(ts["t"]) > 0)
    assert ts["drag"][0] == 0
    assert ts["drag"][1] == 0
    assert ts["drag"][2] == pytest.approx(0.09604)
    np.testing.assert_allclose(ts["drag"][1:], inputs.drag * ts["v"][:-1] ** 2, rtol=1e-8)
    assert ts["y"][-1] > 350
    assert ts["v"][-1] == pytest.approx(floor["details"]["v"])
    assert ts["t"][-1] == pytest.approx(floor["t"])


def test_run_logger_closes_timeseries_when_events_file_fails(tmp_path, monkeypatch):
    opened = []
    buffered_csv = logging_utils._BufferedCsv

    def open_csv(path, header, threshold):
        if path.name == EVENTS_FILENAME:
            raise PermissionError(path)
        table = buffered_csv(path, header, threshold)
        opened.append(table)
        return table

    monkeypatch.setattr(logging_utils, "_BufferedCsv", open_csv)
    with pytest.raises(PermissionError):
        RunLogger(tmp_path, ("t",), "locked")
    assert len(opened) == 1
    assert opened[0]._fh.closed
