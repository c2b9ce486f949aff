import pytest

from mechlab import analyze_run
from mechlab.main import main, parse_assignments


def test_parse_assignments():
    assert parse_assignments(["mass=2", " drag = 0.5"]) == {"mass": "2", "drag": " 0.5"}
    assert parse_assignments(["time="]) == {"time": ""}
    with pytest.raises(ValueError):
        parse_assignments(["mass"])
    with pytest.raises(ValueError):
        parse_assignments(["=3"])


def test_show_prints_readout(capsys):
    main(["show", "motion"])
    out = capsys.readouterr().out
    assert out.startswith("motion (default)")
    assert "20.00 m/s" in out
    assert "triangle" in out


def test_show_with_overrides(capsys):
    main(["show", "force", "--set", "force1=3", "--set", "force2=4", "--set", "mass=0"])
    out = capsys.readouterr().out
    assert "5.00 N" in out
    assert "0.00 m/s²" in out


def test_show_with_preset(capsys):
    main(["show", "momentum", "--preset", "car_crash"])
    out = capsys.readouterr().out
    assert "inelastic" in out
    assert "11.11 m/s" in out


@pytest.mark.parametrize(
    "argv",
    [
        ["show", "motion", "--set", "speed=3"],
        ["show", "motion", "--set", "time=soon"],
        ["show", "motion", "--set", "oops"],
        ["show", "motion", "--preset", "warp_speed"],
        ["show", "optics"],
        ["record", "moment"],
        ["record", "terminal", "--max-frames", "-1"],
    ],
)
def test_invalid_arguments_exit_with_usage_error(argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(argv)
    assert excinfo.value.code == 2
    assert "error:" in capsys.readouterr().err


def test_presets_listing(capsys):
    main(["presets", "terminal"])
    out = capsys.readouterr().out
    assert out.startswith("terminal:")
    assert "skydiver" in out
    assert "momentum:" not in out

    main(["presets"])
    out = capsys.readouterr().out
    for topic in ("motion:", "force:", "momentum:", "terminal:", "centre_of_mass:", "moment:"):
        assert topic in out


def test_record_then_analyze(tmp_path, capsys):
    main(["record", "momentum", "--runs-dir", str(tmp_path), "--run-id", "demo"])
    out = capsys.readouterr().out
    assert out.strip() == f"Recorded momentum run to {tmp_path / 'demo'}"

    analyze_run.main(["--runs-dir", str(tmp_path)])
    out = capsys.readouterr().out
    assert "Run: demo" in out
    assert " Topic: momentum" in out
    assert (tmp_path / "demo" / "figs" / "collision_positions.png").exists()


def test_analyze_without_runs_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        analyze_run.main(["--runs-dir", str(tmp_path)])
    assert excinfo.value.code == 2
    assert "last_run.txt" in capsys.readouterr().err
