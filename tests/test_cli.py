from __future__ import annotations

import json

import pytest

from suntime_cli import main


def _run(capsys: pytest.CaptureFixture[str], *argv: str) -> dict:
    assert main(list(argv)) == 0
    return json.loads(capsys.readouterr().out)


def test_sun_command_with_offset(capsys):
    output = _run(
        capsys,
        "sun",
        "--lat", "38.85563244",
        "--lon", "-90.85866",
        "--date", "2025-01-07",
        "--tz", "-6",
    )
    assert output["status"] == "ok"
    assert output["twilight"] == "official"
    assert output["sunrise"] == "2025-01-07T07:22:01-06:00"
    assert output["sunset"] == "2025-01-07T16:57:14-06:00"


def test_sun_command_reports_polar_night(capsys):
    output = _run(
        capsys, "sun", "--lat", "70", "--lon", "0", "--date", "2024-12-21"
    )
    assert output["status"] == "polar_night"
    assert output["sunrise"] is None


def test_events_command(capsys):
    output = _run(
        capsys, "events", "--lat", "38.85563244", "--lon", "-90.85866", "--date", "2025-01-07"
    )
    assert output["sunrise"] == "2025-01-07T13:22:01Z"
    assert output["astronomical_twilight_sunset"] == "2025-01-08T00:32:10Z"


def test_dms_commands(capsys):
    parsed = _run(capsys, "dms-parse", "38° 51' 31.44\" N")
    assert parsed["decimal"] == 38.8587333
    assert parsed["direction"] == "N"

    formatted = _run(capsys, "dms-format", "-90.85866", "--longitude")
    assert formatted["text"] == "90° 51' 31.176\" W"


def test_errors_exit_with_status_one(capsys):
    assert main(["dms-parse", "38 51 31 N"]) == 1
    assert "Invalid DMS format" in capsys.readouterr().err

    assert main(["events", "--lat", "95", "--lon", "0", "--date", "2025-01-07"]) == 1
    assert "Latitude out of range" in capsys.readouterr().err


def test_bad_date_is_an_argument_error(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["sun", "--lat", "0", "--lon", "0", "--date", "07/01/2025"])
    assert excinfo.value.code == 2


def test_dms_format_out_of_range_exits_with_status_one(capsys):
    assert main(["dms-format", "95"]) == 1
    assert "Latitude out of range" in capsys.readouterr().err

    assert main(["dms-format", "200", "--longitude"]) == 1
    assert "Longitude out of range" in capsys.readouterr().err
