# tests/test_cli.py

import json
from datetime import datetime, timezone

import pytest

from lune import cli


def _parse(s: str) -> datetime:
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def test_phase_json(capsys):
    assert cli.main(["phase", "2014-02-17T00:00-05:00", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["phase"] == pytest.approx(0.568, abs=0.001)
    assert data["illuminated"] == pytest.approx(0.955, abs=0.001)
    assert set(data) == {
        "phase", "illuminated", "age", "distance", "angular_diameter", "sun_distance", "sun_angular_diameter",
    }


def test_phase_text(capsys):
    assert cli.main(["phase", "2014-02-17T05:00Z"]) == 0
    out = capsys.readouterr().out
    assert "Illuminated" in out
    assert "Sun distance (km)" in out


def test_hunt_json(capsys):
    assert cli.main(["hunt", "2014-11-01T06:26-04:00", "--json"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert list(data) == ["new_date", "q1_date", "full_date", "q3_date", "nextnew_date"]
    full = _parse(data["full_date"])
    expected = datetime(2014, 11, 6, 23, 22, 57, tzinfo=timezone.utc)
    assert abs((full - expected).total_seconds()) <= 1.0


def test_hunt_text(capsys):
    assert cli.main(["hunt", "2014-11-01T10:26"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 5
    assert lines[2].startswith("Full moon")
    assert lines[2].split()[-1].startswith("2014-11-06T23:2")


def test_range_text_and_swapped(capsys):
    assert cli.main(["range", "2014-01-01", "2014-12-31T23:59Z", "--phase", "full"]) == 0
    forward = capsys.readouterr().out.splitlines()
    assert len(forward) == 12
    assert cli.main(["range", "2014-12-31T23:59Z", "2014-01-01", "--phase", "full"]) == 0
    assert capsys.readouterr().out.splitlines() == forward


def test_range_json_defaults_to_new_moons(capsys):
    assert cli.main(["range", "2014-01-01", "2014-12-31T23:59Z", "--json"]) == 0
    assert len(json.loads(capsys.readouterr().out)) == 13


def test_julian_both_ways(capsys):
    assert cli.main(["julian", "2000-01-01T00:00Z"]) == 0
    assert capsys.readouterr().out.strip() == "2451544.50000000"
    assert cli.main(["julian", "--jd", "2440587.5"]) == 0
    assert capsys.readouterr().out.strip() == "1970-01-01T00:00:00.000+00:00"


@pytest.mark.parametrize(
    "argv",
    [
        ["phase", "not-a-date"],
        ["range", "2014-01-01"],
        ["range", "2014-01-01", "2014-02-01", "--phase", "gibbous"],
        ["julian"],
        ["ephem", "validate-ref"],
    ],
)
def test_bad_arguments_exit_2(argv):
    with pytest.raises(SystemExit) as exc:
        cli.main(argv)
    assert exc.value.code == 2


def test_verbose_flag(capsys):
    assert cli.main(["-v", "hunt", "2014-11-01T10:26Z", "--json"]) == 0
    assert "full_date" in capsys.readouterr().out
