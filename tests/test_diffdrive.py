import json
import math

import pytest

from lielib import diffdrive


@pytest.fixture
def params_file(tmp_path):
    path = tmp_path / "diffdrive.json"
    path.write_text(json.dumps({"wheel_radius": 0.05, "track_width": 0.3}))
    return path


def test_load_params_reads_values(params_file):
    params = diffdrive.load_params(params_file)
    assert params == diffdrive.DiffDriveParams(wheel_radius=0.05, track_width=0.3)


def test_load_params_missing_key_gives_none(tmp_path):
    path = tmp_path / "partial.json"
    path.write_text(json.dumps({"wheel_radius": 0.05}))
    assert diffdrive.load_params(path) is None


def test_load_params_invalid_json_raises(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json")
    with pytest.raises(ValueError):
        diffdrive.load_params(path)


def test_load_params_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        diffdrive.load_params(tmp_path / "absent.json")


def test_simulate_starts_at_origin_and_counts_steps():
    positions = diffdrive.simulate()
    assert len(positions) == 501
    assert positions[0] == (0.0, 0.0)


def test_simulate_follows_unit_circle():
    positions = diffdrive.simulate((0.628, 0.0, 0.628), 500, 10.0)
    for x, y in positions:
        assert math.hypot(x, y - 1.0) == pytest.approx(1.0, abs=1e-9)


def test_simulate_nearly_closes_the_loop():
    x, y = diffdrive.simulate()[-1]
    assert math.hypot(x, y) < 0.01


def test_simulate_rejects_zero_steps():
    with pytest.raises(ValueError):
        diffdrive.simulate(total_steps=0)


def test_save_positions_round_trip(tmp_path):
    path = tmp_path / "out.json"
    positions = [(0.0, 0.0), (1.5, -2.25)]
    diffdrive.save_positions(path, positions)
    assert json.loads(path.read_text()) == [[0.0, 0.0], [1.5, -2.25]]
    assert "\n    [" in path.read_text()


def test_main_writes_positions(tmp_path, params_file, capsys):
    output = tmp_path / "robot_pos.json"
    code = diffdrive.main(["--params", str(params_file), "--output", str(output)])
    assert code == 0
    data = json.loads(output.read_text())
    assert len(data) == 501
    assert "vx: 0.628 vy: 0 vz: 0.628" in capsys.readouterr().out


def test_main_missing_params_file_fails(tmp_path, capsys):
    output = tmp_path / "robot_pos.json"
    code = diffdrive.main(["--params", str(tmp_path / "absent.json"), "--output", str(output)])
    assert code == 1
    assert "Failed to open file" in capsys.readouterr().err
    assert not output.exists()


def test_main_bad_json_fails(tmp_path, capsys):
    bad = tmp_path / "bad.json"
    bad.write_text("{")
    code = diffdrive.main(["--params", str(bad), "--output", str(tmp_path / "o.json")])
    assert code == 1
    assert "Error parsing JSON" in capsys.readouterr().err