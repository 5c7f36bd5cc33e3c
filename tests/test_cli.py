"""
Tests for the command-line interface.

Covers:
- sample: 2D/3D/4D values match the library
- run: headless sketch summary and .npz dump
- presets listing
- Error exits
"""

import json

import numpy as np
import pytest

from driftfield.cli import _parse_seed, main
from driftfield.noise import SimplexNoise


class TestSample:
    """driftfield sample"""

    def test_2d(self, capsys):
        assert main(["sample", "--seed", "42", "0.1", "0.2"]) == 0
        out = capsys.readouterr().out.strip()
        assert float(out) == SimplexNoise(42).noise2d(0.1, 0.2)

    def test_3d(self, capsys):
        assert main(["sample", "-s", "abc", "1", "2", "3"]) == 0
        assert float(capsys.readouterr().out.strip()) == SimplexNoise("abc").noise3d(1, 2, 3)

    def test_4d(self, capsys):
        assert main(["sample", "-s", "7", "1", "2", "3", "4"]) == 0
        assert float(capsys.readouterr().out.strip()) == SimplexNoise(7).noise4d(1, 2, 3, 4)

    def test_wrong_coordinate_count(self, capsys):
        assert main(["sample", "0.5"]) == 1
        assert "ERROR" in capsys.readouterr().out

    def test_parse_seed(self):
        assert _parse_seed("42") == 42
        assert _parse_seed("0.5") == 0.5
        assert _parse_seed("word") == "word"


class TestRun:
    """driftfield run"""

    def test_summary(self, capsys):
        code = main(["run", "--width", "200", "--height", "100", "--frames", "3",
                     "--dots", "50", "--seed", "1"])
        assert code == 0
        out = capsys.readouterr().out
        assert "Dots:        50" in out
        assert "Frames:      3/3" in out

    def test_zero_frames(self, capsys):
        assert main(["run", "--width", "100", "--height", "100", "--frames", "0", "--dots", "5"]) == 0
        assert "Dots:        5" in capsys.readouterr().out

    def test_dump(self, tmp_path):
        out = tmp_path / "state.npz"
        code = main(["run", "-p", "drift", "--width", "300", "--height", "200",
                     "-f", "2", "-d", "40", "-s", "9", "-o", str(out)])
        assert code == 0
        data = np.load(out)
        assert data["positions"].shape == (40, 2)
        assert data["velocities"].shape == (40, 2)
        assert data["fx"].shape == data["values"].shape

    def test_config_file(self, tmp_path, capsys):
        path = tmp_path / "sketch.json"
        path.write_text(json.dumps({"name": "mine", "dots": {"count": 12}}))
        assert main(["run", "-c", str(path), "--width", "100", "--height", "100", "-f", "1"]) == 0
        out = capsys.readouterr().out
        assert "Sketch:      mine" in out
        assert "Dots:        12" in out

    def test_missing_config(self, tmp_path, capsys):
        assert main(["run", "-c", str(tmp_path / "nope.json")]) == 1
        assert "ERROR" in capsys.readouterr().out

    def test_log_file(self, tmp_path):
        log = tmp_path / "run.log"
        assert main(["run", "--width", "100", "--height", "100", "-f", "1", "-d", "3",
                     "--log-file", str(log)]) == 0
        assert "[SKETCH]" in log.read_text()

    def test_unknown_preset_rejected(self):
        with pytest.raises(SystemExit):
            main(["run", "-p", "nope"])


class TestPresets:
    """driftfield presets"""

    def test_lists_presets(self, capsys):
        assert main(["presets"]) == 0
        out = capsys.readouterr().out
        assert "bioluminescence" in out
        assert "drift" in out
