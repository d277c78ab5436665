"""Tests for the sample replay CLI.

Runs ``sensecolor.cli.main`` in-process against the example configs and
checks output formats and exit codes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from sensecolor import cli


PROJECT_ROOT = Path(__file__).parent.parent
PROFILES = str(PROJECT_ROOT / "configs/sensors_v1.yaml")
SAMPLES = str(PROJECT_ROOT / "configs/samples_example.yaml")


@pytest.fixture(autouse=True)
def restore_root_level():
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


class TestInlineSample:
    def test_color_table(self, capsys) -> None:
        code = cli.main([
            "--profiles", PROFILES,
            "--sensor", "tcs3472",
            "--values", "65535", "0", "0", "1000",
        ])
        out = capsys.readouterr().out
        assert code == cli.EXIT_OK
        assert out.startswith("== COLOR ==\n-- tcs3472 (ams) @ 0 [accuracy 0]\n")
        assert "Normalized RGB  R   1.0000" in out
        assert "HSV             H     0.0°" in out
        assert "Clear Channel    1000.0000" in out

    def test_light_table_continuation_lines(self, capsys) -> None:
        code = cli.main([
            "--profiles", PROFILES,
            "--sensor", "ambient-light",
            "--values", "5",
            "--timestamp", "99",
        ])
        out = capsys.readouterr().out.splitlines()
        assert code == cli.EXIT_OK
        assert out[1] == "-- ambient-light (Sensortek) @ 99 [accuracy 0]"
        assert out[2] == "Raw                 5.0000"
        assert out[-1] == "Scene           Night"

    def test_unknown_sensor(self, capsys) -> None:
        code = cli.main(["--profiles", PROFILES, "--sensor", "nope", "--values", "1"])
        assert code == cli.EXIT_CONFIG_ERROR
        assert "Unknown sensor 'nope'" in capsys.readouterr().err

    def test_missing_profiles(self, tmp_path) -> None:
        code = cli.main(["--profiles", str(tmp_path / "none.yaml"), "--sensor", "x"])
        assert code == cli.EXIT_CONFIG_ERROR


class TestSamplesFile:
    def test_json_output_file(self, tmp_path) -> None:
        out_path = tmp_path / "out" / "readings.json"
        code = cli.main([
            "--profiles", PROFILES,
            "--samples_file", SAMPLES,
            "--format", "json",
            "--output", str(out_path),
        ])
        assert code == cli.EXIT_OK

        readings = json.loads(out_path.read_text(encoding="utf-8"))
        assert [r["sensor"] for r in readings] == [
            "ambient-light", "tcs3472", "ambient-light", "rgb-uncalibrated", "proximity"
        ]
        ev = {v["name"]: v["text"] for v in readings[2]["converted_values"]}["Exposure Value"]
        assert "-∞" in ev
        assert [v["name"] for v in readings[4]["converted_values"]] == ["Raw"]

    def test_table_groups_by_category(self, capsys) -> None:
        code = cli.main(["--profiles", PROFILES, "--samples_file", SAMPLES])
        out = capsys.readouterr().out
        assert code == cli.EXIT_OK
        headers = [line for line in out.splitlines() if line.startswith("== ")]
        assert headers == ["== COLOR ==", "== LIGHT ==", "== UNKNOWN =="]

    def test_log_file_written(self, tmp_path, capsys) -> None:
        log_file = tmp_path / "cli.log"
        code = cli.main([
            "--profiles", PROFILES,
            "--samples_file", SAMPLES,
            "--log_level", "INFO",
            "--log_file", str(log_file),
            "--log_json",
        ])
        capsys.readouterr()
        assert code == cli.EXIT_OK
        records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        assert any("Replaying 5 sample(s)" in r["msg"] for r in records)
        assert all(r["app"] == "read_sensor" for r in records)

    def test_malformed_samples_file(self, tmp_path) -> None:
        bad = tmp_path / "samples.yaml"
        bad.write_text("schema: samples.v1\nsamples: [\n", encoding="utf-8")
        code = cli.main(["--profiles", PROFILES, "--samples_file", str(bad)])
        assert code == cli.EXIT_CONFIG_ERROR


class TestArguments:
    def test_log_level_is_case_insensitive(self, capsys) -> None:
        code = cli.main([
            "--profiles", PROFILES,
            "--sensor", "ambient-light",
            "--values", "5",
            "--log_level", "info",
        ])
        capsys.readouterr()
        assert code == cli.EXIT_OK

    def test_invalid_log_level_is_usage_error(self, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            cli.main([
                "--profiles", PROFILES,
                "--sensor", "tcs3472",
                "--values", "1",
                "--log_level", "LOUD",
            ])
        assert excinfo.value.code == cli.EXIT_CONFIG_ERROR
        err = capsys.readouterr().err
        assert "--log_level" in err
        assert "Traceback" not in err

    @pytest.mark.parametrize("extra", [
        ["--values", "1", "2", "3"],
        ["--timestamp", "5"],
        ["--accuracy", "3"],
    ])
    def test_inline_options_rejected_with_samples_file(self, extra, capsys) -> None:
        with pytest.raises(SystemExit) as excinfo:
            cli.main(["--profiles", PROFILES, "--samples_file", SAMPLES, *extra])
        assert excinfo.value.code == cli.EXIT_CONFIG_ERROR
        assert "can only be used with --sensor" in capsys.readouterr().err

    def test_inline_defaults(self) -> None:
        args = cli.parse_args(["--profiles", PROFILES, "--sensor", "tcs3472"])
        assert args.values == []
        assert args.timestamp == 0
        assert args.accuracy == 0
        assert args.log_level == "WARNING"
