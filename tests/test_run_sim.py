"""Tests for the headless run CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pyarrow.parquet as pq
import pytest

from bouncy_epidemics.config.types import ConfigurationError, SpeedMode
from bouncy_epidemics.run_sim import (
    _parse_canvas,
    _parse_speed_mode,
    configure_logging,
    load_file_config,
    main,
)


class TestParsers:
    def test_parse_canvas(self) -> None:
        assert _parse_canvas("640x480") == (640, 480)
        assert _parse_canvas("320X320") == (320, 320)

    @pytest.mark.parametrize(
        "raw,message",
        [
            ("640", "WxH format"),
            ("axb", "integer WxH"),
            ("0x10", ">= 1x1"),
        ],
    )
    def test_parse_canvas_errors(self, raw: str, message: str) -> None:
        with pytest.raises(ValueError, match=message):
            _parse_canvas(raw)

    def test_parse_speed_mode(self) -> None:
        assert _parse_speed_mode("distancing") == SpeedMode.DISTANCING
        with pytest.raises(ValueError, match="speed-mode"):
            _parse_speed_mode("fast")

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ValueError, match="log level"):
            configure_logging("chatty")

    def test_load_file_config_requires_object(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.json"
        path.write_text("[1, 2]")
        with pytest.raises(ValueError, match="JSON object"):
            load_file_config(path)

    def test_load_file_config_absent(self) -> None:
        assert load_file_config(None) == {}


class TestMain:
    def test_single_run_prints_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["--population", "6", "--sick-duration", "3", "--seed", "2"])
        summary = json.loads(capsys.readouterr().out)
        assert summary["mode"] == "single"
        assert summary["seed"] == 2
        assert summary["config"]["population"] == 6
        assert summary["termination_reason"] in {"burned_out", "step_cap"}
        assert set(summary["percentages"]) == {"healthy", "sick", "immune", "dead"}
        finals = ("final_healthy", "final_sick", "final_immune", "final_dead")
        assert sum(summary[key] for key in finals) == 6

    def test_canvas_and_speed_mode_flags(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["--population", "3", "--canvas", "640x640", "--speed-mode", "distancing"])
        config = json.loads(capsys.readouterr().out)["config"]
        assert config["arena"] == {"width": 640.0, "height": 480.0}
        assert config["speed_mode"] == "distancing"

    def test_config_file_with_cli_override(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cfg = tmp_path / "cfg.json"
        cfg.write_text(json.dumps({"population": 8, "mortality": 0.5, "sick_duration": 2}))
        main(["--config", str(cfg), "--mortality", "0.0"])
        summary = json.loads(capsys.readouterr().out)
        assert summary["config"]["population"] == 8
        assert summary["config"]["mortality"] == 0.0
        assert summary["final_dead"] == 0

    def test_invalid_parameter_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="mortality"):
            main(["--population", "3", "--mortality", "1.5"])

    def test_batch_mode(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        out_dir = tmp_path / "out"
        main(
            [
                "--batch",
                "--n-seeds",
                "2",
                "--population",
                "5",
                "--sick-duration",
                "2",
                "--out-dir",
                str(out_dir),
            ]
        )
        summary = json.loads(capsys.readouterr().out)
        assert summary["mode"] == "batch"
        assert summary["runs"] == 2
        assert summary["out_dir"] == str(out_dir)
        table = pq.read_table(out_dir / "logs" / "run_summary.parquet")
        assert table.column("seed").to_pylist() == [0, 1]

    def test_batch_flag_from_config_file(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        cfg = tmp_path / "cfg.json"
        out_dir = tmp_path / "from_file"
        cfg.write_text(
            json.dumps(
                {
                    "batch": True,
                    "n_seeds": 1,
                    "seed": 4,
                    "population": 3,
                    "sick_duration": 2,
                    "out_dir": str(out_dir),
                }
            )
        )
        main(["--config", str(cfg)])
        summary = json.loads(capsys.readouterr().out)
        assert summary["mode"] == "batch"
        assert (out_dir / "logs" / "step_counts.parquet").exists()
