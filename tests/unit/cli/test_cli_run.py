"""Tests for the run and plan CLI commands."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from vbt.cli import main
from vbt.cli.exit_codes import ExitCode


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def batch_config(
    write_config: Callable[[str], Path], fake_ffmpeg: Path, input_dir: Path
) -> Callable[[str], Path]:
    """Write a config pointing at the fake ffmpeg and the input directory."""

    def _write(extra: str = "") -> Path:
        return write_config(
            f"encoder_path: {fake_ffmpeg}\n"
            f"working_dir: {input_dir.name}\n"
            "output_dir: out\n"
            f"{extra}"
        )

    return _write


class TestRunCommand:
    """Tests for vbt run."""

    def test_success(
        self, runner: CliRunner, batch_config: Callable[[str], Path]
    ) -> None:
        """All files succeed; summary printed; exit 0."""
        result = runner.invoke(main, ["run", str(batch_config())])

        assert result.exit_code == ExitCode.SUCCESS, result.output
        assert "[ok] a.mp4" in result.output
        assert "Succeeded: 3" in result.output

    def test_failed_file_exits_operation_failed(
        self,
        runner: CliRunner,
        batch_config: Callable[[str], Path],
        input_dir: Path,
    ) -> None:
        """A failing file still lets the batch finish, then exits 40."""
        (input_dir / "b__corrupt__.mp4").write_bytes(b"x")

        result = runner.invoke(main, ["run", str(batch_config())])

        assert result.exit_code == ExitCode.OPERATION_FAILED
        assert "[FAIL] b__corrupt__.mp4" in result.output
        assert "Failed files:" in result.output
        assert "Succeeded: 3" in result.output

    def test_json_summary(
        self,
        runner: CliRunner,
        batch_config: Callable[[str], Path],
        tmp_path: Path,
    ) -> None:
        """--json emits the summary as a JSON object."""
        result = runner.invoke(
            main,
            [
                "--log-file",
                str(tmp_path / "vbt.log"),
                "run",
                str(batch_config("concat: {enabled: true}\n")),
                "--json",
            ],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["status"] == "completed"
        assert data["summary"]["succeeded"] == 3
        assert data["summary"]["concat"]["status"] == "succeeded"
        assert [f["status"] for f in data["summary"]["files"]] == ["succeeded"] * 3

    def test_json_log_file_records_job_outcomes(
        self,
        runner: CliRunner,
        batch_config: Callable[[str], Path],
        tmp_path: Path,
    ) -> None:
        """--log-json over a config logging section writes job outcomes as JSON."""
        log_file = tmp_path / "vbt.log"
        config = batch_config("logging: {level: debug, max_bytes: 0}\n")

        result = runner.invoke(
            main, ["--log-json", "--log-file", str(log_file), "run", str(config)]
        )

        assert result.exit_code == 0, result.output
        entries = [json.loads(line) for line in log_file.read_text().splitlines()]
        outcomes = [e for e in entries if "job" in e]
        assert [e["file"]["id"] for e in outcomes] == ["F001", "F002", "F003"]
        assert outcomes[0]["job"]["status"] == "succeeded"
        assert outcomes[0]["job"]["output_path"].endswith("a.mp4")
        assert any(e["level"] == "debug" for e in entries)

    def test_dry_run_writes_nothing(
        self,
        runner: CliRunner,
        batch_config: Callable[[str], Path],
        input_dir: Path,
    ) -> None:
        """--dry-run reports success without creating the output dir."""
        result = runner.invoke(main, ["run", str(batch_config()), "--dry-run"])

        assert result.exit_code == 0, result.output
        assert "Dry run summary" in result.output
        assert not (input_dir / "out").exists()

    def test_missing_config_is_config_error(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        """A missing config file exits with CONFIG_ERROR."""
        result = runner.invoke(main, ["run", str(tmp_path / "missing.yaml")])
        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "Config file not found" in result.output

    def test_invalid_config_is_config_error(
        self, runner: CliRunner, batch_config: Callable[[str], Path]
    ) -> None:
        """Validation errors exit with CONFIG_ERROR."""
        result = runner.invoke(main, ["run", str(batch_config("quality: 100\n"))])
        assert result.exit_code == ExitCode.CONFIG_ERROR
        assert "quality" in result.output

    def test_missing_encoder(
        self, runner: CliRunner, batch_config: Callable[[str], Path]
    ) -> None:
        """--encoder overrides the config and a missing tool exits 30."""
        result = runner.invoke(
            main,
            ["run", str(batch_config()), "--encoder", "/nonexistent/ffmpeg"],
        )
        assert result.exit_code == ExitCode.TOOL_NOT_AVAILABLE
        assert "Encoder executable not found" in result.output

    def test_no_inputs(
        self,
        runner: CliRunner,
        batch_config: Callable[[str], Path],
        tmp_path: Path,
    ) -> None:
        """An unmatched mask exits TARGET_NOT_FOUND with a JSON error."""
        result = runner.invoke(
            main,
            [
                "--log-file",
                str(tmp_path / "vbt.log"),
                "run",
                str(batch_config('input_mask: "*.mkv"\n')),
                "--json",
            ],
        )
        assert result.exit_code == ExitCode.TARGET_NOT_FOUND
        data = json.loads(result.output)
        assert data["error"]["code"] == "TARGET_NOT_FOUND"

    def test_output_collision_exits_invalid_argument(
        self,
        runner: CliRunner,
        batch_config: Callable[[str], Path],
        input_dir: Path,
        tmp_path: Path,
    ) -> None:
        """Inputs that would share an output path exit INVALID_ARGUMENT."""
        (input_dir / "a.mov").write_bytes(b"video")

        result = runner.invoke(
            main,
            [
                "--log-file",
                str(tmp_path / "vbt.log"),
                "run",
                str(batch_config('input_mask: "*"\n')),
                "--json",
            ],
        )

        assert result.exit_code == ExitCode.INVALID_ARGUMENT
        data = json.loads(result.output)
        assert data["error"]["code"] == "INVALID_ARGUMENT"
        assert "a.mp4" in data["error"]["message"]
        assert not (input_dir / "out").exists()

    def test_workdir_override(
        self,
        runner: CliRunner,
        write_config: Callable[[str], Path],
        fake_ffmpeg: Path,
        input_dir: Path,
    ) -> None:
        """--workdir replaces the config's working directory."""
        config = write_config(f"encoder_path: {fake_ffmpeg}\n")
        result = runner.invoke(
            main, ["run", str(config), "--workdir", str(input_dir), "--dry-run"]
        )
        assert result.exit_code == 0, result.output
        assert "Total:     3" in result.output


class TestPlanCommand:
    """Tests for vbt plan."""

    def test_text_plan(
        self, runner: CliRunner, batch_config: Callable[[str], Path]
    ) -> None:
        """The plan shows profile, filters and a command template."""
        config = batch_config(
            "scale: {enabled: true, expr: 'scale=1280:-1'}\n"
            "denoise: true\n"
            "video_codec: h264_nvenc\n"
            "quality: 22\n"
        )
        result = runner.invoke(main, ["plan", str(config)])

        assert result.exit_code == 0, result.output
        assert "Filter profile: medium" in result.output
        assert "scale=1280:-1,hqdn3d=3.0:2.0:4.0:4.0" in result.output
        assert "-cq 22" in result.output

    def test_json_plan(
        self,
        runner: CliRunner,
        batch_config: Callable[[str], Path],
        tmp_path: Path,
    ) -> None:
        """--json includes the plan and every input/output pair."""
        result = runner.invoke(
            main,
            ["--log-file", str(tmp_path / "vbt.log"), "plan", str(batch_config()), "--json"],
        )

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["plan"]["profile"] == "medium"
        assert data["plan"]["filters"] is None
        assert [Path(i["input"]).name for i in data["inputs"]] == [
            "a.mp4",
            "b.mp4",
            "c.mp4",
        ]
        assert not (tmp_path / "work" / "out").exists()
