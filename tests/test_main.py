# tests/test_main.py
"""Tests for the command-line entry point."""
import json
from datetime import date
from pathlib import Path

import pytest

from main import build_report, load_config, main, parse_args
from src.config.settings import Settings


def write_journal(data_dir: Path) -> None:
    """Write two days of trades."""
    (data_dir / "2026-01-15.json").write_text(json.dumps([
        {"pnl": 100, "emotional_state": "CALM", "strategy": "breakout", "notes": "ok"},
        {"pnl": -50, "emotional_state": ["FOMO"]},
    ]))
    (data_dir / "2026-01-16.json").write_text(json.dumps([
        {"pnl": "200", "emotional_state": {"primary_emotion": "discipline"}},
    ]))


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        """A missing config file should fall back to default settings."""
        settings = load_config(tmp_path / "missing.yaml")

        assert settings == Settings()

    def test_loads_yaml(self, tmp_path: Path) -> None:
        """An existing config file should be loaded."""
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("system:\n  name: Custom\n")

        settings = load_config(config_file)

        assert settings.system.name == "Custom"

    def test_path_from_env(self, tmp_path: Path, monkeypatch) -> None:
        """VRATING_CONFIG should be used when no path is given."""
        config_file = tmp_path / "env.yaml"
        config_file.write_text("system:\n  name: FromEnv\n")
        monkeypatch.setenv("VRATING_CONFIG", str(config_file))

        settings = load_config()

        assert settings.system.name == "FromEnv"

    def test_invalid_config_exits(self, tmp_path: Path) -> None:
        """An invalid config file should exit with status 1."""
        config_file = tmp_path / "settings.yaml"
        config_file.write_text("vrating:\n  profitability_weight: 0.9\n")

        with pytest.raises(SystemExit) as exc_info:
            load_config(config_file)

        assert exc_info.value.code == 1


class TestParseArgs:
    """Tests for parse_args."""

    def test_dates_parsed(self) -> None:
        """--start and --end should parse as dates."""
        args = parse_args(["--start", "2026-01-15", "--end", "2026-01-16"])

        assert args.start == date(2026, 1, 15)
        assert args.end == date(2026, 1, 16)
        assert args.precision == 2


class TestMain:
    """Tests for main."""

    async def test_build_report(self, tmp_path: Path) -> None:
        """build_report should rate the trades stored for the period."""
        write_journal(tmp_path)

        report = await build_report(
            Settings(), date(2026, 1, 15), date(2026, 1, 16), data_dir=str(tmp_path)
        )

        assert report.trade_count == 3
        assert report.stats.total_pnl == 250.0

    def test_main_prints_report(self, tmp_path: Path, capsys) -> None:
        """main should print the JSON report and return 0."""
        write_journal(tmp_path)

        exit_code = main([
            "--config", str(tmp_path / "missing.yaml"),
            "--data-dir", str(tmp_path),
            "--start", "2026-01-15",
            "--end", "2026-01-16",
        ])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["tradeCount"] == 3
        assert output["period"] == {"startDate": "2026-01-15", "endDate": "2026-01-16"}
        assert 0.0 <= output["vrating"]["overallScore"] <= 10.0

    def test_main_rejects_reversed_period(self, tmp_path: Path) -> None:
        """A start date after the end date should return 1."""
        exit_code = main([
            "--config", str(tmp_path / "missing.yaml"),
            "--start", "2026-01-16",
            "--end", "2026-01-15",
        ])

        assert exit_code == 1
