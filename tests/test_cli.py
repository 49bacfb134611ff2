"""Tests for CLI commands."""

import json
import tempfile
from pathlib import Path

import pytest
from click.testing import CliRunner

from tradejournal.cli import cli
from tradejournal.cli.main import LAZY_SUBCOMMANDS


@pytest.fixture
def workspace():
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        (root / "trades.json").write_text(json.dumps([
            {"date": "2024-03-01", "pnl": 120},
            {"date": "2024-03-04", "pnl": 80},
            {"date": "2024-03-05", "pnl": -30},
            {"date": "2024-03-06", "pnl": 45},
            {"date": "2024-03-07", "pnl": 60},
            {"date": "2024-03-08", "pnl": 15},
            {"date": "2024-03-11", "pnl": 0},
            {"date": "2024-03-12", "pnl": 90},
            {"date": "2024-03-14", "pnl": -200},
        ]))
        (root / "payouts.csv").write_text("date,amount\n2024-02-20,500\n2024-03-05,750\n")
        (root / "checklist.json").write_text(json.dumps({"Bias set": True, "Levels": True, "News": False}))
        (root / "config.toml").write_text("[readiness]\nmax_trades = 3\n")
        yield root


def run(workspace: Path, *args: str):
    runner = CliRunner()
    return runner.invoke(
        cli,
        ["--config", str(workspace / "config.toml"), "--today", "2024-03-14", *args],
    )


class TestCommandRegistry:
    """All lazy commands resolve to click commands."""

    def test_help_lists_commands(self):
        result = CliRunner().invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in LAZY_SUBCOMMANDS:
            assert name in result.output

    def test_each_command_loads(self):
        for name in LAZY_SUBCOMMANDS:
            result = CliRunner().invoke(cli, [name, "--help"])
            assert result.exit_code == 0, result.output


class TestStatsCommands:
    """summary, streak, eligibility and payouts."""

    def test_summary(self, workspace: Path):
        result = run(workspace, "summary", str(workspace / "trades.json"))

        assert result.exit_code == 0, result.output
        assert "2024-03-14" in result.output
        assert "+180.00" in result.output

    def test_summary_last_days(self, workspace: Path):
        result = run(workspace, "summary", str(workspace / "trades.json"), "--days", "2")

        assert result.exit_code == 0, result.output
        assert "2024-03-14" in result.output
        assert "2024-03-12" in result.output
        assert "2024-03-11" not in result.output
        assert "(1/2 winning days)" in result.output

    @pytest.mark.parametrize("days", ["0", "-3"])
    def test_summary_rejects_non_positive_days(self, workspace: Path, days: str):
        result = run(workspace, "summary", str(workspace / "trades.json"), "--days", days)

        assert result.exit_code == 2
        assert "--days" in result.output

    def test_streak_open_today(self, workspace: Path):
        result = run(workspace, "streak", str(workspace / "trades.json"))

        assert result.exit_code == 0, result.output
        assert "4 Days Streak" in result.output

    def test_streak_finalized(self, workspace: Path):
        result = run(workspace, "streak", str(workspace / "trades.json"), "--finalized")

        assert result.exit_code == 0, result.output
        assert "0 Days Streak" in result.output

    def test_eligibility_cycle(self, workspace: Path):
        result = run(
            workspace,
            "eligibility",
            str(workspace / "trades.json"),
            "--payouts",
            str(workspace / "payouts.csv"),
        )

        assert result.exit_code == 0, result.output
        assert "4 / 5" in result.output
        assert "Keep going" in result.output

    def test_eligibility_rolling(self, workspace: Path):
        result = run(
            workspace,
            "eligibility",
            str(workspace / "trades.json"),
            "--mode",
            "rolling",
            "--required",
            "5",
        )

        assert result.exit_code == 0, result.output
        assert "6 / 5" in result.output
        assert "Eligible" in result.output

    def test_payouts(self, workspace: Path):
        result = run(workspace, "payouts", str(workspace / "payouts.csv"), "--gross-pnl", "2000")

        assert result.exit_code == 0, result.output
        assert "1,250.00" in result.output
        assert "+750.00" in result.output

    def test_bad_input_file(self, workspace: Path):
        bad = workspace / "trades.txt"
        bad.write_text("nope")

        result = run(workspace, "summary", str(bad))

        assert result.exit_code == 1
        assert "Unsupported" in result.output


class TestPlanCommands:
    """readiness and adherence."""

    def test_readiness(self, workspace: Path):
        result = run(workspace, "readiness", str(workspace / "checklist.json"))

        assert result.exit_code == 0, result.output
        assert "67%" in result.output
        assert "[x] Bias set" in result.output

    def test_adherence_uses_config_ceiling(self, workspace: Path):
        result = run(workspace, "adherence", str(workspace / "checklist.json"), "--trades", "5")

        # round(2/3 * 70) = 47, plus 30 - 2 * 10
        assert result.exit_code == 0, result.output
        assert "57%" in result.output

    def test_adherence_option_overrides_config(self, workspace: Path):
        result = run(
            workspace, "adherence", str(workspace / "checklist.json"), "--trades", "5", "--max-trades", "5"
        )

        assert result.exit_code == 0, result.output
        assert "77%" in result.output


class TestConfigErrors:
    """Bad configuration is reported, not raised."""

    def test_invalid_config(self, workspace: Path):
        (workspace / "config.toml").write_text("[eligibility]\nwindow_days = 0\n")

        result = run(workspace, "summary", str(workspace / "trades.json"))

        assert result.exit_code == 1
        assert "Configuration Error" in result.output
