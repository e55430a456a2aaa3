"""
Tests for the timeaware CLI using Typer's CliRunner.
"""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from timeaware import __version__
from timeaware.cli import app
from timeaware.hook_handler import TIMEAWARE_HOOKS


runner = CliRunner()

SYDNEY_AT = ["--tz", "Australia/Sydney", "--at", "2025-11-20T04:06:25+11:00"]
NY_AT = ["--tz", "America/New_York", "--at", "2025-06-16T10:15:00-04:00"]


class TestRoot:

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.stdout.strip() == __version__

    def test_no_command_shows_panel(self):
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "Business hours" in result.stdout

    def test_help_lists_commands(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("show", "env", "summary", "run", "hooks", "instructions", "config", "zone"):
            assert command in result.stdout


class TestSummary:

    def test_sydney(self):
        result = runner.invoke(app, ["summary", *SYDNEY_AT])
        assert result.exit_code == 0
        assert result.stdout.strip() == "Thursday, November 20, 2025 at 04:06:25 AEDT"

    def test_naive_at_is_utc(self):
        result = runner.invoke(app, ["summary", "--tz", "America/New_York", "--at", "2025-06-16T14:15:00"])
        assert result.stdout.strip() == "Monday, June 16, 2025 at 10:15:00 EDT"

    def test_invalid_at(self):
        result = runner.invoke(app, ["summary", "--at", "yesterday-ish"])
        assert result.exit_code == 1
        assert "Invalid ISO-8601 instant" in result.output

    def test_uses_configured_timezone(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("timezone: America/New_York\n")
        result = runner.invoke(app, ["summary", "--at", "2025-06-16T14:15:00Z"])
        assert result.stdout.strip().endswith("10:15:00 EDT")


class TestShow:

    def test_panel(self):
        result = runner.invoke(app, ["show", *SYDNEY_AT])
        assert result.exit_code == 0
        assert "Week 47 of 2025, Q4" in result.stdout

    def test_json(self):
        result = runner.invoke(app, ["show", "--json", *NY_AT])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["timezone"] == "America/New_York"
        assert data["is_market_hours"] is True
        assert data["is_business_hours"] is True
        assert data["day_of_week_num"] == 1


class TestEnv:

    def test_shell_exports(self):
        result = runner.invoke(app, ["env", *SYDNEY_AT])
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert "export CLAUDE_WEEK_OF_YEAR=47" in lines
        assert "export CLAUDE_DAY_OF_WEEK_NUM=4" in lines
        assert "export CLAUDE_IS_MARKET_HOURS=false" in lines
        assert all(line.startswith("export CLAUDE_") for line in lines)

    def test_json_format(self):
        result = runner.invoke(app, ["env", "--format", "json", *NY_AT])
        data = json.loads(result.stdout)
        assert data["CLAUDE_IS_MARKET_HOURS"] == "true"
        assert data["CLAUDE_TIMEZONE"] == "EDT"

    def test_powershell_format(self):
        result = runner.invoke(app, ["env", "-f", "powershell", *NY_AT])
        assert "$env:CLAUDE_IS_BUSINESS_HOURS = 'true'" in result.stdout.splitlines()

    def test_prefix_option(self):
        result = runner.invoke(app, ["env", "--prefix", "TA", *NY_AT])
        assert "export TA_YEAR=2025" in result.stdout.splitlines()

    def test_prefix_from_config(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("env_prefix: WHEN\n")
        result = runner.invoke(app, ["env", *NY_AT])
        assert "export WHEN_QUARTER=2" in result.stdout.splitlines()

    def test_unknown_format(self):
        result = runner.invoke(app, ["env", "--format", "xml"])
        assert result.exit_code == 1
        assert "Unknown format" in result.output

    def test_invalid_prefix(self):
        result = runner.invoke(app, ["env", "--prefix", "bad-prefix"])
        assert result.exit_code == 1
        assert "Invalid variable prefix" in result.output

    def test_unknown_zone_falls_back_to_utc(self):
        result = runner.invoke(app, ["env", "--format", "json", "--tz", "Mars/Olympus_Mons",
                                     "--at", "2025-06-16T14:15:00Z"])
        assert result.exit_code == 0
        assert '"CLAUDE_TIMEZONE_ID": "UTC"' in result.output


class TestRun:

    def test_claude_missing(self):
        with patch("timeaware.cli.context.shutil.which", return_value=None):
            result = runner.invoke(app, ["run"])
        assert result.exit_code == 1
        assert "not found on PATH" in result.output

    def test_execs_claude_with_env(self):
        with patch("timeaware.cli.context.shutil.which", return_value="/usr/local/bin/claude"), \
             patch("timeaware.cli.context.os.execvpe") as mock_exec:
            result = runner.invoke(app, ["run", "--tz", "UTC", "--", "--model", "sonnet"])

        assert result.exit_code == 0
        path, argv, env = mock_exec.call_args[0]
        assert path == "/usr/local/bin/claude"
        assert argv == ["claude", "--model", "sonnet"]
        assert env["CLAUDE_TIMEZONE_ID"] == "UTC"
        assert env["CLAUDE_IS_WEEKEND"] in ("true", "false")
        assert "PATH" in env or "HOME" in env

    def test_show_context_and_prefix(self):
        with patch("timeaware.cli.context.shutil.which", return_value="/usr/bin/claude"), \
             patch("timeaware.cli.context.os.execvpe") as mock_exec:
            result = runner.invoke(app, ["run", "-s", "--prefix", "TA", "--tz", "UTC"])

        assert result.exit_code == 0
        assert "Business hours" in result.stdout
        _, argv, env = mock_exec.call_args[0]
        assert argv == ["claude"]
        assert "TA_DATE_LOCAL" in env

    def test_invalid_prefix_does_not_exec(self):
        with patch("timeaware.cli.context.shutil.which", return_value="/usr/bin/claude"), \
             patch("timeaware.cli.context.os.execvpe") as mock_exec:
            result = runner.invoke(app, ["run", "--prefix", "9X"])

        assert result.exit_code == 1
        mock_exec.assert_not_called()


class TestHookHandlerCommand:

    def test_session_start(self, tmp_path, monkeypatch):
        env_file = tmp_path / "claude.env"
        monkeypatch.setenv("CLAUDE_ENV_FILE", str(env_file))
        with patch("timeaware.logging_config.setup_hook_logging"):
            result = runner.invoke(
                app, ["hook-handler"], input=json.dumps({"hook_event_name": "SessionStart"}),
            )

        assert result.exit_code == 0
        assert result.stdout.startswith("Temporal Context Loaded: ")
        assert "export CLAUDE_TIME_SUMMARY=" in env_file.read_text()

    def test_unwritable_log_dir_still_succeeds(self, tmp_path, monkeypatch):
        blocker = tmp_path / "file"
        blocker.write_text("")
        monkeypatch.setattr("timeaware.logging_config.DEFAULT_LOG_DIR", blocker / "logs")

        result = runner.invoke(
            app, ["hook-handler"], input=json.dumps({"hook_event_name": "SessionStart"}),
        )

        assert result.exit_code == 0
        assert result.stdout.startswith("Temporal Context Loaded: ")

    def test_hidden_from_help(self):
        result = runner.invoke(app, ["--help"])
        assert "hook-handler" not in result.stdout


class TestHooksCommands:

    def test_install(self, fake_home):
        result = runner.invoke(app, ["hooks", "install"])
        assert result.exit_code == 0
        assert "Installed 1 hook(s) in user settings" in result.output

        data = json.loads((fake_home / ".claude" / "settings.json").read_text())
        for event, command in TIMEAWARE_HOOKS:
            assert data["hooks"][event][0]["hooks"][0]["command"] == command

    def test_install_idempotent(self, fake_home):
        runner.invoke(app, ["hooks", "install"])
        result = runner.invoke(app, ["hooks", "install"])
        assert result.exit_code == 0
        assert "already installed" in result.output

    def test_install_project(self, fake_home, tmp_path, monkeypatch):
        project = tmp_path / "project"
        project.mkdir()
        monkeypatch.chdir(project)

        result = runner.invoke(app, ["hooks", "install", "--project"])

        assert result.exit_code == 0
        assert (project / ".claude" / "settings.json").exists()
        assert not (fake_home / ".claude" / "settings.json").exists()

    def test_install_invalid_json(self, fake_home):
        settings = fake_home / ".claude" / "settings.json"
        settings.parent.mkdir()
        settings.write_text("{oops")
        result = runner.invoke(app, ["hooks", "install"])
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output

    def test_uninstall(self, fake_home):
        runner.invoke(app, ["hooks", "install"])
        result = runner.invoke(app, ["hooks", "uninstall"])
        assert result.exit_code == 0
        assert "Removed 1 hook(s)" in result.output

        result = runner.invoke(app, ["hooks", "uninstall"])
        assert "No timeaware hooks found" in result.output

    def test_status(self, fake_home, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        runner.invoke(app, ["hooks", "install"])
        result = runner.invoke(app, ["hooks", "status"])
        assert result.exit_code == 0
        assert "SessionStart" in result.output
        assert "no settings file" in result.output


class TestInstructionsCommands:

    def test_install_and_repeat(self, tmp_path):
        target = tmp_path / "custom_instructions.md"

        result = runner.invoke(app, ["instructions", "install", "--path", str(target)])
        assert result.exit_code == 0
        assert "Created" in result.output
        assert "# Temporal Context Awareness" in target.read_text()

        result = runner.invoke(app, ["instructions", "install", "--path", str(target)])
        assert "already present" in result.output

    def test_install_default_path(self, fake_home):
        result = runner.invoke(app, ["instructions", "install"])
        assert result.exit_code == 0
        assert (fake_home / ".claude" / "prompts" / "custom_instructions.md").exists()

    def test_uninstall(self, tmp_path):
        target = tmp_path / "custom_instructions.md"
        target.write_text("Keep.\n")
        runner.invoke(app, ["instructions", "install", "--path", str(target)])

        result = runner.invoke(app, ["instructions", "uninstall", "--path", str(target)])

        assert result.exit_code == 0
        assert target.read_text() == "Keep.\n"

    def test_status(self, tmp_path):
        target = tmp_path / "custom_instructions.md"

        result = runner.invoke(app, ["instructions", "status", "--path", str(target)])
        assert result.exit_code == 0
        assert "Not installed" in result.output

        runner.invoke(app, ["instructions", "install", "--path", str(target)])
        result = runner.invoke(app, ["instructions", "status", "--path", str(target)])
        assert "Installed" in result.output
        assert "Not installed" not in result.output

    def test_show_with_prefix(self):
        result = runner.invoke(app, ["instructions", "show", "--prefix", "TA"])
        assert result.exit_code == 0
        assert "`$TA_IS_WEEKEND`" in result.stdout

    def test_invalid_prefix(self, tmp_path):
        result = runner.invoke(app, ["instructions", "install", "--path", str(tmp_path / "x.md"),
                                     "--prefix", "no good"])
        assert result.exit_code == 1


class TestConfigCommands:

    def test_init(self, isolated_config):
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 0
        assert isolated_config.read_text().startswith("# timeaware configuration")

    def test_init_refuses_overwrite(self, isolated_config):
        runner.invoke(app, ["config", "init"])
        result = runner.invoke(app, ["config", "init"])
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_init_force(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("timezone: UTC\n")
        result = runner.invoke(app, ["config", "init", "--force"])
        assert result.exit_code == 0
        assert "timezone: UTC" not in isolated_config.read_text().splitlines()

    def test_path(self, isolated_config):
        result = runner.invoke(app, ["config", "path"])
        assert result.stdout.strip() == str(isolated_config)

    def test_show_defaults(self):
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "No config file found" in result.output
        assert "env_prefix: CLAUDE" in result.output
        assert "business_hours: 09:00-17:00" in result.output

    def test_show_configured(self, isolated_config):
        isolated_config.parent.mkdir(parents=True)
        isolated_config.write_text("timezone: Europe/Paris\nbusiness_hours:\n  start: 8\n  end: 16\n")
        result = runner.invoke(app, ["config", "show"])
        assert "timezone: Europe/Paris" in result.output
        assert "business_hours: 08:00-16:00" in result.output


class TestZoneCommands:

    def test_check_known(self):
        result = runner.invoke(app, ["zone", "check", "Europe/Paris"])
        assert result.exit_code == 0
        assert "Europe/Paris" in result.output
        assert "US Eastern" not in result.output

    def test_check_eastern(self):
        result = runner.invoke(app, ["zone", "check", "America/New_York"])
        assert result.exit_code == 0
        assert "market-hours detection enabled" in result.output

    @pytest.mark.parametrize("name", ["Mars/Olympus_Mons", "../etc"])
    def test_check_unknown(self, name):
        result = runner.invoke(app, ["zone", "check", name])
        assert result.exit_code == 1
        assert "Unknown timezone" in result.output
