"""Tests for the hostscope command."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from hostscope.cli.main import cli
from hostscope.collectors.cpu import CpuInfo
from hostscope.collectors.system_info import CollectionError, SystemInfo
from hostscope.config import HostscopeConfig

SNAPSHOT = SystemInfo(
    os_name="Ubuntu",
    os_version="24.04",
    os_arch="x86_64",
    kernel_version="6.8.0-45-generic",
    hostname="devbox",
    username="ada",
    uptime="2h 5m",
    cpus=(CpuInfo("AMD Ryzen 7 5800X 8-Core Processor", 16, 3800),),
    memory_total=16 * 1024**3,
    memory_used=4 * 1024**3,
    local_ip="192.168.0.10",
    shell="zsh",
    terminal="kitty",
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def quiet_setup():
    with patch("hostscope.cli.main._setup_logging") as mock_logging, patch(
        "hostscope.cli.main.load_config", return_value=HostscopeConfig()
    ):
        yield mock_logging


class TestCli:
    @patch("hostscope.cli.main.SystemInfoCollector")
    def test_json(self, mock_collector, runner):
        mock_collector.return_value.collect.return_value = SNAPSHOT
        result = runner.invoke(cli, ["--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["hostname"] == "devbox"
        assert data["gpus"] == [{"name": "Unknown GPU", "vendor": "Unknown"}]

    @patch("hostscope.cli.main.SystemInfoCollector")
    def test_plain(self, mock_collector, runner):
        mock_collector.return_value.collect.return_value = SNAPSHOT
        result = runner.invoke(cli, ["--plain"])
        assert result.exit_code == 0
        assert "Environments" in result.output
        assert "devbox" in result.output

    @patch("hostscope.tui.app.launch_tui")
    @patch("hostscope.cli.main.SystemInfoCollector")
    def test_default_launches_tui(self, mock_collector, mock_launch, runner):
        mock_collector.return_value.collect.return_value = SNAPSHOT
        result = runner.invoke(cli, [])
        assert result.exit_code == 0
        mock_launch.assert_called_once_with(SNAPSHOT)

    @patch("hostscope.cli.main.SystemInfoCollector")
    def test_timeout_option_overrides_config(self, mock_collector, runner):
        mock_collector.return_value.collect.return_value = SNAPSHOT
        runner.invoke(cli, ["--json", "--timeout", "0.5"])
        mock_collector.assert_called_once_with(command_timeout=0.5)

    @patch("hostscope.cli.main.SystemInfoCollector")
    def test_config_timeout(self, mock_collector, runner):
        mock_collector.return_value.collect.return_value = SNAPSHOT
        runner.invoke(cli, ["--json"])
        mock_collector.assert_called_once_with(command_timeout=2.0)

    @patch("hostscope.cli.main.SystemInfoCollector")
    def test_collection_error_exits(self, mock_collector, runner):
        mock_collector.return_value.collect.side_effect = CollectionError("no /proc")
        result = runner.invoke(cli, ["--json"])
        assert result.exit_code == 1
        assert "Could not collect system information" in result.output

    @patch("hostscope.cli.main.terminate_running")
    @patch("hostscope.cli.main.SystemInfoCollector")
    def test_interrupt_terminates_children(self, mock_collector, mock_terminate, runner):
        mock_collector.return_value.collect.side_effect = KeyboardInterrupt
        result = runner.invoke(cli, ["--json"])
        assert result.exit_code != 0
        mock_terminate.assert_called_once()

    def test_config_error_exits(self, runner):
        from hostscope.config import ConfigError

        with patch("hostscope.cli.main.load_config", side_effect=ConfigError("bad config")):
            result = runner.invoke(cli, ["--json"])
        assert result.exit_code == 1
        assert "bad config" in result.output

    @patch("hostscope.cli.main.SystemInfoCollector")
    def test_verbose_logs_to_console_outside_tui(self, mock_collector, runner, quiet_setup):
        mock_collector.return_value.collect.return_value = SNAPSHOT
        runner.invoke(cli, ["--plain", "--verbose"])
        _, verbose = quiet_setup.call_args.args
        assert verbose is True
        assert quiet_setup.call_args.kwargs["to_console"] is True

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "hostscope" in result.output
