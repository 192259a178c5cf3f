"""Tests for the full-screen view."""

from unittest.mock import patch

from hostscope.collectors.system_info import SystemInfo
from hostscope.tui.app import SystemInfoApp, launch_tui
from hostscope.tui.logo import get_logo


class TestLogo:
    def test_logo_is_multiline(self):
        logo = get_logo()
        assert len(logo.splitlines()) > 5
        assert not logo.startswith("\n")


class TestSystemInfoApp:
    def test_holds_snapshot(self):
        info = SystemInfo(hostname="devbox")
        app = SystemInfoApp(info)
        assert app.info is info

    def test_quit_bindings(self):
        keys = {binding[0] for binding in SystemInfoApp.BINDINGS}
        assert keys == {"q", "escape"}

    @patch.object(SystemInfoApp, "run")
    def test_launch_runs_app(self, mock_run):
        launch_tui(SystemInfo())
        mock_run.assert_called_once()
