"""Full-screen view of a SystemInfo snapshot using Textual."""

from textual.app import App, ComposeResult
from textual.containers import Horizontal
from textual.widgets import Static

from hostscope.cli.render import HELP_TEXT, build_info_panel
from hostscope.collectors.system_info import SystemInfo
from hostscope.tui.logo import get_logo


class SystemInfoApp(App):
    """Static, non-interactive display of one snapshot."""

    CSS = """
    #body {
        margin: 2;
        height: 1fr;
    }

    #logo {
        width: 35%;
    }

    #info {
        width: 65%;
    }

    #help {
        dock: bottom;
        height: 1;
        width: 100%;
        content-align: center middle;
        color: $text-muted;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("escape", "quit", "Quit"),
    ]

    def __init__(self, info: SystemInfo, **kwargs):
        super().__init__(**kwargs)
        self.info = info

    def compose(self) -> ComposeResult:
        with Horizontal(id="body"):
            yield Static(get_logo(), id="logo")
            yield Static(build_info_panel(self.info), id="info")
        yield Static(HELP_TEXT, id="help")


def launch_tui(info: SystemInfo) -> None:
    SystemInfoApp(info).run()
