"""Rich renderables for a SystemInfo snapshot."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from hostscope.collectors.cpu import CpuInfo
from hostscope.collectors.system_info import SystemInfo
from hostscope.tui.logo import get_logo

LABEL_STYLE = "bold cyan"
ITEM_STYLE = "bold yellow"
HELP_TEXT = "Press 'q' or 'Esc' to quit"

_MIB = 1024 * 1024


def cpu_label(cpu: CpuInfo) -> str:
    """Short CPU description: first four words of the model, cores, GHz."""
    model = " ".join(cpu.model.split()[:4])
    return f"{model} ({cpu.cores} cores) @ {cpu.frequency_mhz / 1000:.2f}GHz"


def memory_label(info: SystemInfo) -> str:
    return (
        f"{info.memory_used // _MIB}MiB / {info.memory_total // _MIB}MiB "
        f"({info.memory_percent}%)"
    )


def build_info_text(info: SystemInfo) -> Text:
    """Lay out every field of the snapshot as styled lines."""
    text = Text()

    def field(label: str, value: str, style: str = LABEL_STYLE) -> None:
        text.append(label, style=style)
        text.append(f"{value}\n")

    field("  OS: ", f"{info.os_name} {info.os_version}, {info.os_arch}")
    field("  Kernel: ", info.kernel_version)
    field("  Host: ", info.hostname)
    field("  User: ", info.username)
    field("  Uptime: ", info.uptime)
    text.append("\n")

    if info.cpus:
        text.append(" 🔥 CPUs\n", style=LABEL_STYLE)
    for i, cpu in enumerate(info.cpus, start=1):
        field(f"  - CPU {i}: ", cpu_label(cpu), style=ITEM_STYLE)

    text.append(" 🎮 GPUs\n", style=LABEL_STYLE)
    for i, gpu in enumerate(info.gpus, start=1):
        field(f"  - GPU {i}: ", gpu.name, style=ITEM_STYLE)
    text.append("\n")

    field(" 🌐 Local IP: ", info.local_ip)
    field(" 🐚 Shell: ", info.shell)
    field(" 📟 Terminal: ", info.terminal)
    field(" 💾 Memory: ", memory_label(info))
    text.rstrip()
    return text


def build_info_panel(info: SystemInfo) -> Panel:
    return Panel(
        build_info_text(info),
        title=" 🖥️  Environments ",
        title_align="center",
        border_style=LABEL_STYLE,
    )


def print_plain(info: SystemInfo, console: Console | None = None) -> None:
    """Print logo and facts side by side, once."""
    console = console or Console()
    grid = Table.grid(padding=(0, 2), expand=True)
    grid.add_column(ratio=35)
    grid.add_column(ratio=65)
    grid.add_row(Text(get_logo()), build_info_panel(info))
    console.print(grid)
