"""Human-readable formatting for byte counts and durations."""

_BYTE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def format_bytes(num_bytes: int) -> str:
    """Format a byte count with binary-prefix units.

    Bytes are shown as an integer, larger units with one decimal place.
    TB is the largest unit used.
    """
    size = float(num_bytes)
    unit_index = 0
    while size >= 1024.0 and unit_index < len(_BYTE_UNITS) - 1:
        size /= 1024.0
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {_BYTE_UNITS[0]}"
    return f"{size:.1f} {_BYTE_UNITS[unit_index]}"


def format_uptime(seconds: int) -> str:
    """Format a duration as "Xd Yh Zm", "Yh Zm" or "Zm".

    Only leading zero-valued units are dropped: "1d 0h 5m" keeps its hours.
    """
    seconds = int(seconds)
    days = seconds // 86400
    hours = (seconds % 86400) // 3600
    minutes = (seconds % 3600) // 60

    if days > 0:
        return f"{days}d {hours}h {minutes}m"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
