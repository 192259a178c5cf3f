"""Primary local IPv4 address lookup."""

import ipaddress
import logging
import socket

logger = logging.getLogger(__name__)

UNKNOWN_IP = "Unknown IP"

# Only used to pick a route; connecting a UDP socket sends nothing.
_ROUTE_PROBE_ADDR = ("192.0.2.1", 9)


def detect_local_ip() -> str:
    """Return the host's primary non-loopback IPv4 address."""
    address = _route_source_address() or _first_interface_address()
    return address or UNKNOWN_IP


def _is_usable(address: str) -> bool:
    try:
        ip = ipaddress.IPv4Address(address)
    except ValueError:
        return False
    return not (ip.is_loopback or ip.is_link_local or ip.is_unspecified)


def _route_source_address() -> str | None:
    """Ask the OS which local address it would route outbound traffic from."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(_ROUTE_PROBE_ADDR)
            address = sock.getsockname()[0]
    except OSError as e:
        logger.debug(f"Route lookup failed: {e}")
        return None
    return address if _is_usable(address) else None


def _first_interface_address() -> str | None:
    """Scan network interfaces for the first usable IPv4 address."""
    try:
        import psutil

        addrs = psutil.net_if_addrs()
        stats = psutil.net_if_stats()
    except Exception as e:
        logger.debug(f"Interface enumeration failed: {e}")
        return None

    for iface, iface_addrs in addrs.items():
        if iface in stats and not stats[iface].isup:
            continue
        for addr in iface_addrs:
            if addr.family == socket.AF_INET and _is_usable(addr.address):
                return addr.address
    return None
