"""
Network Utilities

Shared helpers for address parsing, value clamping and routing-table lines.
Extracted here so the probes, the config model and the tests agree on the
exact same rules.
"""

import socket
from typing import Iterable, Optional

from monitor.constants import (
    MAX_INTERFACE_NAME_LENGTH,
    MAX_PORT,
    MIN_PORT,
    RTF_GATEWAY,
    RTF_UP,
)


def is_ipv4_literal(host: Optional[str]) -> bool:
    """
    Check that host is a strict dotted-decimal IPv4 address.

    No DNS resolution is attempted. Uses inet_pton, which rejects
    shorthand forms like "127.1" that inet_aton would accept.

    Args:
        host: Candidate address string

    Returns:
        True if host parses as IPv4, False otherwise

    Example:
        is_ipv4_literal("8.8.8.8")     -> True
        is_ipv4_literal("dns.google")  -> False
    """
    if not host or not isinstance(host, str):
        return False
    try:
        socket.inet_pton(socket.AF_INET, host)
    except (OSError, ValueError):
        return False
    return True


def positive_or_default(value, default: int) -> int:
    """
    Return value if it is a strictly positive integer, else default.

    Example:
        positive_or_default(0, 1000)   -> 1000
        positive_or_default(250, 1000) -> 250
    """
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def port_or_default(value, default: int) -> int:
    """Return value if it is a usable TCP port (1-65535), else default"""
    port = positive_or_default(value, default)
    return port if MIN_PORT <= port <= MAX_PORT else default


def sanitize_interface_name(name: Optional[str]) -> str:
    """
    Make an interface name safe for the kernel name buffer.

    Strips NUL characters and surrounding whitespace, then truncates to
    IFNAMSIZ - 1 characters.

    Returns:
        Cleaned name (may be empty)
    """
    if not name:
        return ""
    cleaned = str(name).replace("\x00", "").strip()
    return cleaned[:MAX_INTERFACE_NAME_LENGTH]


def parse_route_line(line: str) -> Optional[tuple[str, int, int, int]]:
    """
    Parse one record of /proc/net/route.

    Format: whitespace-separated fields
        Iface Destination Gateway Flags RefCnt Use Metric Mask ...
    with Destination/Gateway/Flags in hexadecimal. Addresses are returned as
    the raw field value (host byte order), not byte-swapped.

    Args:
        line: Raw text line

    Returns:
        (interface, destination, gateway, flags) or None for the header
        line and anything malformed
    """
    fields = line.split()
    if len(fields) < 4:
        return None
    try:
        destination = int(fields[1], 16)
        gateway = int(fields[2], 16)
        flags = int(fields[3], 16)
    except ValueError:
        return None
    return fields[0], destination, gateway, flags


def is_default_route(destination: int, gateway: int, flags: int) -> bool:
    """Default route = destination 0, route up, via a non-zero gateway"""
    return (
        destination == 0
        and gateway != 0
        and bool(flags & RTF_UP)
        and bool(flags & RTF_GATEWAY)
    )


def find_default_interface(lines: Iterable[str]) -> Optional[str]:
    """
    Scan routing-table lines for the first default route.

    Returns:
        Interface name of the first qualifying record, or None
    """
    for line in lines:
        record = parse_route_line(line)
        if record is None:
            continue
        iface, destination, gateway, flags = record
        if is_default_route(destination, gateway, flags):
            return iface
    return None
