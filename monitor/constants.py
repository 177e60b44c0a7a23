"""
Monitor Constants

Enums and protocol-level constants for the connectivity monitor.
Tunable values (timeouts, default hosts, paths) live in config/settings.py;
this file only holds the type system and numbers fixed by the kernel ABI.
"""

from enum import Enum

# =============================================================================
# LIMITS
# =============================================================================

# Capacity of the WAN candidate list
MAX_WAN_SERVERS = 4

# Linux interface name buffer, including the trailing NUL
IFNAMSIZ = 16
MAX_INTERFACE_NAME_LENGTH = IFNAMSIZ - 1

MIN_PORT = 1
MAX_PORT = 65535


# =============================================================================
# KERNEL FLAGS
# =============================================================================
# Values from <linux/route.h> and <net/if.h>

# Route flags (4th column of /proc/net/route)
RTF_UP = 0x0001  # Route is usable
RTF_GATEWAY = 0x0002  # Destination is reached through a gateway

# Interface flags returned by SIOCGIFFLAGS
IFF_UP = 0x0001  # Administratively up
IFF_RUNNING = 0x0040  # Link detected, resources allocated

# ioctl request: get interface flags
SIOCGIFFLAGS = 0x8913


# =============================================================================
# ENUMS
# =============================================================================


class CheckSource(Enum):
    """Which sub-check produced an error"""

    ROUTE = "route"  # Default-route auto-detection
    WAN = "wan"  # TCP reachability probe
    LAN = "lan"  # Interface flags query


class ErrorKind(Enum):
    """
    What went wrong inside a sub-check.

    Paired with CheckSource in ProbeError so a caller can tell a refused
    connection from an unknown interface without decoding errno values.
    """

    SOCKET = "socket"  # Could not create the socket
    INVALID_ADDRESS = "invalid_address"  # Host is not a dotted IPv4 literal
    CONNECT_REFUSED = "connect_refused"  # RST received
    CONNECT_TIMEOUT = "connect_timeout"  # No answer before the deadline
    UNREACHABLE = "unreachable"  # No route to network/host
    CONNECT_FAILED = "connect_failed"  # Any other connect() error
    INTERFACE_QUERY = "interface_query"  # SIOCGIFFLAGS failed
    ROUTE_TABLE_UNREADABLE = "route_table_unreadable"  # Could not open the table


class SchedulerState(Enum):
    """
    Lifecycle of the background check loop.

    Lifecycle: RUNNING -> STOPPED (terminal)
    """

    RUNNING = "running"
    STOPPED = "stopped"
