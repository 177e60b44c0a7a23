"""
Monitor Implementations Package

Concrete probe implementations (real and mock).
"""

from monitor.implementations.ioctl_lan_probe import IoctlLanProbe
from monitor.implementations.mock_lan_probe import MockLanProbe
from monitor.implementations.mock_route_table import MockRouteTable
from monitor.implementations.mock_wan_probe import MockWanProbe
from monitor.implementations.proc_route_table import ProcRouteTable
from monitor.implementations.tcp_wan_probe import TcpWanProbe

# Public API (sorted alphabetically)
__all__ = [
    "IoctlLanProbe",
    "MockLanProbe",
    "MockRouteTable",
    "MockWanProbe",
    "ProcRouteTable",
    "TcpWanProbe",
]
