"""
Monitor Interfaces Package

Exposes abstract interfaces that define contracts for probe components.
"""

from monitor.interfaces.probe_interface import (
    LanProbeInterface,
    MonitorError,
    ProbeSetupError,
    WanProbeInterface,
)
from monitor.interfaces.route_table_interface import (
    RouteTableError,
    RouteTableInterface,
)

# Public API (sorted alphabetically)
__all__ = [
    "LanProbeInterface",
    "MonitorError",
    "ProbeSetupError",
    "RouteTableError",
    "RouteTableInterface",
    "WanProbeInterface",
]
