"""
Monitor Models Package

Data structures shared by probes, scheduler and facade.
"""

from monitor.models.monitor_config import (
    MonitorConfig,
    WanServer,
    default_wan_servers,
    make_wan_server,
)
from monitor.models.monitor_state import LanProbeResult, MonitorState, WanProbeResult
from monitor.models.probe_error import ProbeError, classify_connect_error

# Public API (sorted alphabetically)
__all__ = [
    "LanProbeResult",
    "MonitorConfig",
    "MonitorState",
    "ProbeError",
    "WanProbeResult",
    "WanServer",
    "classify_connect_error",
    "default_wan_servers",
    "make_wan_server",
]
