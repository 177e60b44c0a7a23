"""
Monitor Module

Periodic WAN/LAN connectivity monitoring.

A background thread checks internet reachability (TCP handshake with
well-known public servers) and local link state (interface flags) at a
fixed interval. Callers read the latest result without blocking.

Public API:
    - NetworkMonitor: The monitor object (accessors, setters, snapshot)
    - MonitorOptions: Construction overrides, loadable from YAML
    - MonitorFactory: Factory for real or mock probes
    - MonitorError / MonitorInitError: Exception hierarchy
    - ProbeError: Structured error (source, kind, errno)

Usage:
    from monitor import MonitorOptions, NetworkMonitor

    with NetworkMonitor(MonitorOptions(check_interval_sec=2)) as monitor:
        monitor.wait_for_cycles(1, timeout=10)
        print(monitor)
"""

from monitor.config import MonitorOptions, load_options
from monitor.constants import CheckSource, ErrorKind
from monitor.controllers.network_monitor import MonitorInitError, NetworkMonitor
from monitor.factory import MonitorFactory
from monitor.interfaces.probe_interface import MonitorError, ProbeSetupError
from monitor.interfaces.route_table_interface import RouteTableError
from monitor.models.monitor_config import MonitorConfig, WanServer
from monitor.models.monitor_state import MonitorState
from monitor.models.probe_error import ProbeError

__all__ = [
    "CheckSource",
    "ErrorKind",
    "MonitorConfig",
    "MonitorError",
    "MonitorFactory",
    "MonitorInitError",
    "MonitorOptions",
    "MonitorState",
    "NetworkMonitor",
    "ProbeError",
    "ProbeSetupError",
    "RouteTableError",
    "WanServer",
    "load_options",
]
