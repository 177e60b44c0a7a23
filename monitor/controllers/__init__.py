"""
Controllers Package

High-level components of the connectivity monitor.
"""

from monitor.controllers.network_monitor import MonitorInitError, NetworkMonitor
from monitor.controllers.scheduler import Scheduler

# Public API (sorted alphabetically)
__all__ = [
    "MonitorInitError",
    "NetworkMonitor",
    "Scheduler",
]
