"""
Probe Interfaces - Abstract Network Check Layer

Contracts that any WAN or LAN probe implementation must follow.
NetworkMonitor and the scheduler depend on these abstractions, so the real
socket/ioctl probes can be swapped for mocks in tests or on platforms
without SIOCGIFFLAGS.

Probes never raise for network failures: a down host or an unknown
interface is a normal result carrying a ProbeError. Exceptions are reserved
for programming/setup errors.
"""

from abc import ABC, abstractmethod
from typing import Sequence

from monitor.models.monitor_config import WanServer
from monitor.models.monitor_state import LanProbeResult, WanProbeResult


class WanProbeInterface(ABC):
    """Internet reachability check over an ordered list of candidates"""

    @abstractmethod
    def probe(self, servers: Sequence[WanServer], timeout_ms: int) -> WanProbeResult:
        """
        Try the servers in order until one accepts a TCP connection.

        Args:
            servers: Ordered candidates (order = try order = tie-break)
            timeout_ms: Connect deadline for each attempt

        Returns:
            WanProbeResult with reachable=True on the first success, or
            reachable=False and the error of the most recent failed attempt

        Example:
            result = probe.probe([WanServer("8.8.8.8", 53)], timeout_ms=1000)
            if result.reachable:
                print(f"Internet via {result.server}")
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this probe can run on the current platform.

        Returns:
            True if probe() is expected to work
        """


class LanProbeInterface(ABC):
    """Local link status check for one named interface"""

    @abstractmethod
    def probe(self, interface_name: str) -> LanProbeResult:
        """
        Read the administrative and link flags of an interface.

        Generates no network traffic.

        Args:
            interface_name: Kernel interface name ("eth0", "wlan0", "lo")

        Returns:
            LanProbeResult with up=True only if the interface is both
            administratively up and running. error is set only when the
            query itself failed (e.g. unknown interface).
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if this probe can run on the current platform.

        Returns:
            True if probe() is expected to work
        """


class MonitorError(Exception):
    """
    Base exception for the connectivity monitor.

    Catch this to handle any monitor-specific failure.
    """


class ProbeSetupError(MonitorError):
    """A probe implementation cannot be created on this platform"""
