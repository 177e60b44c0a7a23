"""
Probe Factory

Factory pattern for creating probe implementations.
Automatically selects real or mock implementations based on availability.

Why use a factory?
1. Single place to decide real vs mock probes
2. Easy to force mock mode for testing
3. NetworkMonitor doesn't need to know about implementation details
"""

import logging
from typing import Literal

from config.settings import ROUTE_TABLE_PATH
from monitor.implementations.ioctl_lan_probe import IoctlLanProbe
from monitor.implementations.mock_lan_probe import MockLanProbe
from monitor.implementations.mock_route_table import MockRouteTable
from monitor.implementations.mock_wan_probe import MockWanProbe
from monitor.implementations.proc_route_table import ProcRouteTable
from monitor.implementations.tcp_wan_probe import TcpWanProbe
from monitor.interfaces.probe_interface import (
    LanProbeInterface,
    ProbeSetupError,
    WanProbeInterface,
)
from monitor.interfaces.route_table_interface import RouteTableInterface

# Type aliases for better type hints
ProbeMode = Literal["auto", "real", "mock"]


class MonitorFactory:
    """
    Factory for creating probe and route table implementations.

    Usage:
        # Auto-detect (real probes where the platform supports them)
        lan = MonitorFactory.create_lan_probe()

        # Force mock mode (useful for testing)
        wan = MonitorFactory.create_wan_probe(mode="mock")

        # Force real (raises ProbeSetupError if not available)
        lan = MonitorFactory.create_lan_probe(mode="real")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_wan_probe(cls, mode: ProbeMode = "auto") -> WanProbeInterface:
        """
        Create a WAN probe instance.

        Args:
            mode: "auto" (detect), "real" (force TCP probe),
                  "mock" (force simulation)

        Returns:
            WanProbeInterface implementation (TcpWanProbe or MockWanProbe)
        """
        if mode == "mock":
            cls._logger.info("Creating Mock WAN probe (forced)")
            return MockWanProbe()

        # TCP sockets exist everywhere, so auto and real agree
        cls._logger.info(f"Creating TCP WAN probe ({'forced' if mode == 'real' else 'auto-detected'})")
        return TcpWanProbe()

    @classmethod
    def create_lan_probe(cls, mode: ProbeMode = "auto") -> LanProbeInterface:
        """
        Create a LAN probe instance.

        Args:
            mode: "auto" (detect), "real" (force ioctl probe),
                  "mock" (force simulation)

        Returns:
            LanProbeInterface implementation (IoctlLanProbe or MockLanProbe)

        Raises:
            ProbeSetupError: If mode="real" but SIOCGIFFLAGS is not available

        Example:
            # Let factory decide based on platform
            lan = MonitorFactory.create_lan_probe()
        """
        if mode == "mock":
            cls._logger.info("Creating Mock LAN probe (forced)")
            return MockLanProbe()

        if mode == "real":
            try:
                probe = IoctlLanProbe()
                cls._logger.info("Creating ioctl LAN probe (forced)")
                return probe
            except ProbeSetupError as e:
                raise ProbeSetupError(
                    f"Real LAN probe requested but not available: {e}",
                ) from e

        # mode == "auto" - try real first, fall back to mock
        try:
            probe = IoctlLanProbe()
            cls._logger.info("Creating ioctl LAN probe (auto-detected)")
            return probe
        except ProbeSetupError as e:
            cls._logger.warning(
                f"Real LAN probe not available ({e}), using Mock LAN probe",
            )
            return MockLanProbe()

    @classmethod
    def create_route_table(
        cls,
        mode: ProbeMode = "auto",
        path: str = ROUTE_TABLE_PATH,
    ) -> RouteTableInterface:
        """
        Create a route table reader.

        Args:
            mode: "auto" (detect), "real" (force /proc reader),
                  "mock" (force simulation)
            path: Routing table file for the real reader

        Returns:
            RouteTableInterface implementation

        Raises:
            ProbeSetupError: If mode="real" but path is not readable
        """
        if mode == "mock":
            cls._logger.info("Creating Mock route table (forced)")
            return MockRouteTable()

        table = ProcRouteTable(path)
        if mode == "real" and not table.is_available():
            raise ProbeSetupError(f"Real route table requested but {path} is not readable")

        # In auto mode an unreadable table is kept: detection then fails
        # with RouteTableError and the monitor falls back to loopback
        cls._logger.info(f"Creating route table reader for {path}")
        return table

    @classmethod
    def is_real_probing_available(cls) -> dict[str, bool]:
        """
        Check which real probes would work on this system.

        Useful for diagnostics and configuration display.

        Returns:
            {'wan': True/False, 'lan': True/False, 'route_table': True/False}
        """
        status = {
            "wan": TcpWanProbe().is_available(),
            "lan": False,
            "route_table": ProcRouteTable().is_available(),
        }

        try:
            status["lan"] = IoctlLanProbe().is_available()
        except ProbeSetupError:
            pass

        return status


# Convenience functions for quick creation
# These are shortcuts for the most common usage patterns


def create_wan_probe(force_mock: bool = False) -> WanProbeInterface:
    """
    Quick WAN probe creation with simple mock override.

    Example:
        # Testing
        wan = create_wan_probe(force_mock=True)
    """
    mode = "mock" if force_mock else "auto"
    return MonitorFactory.create_wan_probe(mode=mode)


def create_lan_probe(force_mock: bool = False) -> LanProbeInterface:
    """Quick LAN probe creation with simple mock override"""
    mode = "mock" if force_mock else "auto"
    return MonitorFactory.create_lan_probe(mode=mode)


def create_route_table(force_mock: bool = False) -> RouteTableInterface:
    """Quick route table creation with simple mock override"""
    mode = "mock" if force_mock else "auto"
    return MonitorFactory.create_route_table(mode=mode)
