"""
Mock LAN Probe Implementation

Simulated interface table. Lets tests bring links up and down, or make an
interface disappear, without touching the host's network configuration.
"""

import errno
import logging
import threading
from typing import Optional

from monitor.constants import IFF_RUNNING, IFF_UP, CheckSource, ErrorKind
from monitor.interfaces.probe_interface import LanProbeInterface
from monitor.models.monitor_state import LanProbeResult
from monitor.models.probe_error import ProbeError


class MockLanProbe(LanProbeInterface):
    """
    Fake interface flags.

    Starts with "lo" and "eth0" both up. Unknown names fail the query with
    ENODEV, like the real ioctl.
    """

    def __init__(self, interfaces: Optional[dict[str, bool]] = None):
        """
        Initialize mock.

        Args:
            interfaces: Known interface names mapped to their up state
        """
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()

        if interfaces is None:
            interfaces = {"lo": True, "eth0": True}
        self._interfaces = dict(interfaces)
        self._queried: list[str] = []

        self.logger.info(f"Mock LAN probe initialized with {sorted(self._interfaces)}")

    def probe(self, interface_name: str) -> LanProbeResult:
        """Return the simulated flags of interface_name"""
        with self._lock:
            self._queried.append(interface_name)
            known = interface_name in self._interfaces
            up = self._interfaces.get(interface_name, False)

        if not known:
            self.logger.debug(f"[MOCK] Interface {interface_name!r} not found")
            return LanProbeResult(
                up=False,
                error=ProbeError(
                    source=CheckSource.LAN,
                    kind=ErrorKind.INTERFACE_QUERY,
                    errno=errno.ENODEV,
                    message="No such device",
                    target=interface_name,
                ),
            )

        flags = (IFF_UP | IFF_RUNNING) if up else 0
        self.logger.debug(f"[MOCK] Interface {interface_name}: up={up}")
        return LanProbeResult(up=up, flags=flags)

    def is_available(self) -> bool:
        """Mock probe is always available"""
        return True

    # =========================================================================
    # TESTING HELPER METHODS (not part of LanProbeInterface)
    # =========================================================================

    def set_interface(self, name: str, up: bool = True) -> None:
        """Add an interface or change its state"""
        with self._lock:
            self._interfaces[name] = up
        self.logger.info(f"[MOCK] Interface {name} set {'UP' if up else 'DOWN'}")

    def remove_interface(self, name: str) -> None:
        """Make an interface unknown (queries will fail)"""
        with self._lock:
            self._interfaces.pop(name, None)
        self.logger.info(f"[MOCK] Interface {name} removed")

    @property
    def queried(self) -> list[str]:
        """Copy of the interface names probed so far, in call order"""
        with self._lock:
            return list(self._queried)
