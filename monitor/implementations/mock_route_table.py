"""
Mock Route Table Implementation

Fixed answer for default-route detection.
"""

import errno
import logging
from typing import Optional

from monitor.interfaces.route_table_interface import (
    RouteTableError,
    RouteTableInterface,
)


class MockRouteTable(RouteTableInterface):
    """Route table that reports a configurable default interface"""

    def __init__(self, default_interface: Optional[str] = "eth0", readable: bool = True):
        self.logger = logging.getLogger(__name__)
        self._default_interface = default_interface
        self._readable = readable
        self.lookups = 0

    def detect_default_interface(self) -> Optional[str]:
        self.lookups += 1
        if not self._readable:
            raise RouteTableError(
                "Simulated unreadable routing table",
                errno=errno.ENOENT,
                path="<mock>",
            )
        self.logger.debug(f"[MOCK] Default route via {self._default_interface}")
        return self._default_interface

    def is_available(self) -> bool:
        return self._readable

    # =========================================================================
    # TESTING HELPER METHODS (not part of RouteTableInterface)
    # =========================================================================

    def set_default_interface(self, name: Optional[str]) -> None:
        """None simulates a table without a default route"""
        self._default_interface = name

    def set_readable(self, readable: bool) -> None:
        """False makes detect_default_interface() raise RouteTableError"""
        self._readable = readable
