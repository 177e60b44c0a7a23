"""
Route Table Interface

Contract for finding the interface that carries the default route.
Used once, at construction, when no LAN interface was given explicitly.
"""

from abc import ABC, abstractmethod
from typing import Optional

from monitor.constants import CheckSource, ErrorKind
from monitor.interfaces.probe_interface import MonitorError
from monitor.models.probe_error import ProbeError


class RouteTableInterface(ABC):
    """Read-only view of the system routing table"""

    @abstractmethod
    def detect_default_interface(self) -> Optional[str]:
        """
        Find the interface of the first active default route.

        Returns:
            Interface name, or None when the table holds no default route
            (this is not an error)

        Raises:
            RouteTableError: If the routing table cannot be read at all

        Example:
            iface = table.detect_default_interface() or "lo"
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the routing table source exists on this system.

        Returns:
            True if detect_default_interface() can read it
        """


class RouteTableError(MonitorError):
    """
    The routing table source could not be opened or read.

    Distinct from "no default route", which is a normal None result.

    Attributes:
        error: Structured form (source ROUTE, kind ROUTE_TABLE_UNREADABLE)
    """

    def __init__(self, message: str, errno: int = 0, path: Optional[str] = None):
        super().__init__(message)
        self.errno = errno
        self.path = path
        self.error = ProbeError(
            source=CheckSource.ROUTE,
            kind=ErrorKind.ROUTE_TABLE_UNREADABLE,
            errno=errno,
            message=message,
            target=path,
        )
