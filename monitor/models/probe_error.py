"""
Probe Error Model

Structured replacement for a bare errno slot: every recorded failure carries
the sub-check that produced it, a coarse kind, and the OS error number.
"""

import errno as errno_codes
from dataclasses import dataclass
from typing import Optional

from monitor.constants import CheckSource, ErrorKind

# errno used when the OS gives us none (e.g. socket.timeout without errno)
_KIND_DEFAULT_ERRNO = {
    ErrorKind.SOCKET: errno_codes.EIO,
    ErrorKind.INVALID_ADDRESS: errno_codes.EINVAL,
    ErrorKind.CONNECT_REFUSED: errno_codes.ECONNREFUSED,
    ErrorKind.CONNECT_TIMEOUT: errno_codes.ETIMEDOUT,
    ErrorKind.UNREACHABLE: errno_codes.EHOSTUNREACH,
    ErrorKind.CONNECT_FAILED: errno_codes.EIO,
    ErrorKind.INTERFACE_QUERY: errno_codes.ENODEV,
    ErrorKind.ROUTE_TABLE_UNREADABLE: errno_codes.ENOENT,
}

_UNREACHABLE_ERRNOS = {
    errno_codes.ENETUNREACH,
    errno_codes.EHOSTUNREACH,
    errno_codes.ENETDOWN,
    errno_codes.EHOSTDOWN,
}


@dataclass(frozen=True)
class ProbeError:
    """
    One failed sub-operation.

    Attributes:
        source: Sub-check that failed (WAN, LAN, ROUTE)
        kind: Category of failure
        errno: OS error number, never 0
        message: Human-readable detail (usually str(exc))
        target: What was being probed ("8.8.8.8:53", "eth0", a file path)
    """

    source: CheckSource
    kind: ErrorKind
    errno: int
    message: str = ""
    target: Optional[str] = None

    def __post_init__(self):
        """Guarantee a non-zero code so callers can keep `code != 0` checks"""
        if not self.errno:
            object.__setattr__(self, "errno", _KIND_DEFAULT_ERRNO[self.kind])

    @property
    def code(self) -> int:
        """Integer error code (0 is reserved for 'no error')"""
        return self.errno

    @classmethod
    def from_os_error(
        cls,
        source: CheckSource,
        exc: OSError,
        target: Optional[str] = None,
        kind: Optional[ErrorKind] = None,
    ) -> "ProbeError":
        """
        Build a ProbeError from an OSError raised by the socket layer.

        Args:
            source: Sub-check that raised
            exc: The exception
            target: What was being probed
            kind: Force a kind instead of deriving it from errno

        Returns:
            ProbeError with errno copied from the exception when present
        """
        if kind is None:
            kind = classify_connect_error(exc)
        return cls(
            source=source,
            kind=kind,
            errno=exc.errno or 0,
            message=str(exc) or exc.__class__.__name__,
            target=target,
        )

    def __str__(self) -> str:
        where = f" {self.target}" if self.target else ""
        return f"{self.source.value}{where}: {self.kind.value} (errno {self.errno}) {self.message}".rstrip()


def classify_connect_error(exc: OSError) -> ErrorKind:
    """Map a connect() failure onto an ErrorKind"""
    if isinstance(exc, TimeoutError) or exc.errno == errno_codes.ETIMEDOUT:
        return ErrorKind.CONNECT_TIMEOUT
    if isinstance(exc, ConnectionRefusedError) or exc.errno == errno_codes.ECONNREFUSED:
        return ErrorKind.CONNECT_REFUSED
    if exc.errno in _UNREACHABLE_ERRNOS:
        return ErrorKind.UNREACHABLE
    return ErrorKind.CONNECT_FAILED
