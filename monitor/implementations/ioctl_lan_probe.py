"""
ioctl LAN Probe Implementation

Queries interface flags with the SIOCGIFFLAGS ioctl on a throwaway UDP
socket. Purely local: no packet leaves the machine.

Linux only. fcntl is missing on Windows, and the ioctl number and ifreq
layout are Linux-specific.
"""

import logging
import socket
import struct
import sys

try:
    import fcntl

    FCNTL_AVAILABLE = True
except ImportError:
    FCNTL_AVAILABLE = False

from monitor.constants import (
    IFF_RUNNING,
    IFF_UP,
    IFNAMSIZ,
    SIOCGIFFLAGS,
    CheckSource,
    ErrorKind,
)
from monitor.interfaces.probe_interface import LanProbeInterface, ProbeSetupError
from monitor.models.monitor_state import LanProbeResult
from monitor.models.probe_error import ProbeError
from monitor.utils.network_utils import sanitize_interface_name

# struct ifreq: char ifr_name[IFNAMSIZ]; union {...; short ifr_flags; ...}
_IFREQ_SIZE = 256
_FLAGS_OFFSET = IFNAMSIZ


class IoctlLanProbe(LanProbeInterface):
    """Interface up/running check via SIOCGIFFLAGS"""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

        if not self.is_available():
            raise ProbeSetupError(
                f"SIOCGIFFLAGS probe needs Linux with fcntl (platform: {sys.platform})",
            )

    def probe(self, interface_name: str) -> LanProbeResult:
        """Return up=True iff the interface is both IFF_UP and IFF_RUNNING"""
        name = sanitize_interface_name(interface_name)

        try:
            flags = self._read_flags(name)
        except OSError as e:
            error = ProbeError.from_os_error(
                CheckSource.LAN, e, target=name, kind=ErrorKind.INTERFACE_QUERY
            )
            self.logger.debug(f"Interface query for {name!r} failed: {error}")
            return LanProbeResult(up=False, error=error)

        up = bool(flags & IFF_UP) and bool(flags & IFF_RUNNING)
        self.logger.debug(f"Interface {name}: flags=0x{flags:04x}, up={up}")
        return LanProbeResult(up=up, flags=flags)

    def _read_flags(self, name: str) -> int:
        """
        Issue SIOCGIFFLAGS for one interface.

        Raises:
            OSError: Socket creation or ioctl failure (ENODEV for unknown names)
        """
        request = struct.pack(f"{_IFREQ_SIZE}s", name.encode("ascii", errors="replace"))
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            response = fcntl.ioctl(sock.fileno(), SIOCGIFFLAGS, request)
        (flags,) = struct.unpack("H", response[_FLAGS_OFFSET:_FLAGS_OFFSET + 2])
        return flags

    def is_available(self) -> bool:
        """True on Linux when fcntl can be imported"""
        return FCNTL_AVAILABLE and sys.platform.startswith("linux")
