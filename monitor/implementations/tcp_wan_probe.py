"""
TCP WAN Probe Implementation

Decides internet reachability by completing a TCP handshake with one of a
few well-known public servers. No data is exchanged: the socket is closed
as soon as connect() succeeds.

Each attempt uses a fresh socket with an explicit connect deadline, so a
silently dropped SYN costs at most timeout_ms. Failed attempts are retried
with exponential backoff before moving on to the next server.
"""

import logging
import socket
import time
from typing import Callable, Optional, Sequence

from config.settings import WAN_BACKOFF_BASE_SEC, WAN_CONNECT_ATTEMPTS
from monitor.constants import CheckSource, ErrorKind
from monitor.interfaces.probe_interface import WanProbeInterface
from monitor.models.monitor_config import WanServer
from monitor.models.monitor_state import WanProbeResult
from monitor.models.probe_error import ProbeError
from monitor.utils.network_utils import is_ipv4_literal


class TcpWanProbe(WanProbeInterface):
    """
    Sequential TCP connect probe.

    Worst case for one probe() call is
    len(servers) * attempts * timeout + the sum of all backoff delays.
    """

    def __init__(
        self,
        attempts: int = WAN_CONNECT_ATTEMPTS,
        backoff_base_sec: float = WAN_BACKOFF_BASE_SEC,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize probe.

        Args:
            attempts: Connect attempts per server
            backoff_base_sec: Delay after the first failed attempt; doubles
                              after each further failure (0 disables)
            sleep: Sleep function (injectable for tests)
        """
        self.logger = logging.getLogger(__name__)
        self.attempts = max(1, attempts)
        self.backoff_base_sec = max(0.0, backoff_base_sec)
        self._sleep = sleep

    def probe(self, servers: Sequence[WanServer], timeout_ms: int) -> WanProbeResult:
        """Try each server in order, return on the first handshake"""
        timeout_sec = timeout_ms / 1000.0
        last_error: Optional[ProbeError] = None

        for server in servers:
            if not is_ipv4_literal(server.host):
                # Not retried: the address will not parse any better next time
                last_error = ProbeError(
                    source=CheckSource.WAN,
                    kind=ErrorKind.INVALID_ADDRESS,
                    errno=0,
                    message=f"Not an IPv4 address: {server.host!r}",
                    target=server.address,
                )
                self.logger.warning(f"Skipping WAN server {server.address}: invalid address")
                continue

            for attempt in range(self.attempts):
                error = self._connect_once(server, timeout_sec)
                if error is None:
                    self.logger.debug(f"WAN reachable via {server.address}")
                    return WanProbeResult(reachable=True, server=server.address)

                last_error = error
                delay = self.backoff_base_sec * (2 ** attempt)
                self.logger.debug(
                    f"WAN attempt {attempt + 1}/{self.attempts} to "
                    f"{server.address} failed: {error.kind.value} "
                    f"(errno {error.errno}), backing off {delay:.1f}s"
                )
                if delay > 0:
                    self._sleep(delay)

        return WanProbeResult(reachable=False, error=last_error)

    def _connect_once(self, server: WanServer, timeout_sec: float) -> Optional[ProbeError]:
        """
        One handshake attempt on a fresh socket.

        Returns:
            None on success, ProbeError otherwise
        """
        try:
            sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as e:
            return ProbeError.from_os_error(
                CheckSource.WAN, e, target=server.address, kind=ErrorKind.SOCKET
            )

        try:
            sock.settimeout(timeout_sec)
            sock.connect((server.host, server.port))
            return None
        except OSError as e:
            # socket.timeout is an alias of TimeoutError and carries no errno
            return ProbeError.from_os_error(CheckSource.WAN, e, target=server.address)
        finally:
            sock.close()

    def is_available(self) -> bool:
        """TCP sockets exist on every supported platform"""
        return True
