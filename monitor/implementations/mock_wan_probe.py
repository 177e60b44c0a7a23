"""
Mock WAN Probe Implementation

Simulated internet check for development and testing without network
access. Results are scripted by the test; every call is recorded.
"""

import errno
import logging
import threading
import time
from collections import deque
from typing import Optional, Sequence

from monitor.constants import CheckSource, ErrorKind
from monitor.interfaces.probe_interface import WanProbeInterface
from monitor.models.monitor_config import WanServer
from monitor.models.monitor_state import WanProbeResult
from monitor.models.probe_error import ProbeError


class MockWanProbe(WanProbeInterface):
    """
    Scripted WAN probe.

    By default every probe succeeds via the first server. Queued results are
    returned first, in order; once the queue is empty the steady result
    applies again.

    probe() is called from the scheduler thread while tests inspect the
    mock from the main thread, so shared state sits behind a lock.
    """

    def __init__(self, reachable: bool = True, delay_sec: float = 0.0):
        self.logger = logging.getLogger(__name__)
        self._lock = threading.Lock()

        self._reachable = reachable
        self._error: Optional[ProbeError] = None if reachable else self._timeout_error()
        self._queued: deque[WanProbeResult] = deque()
        self._delay_sec = delay_sec

        # Each call: (servers tuple, timeout_ms)
        self._calls: list[tuple[tuple[WanServer, ...], int]] = []
        self._called = threading.Condition(self._lock)

        self.logger.info("Mock WAN probe initialized (simulation mode)")

    def probe(self, servers: Sequence[WanServer], timeout_ms: int) -> WanProbeResult:
        """Return the next scripted result"""
        if self._delay_sec > 0:
            time.sleep(self._delay_sec)

        with self._lock:
            self._calls.append((tuple(servers), timeout_ms))
            if self._queued:
                result = self._queued.popleft()
            elif self._reachable:
                first = servers[0].address if servers else None
                result = WanProbeResult(reachable=True, server=first)
            else:
                result = WanProbeResult(reachable=False, error=self._error)
            count = len(self._calls)
            self._called.notify_all()

        self.logger.debug(f"[MOCK] WAN probe #{count}: reachable={result.reachable}")
        return result

    def is_available(self) -> bool:
        """Mock probe is always available"""
        return True

    # =========================================================================
    # TESTING HELPER METHODS (not part of WanProbeInterface)
    # =========================================================================

    def set_reachable(self, reachable: bool, error: Optional[ProbeError] = None) -> None:
        """
        Set the steady result.

        Args:
            reachable: Outcome of every unscripted probe
            error: Error reported when unreachable (defaults to a timeout)
        """
        with self._lock:
            self._reachable = reachable
            self._error = None if reachable else (error or self._timeout_error())
        self.logger.info(f"[MOCK] WAN reachable set to {reachable}")

    def queue_results(self, *results: WanProbeResult) -> None:
        """Script the next probe() outcomes, consumed in order"""
        with self._lock:
            self._queued.extend(results)

    def set_delay(self, delay_sec: float) -> None:
        """Simulate a slow probe (e.g. a connect waiting for its deadline)"""
        self._delay_sec = delay_sec

    @property
    def call_count(self) -> int:
        with self._lock:
            return len(self._calls)

    @property
    def calls(self) -> list[tuple[tuple[WanServer, ...], int]]:
        """Copy of recorded (servers, timeout_ms) calls"""
        with self._lock:
            return list(self._calls)

    def wait_for_calls(self, count: int, timeout: float = 2.0) -> bool:
        """
        Block until probe() has been called at least count times.

        Returns:
            True if the count was reached within timeout
        """
        with self._called:
            return self._called.wait_for(lambda: len(self._calls) >= count, timeout)

    @staticmethod
    def _timeout_error() -> ProbeError:
        return ProbeError(
            source=CheckSource.WAN,
            kind=ErrorKind.CONNECT_TIMEOUT,
            errno=errno.ETIMEDOUT,
            message="simulated timeout",
        )
