"""
Check Scheduler

Background thread that runs one WAN probe and one LAN probe per interval
and publishes the results into the shared MonitorState.

Locking rules:
- config and state are guarded by the lock handed in by NetworkMonitor
- probes run on a config snapshot with no lock held, so status readers
  never wait behind network I/O
- state is written only here, in one short critical section per cycle
"""

import logging
import threading
import time
from typing import Callable, Optional

from monitor.constants import SchedulerState
from monitor.interfaces.probe_interface import LanProbeInterface, WanProbeInterface
from monitor.models.monitor_config import MonitorConfig
from monitor.models.monitor_state import MonitorState

UpdateCallback = Callable[[MonitorState], None]


class Scheduler:
    """
    Periodic check loop.

    Lifecycle: RUNNING -> STOPPED (terminal, a stopped scheduler cannot be
    restarted).

    The interval wait is a threading.Event wait, so stop() interrupts it
    immediately. A probe already in flight still runs to its own deadline.

    Usage:
        scheduler = Scheduler(lock, config, state, wan_probe, lan_probe)
        scheduler.start()
        ...
        scheduler.stop(timeout=10.0)
    """

    def __init__(
        self,
        lock: threading.Condition,
        config: MonitorConfig,
        state: MonitorState,
        wan_probe: WanProbeInterface,
        lan_probe: LanProbeInterface,
        on_update: Optional[UpdateCallback] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize scheduler.

        Args:
            lock: Condition guarding config and state; notified after every
                  state write
            config: Live configuration (read under lock, copied per cycle)
            state: Shared state this scheduler writes
            wan_probe: Internet reachability probe
            lan_probe: Interface status probe
            on_update: Called with a state snapshot after each cycle,
                       outside the lock
            clock: Source of check timestamps (epoch seconds)
        """
        self.logger = logging.getLogger(__name__)

        self._lock = lock
        self._config = config
        self._state = state
        self._wan_probe = wan_probe
        self._lan_probe = lan_probe
        self._on_update = on_update
        self._clock = clock

        # Stop request: flag read under the lock, event wakes the wait
        self._stop_requested = False
        self._stop_event = threading.Event()

        self._thread: Optional[threading.Thread] = None
        self._run_state = SchedulerState.STOPPED

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start(self) -> None:
        """
        Start the background thread.

        Raises:
            RuntimeError: If already started, or the thread cannot be created
        """
        if self._thread is not None:
            raise RuntimeError("Scheduler already started")

        self._thread = threading.Thread(
            target=self._worker,
            daemon=True,
            name="ConnectivityScheduler",
        )
        self._run_state = SchedulerState.RUNNING
        try:
            self._thread.start()
        except RuntimeError:
            self._run_state = SchedulerState.STOPPED
            raise
        self.logger.debug("Scheduler thread started")

    def request_stop(self) -> None:
        """Ask the loop to exit at its next check point (non-blocking)"""
        with self._lock:
            self._stop_requested = True
        self._stop_event.set()

    def stop(self, timeout: Optional[float] = None) -> bool:
        """
        Request stop and wait for the thread to exit.

        Args:
            timeout: Maximum seconds to wait (None = wait forever)

        Returns:
            True if the thread has exited, False if still mid-probe
        """
        self.request_stop()

        if self._thread is None:
            return True
        if self.is_worker_thread():
            # Called from on_update: the loop exits on its own
            return False

        self._thread.join(timeout=timeout)
        stopped = not self._thread.is_alive()
        if stopped:
            self.logger.debug("Scheduler thread stopped")
        return stopped

    @property
    def state(self) -> SchedulerState:
        return self._run_state

    def is_running(self) -> bool:
        """True while the worker thread is alive"""
        return self._thread is not None and self._thread.is_alive()

    def is_worker_thread(self) -> bool:
        """True when called from inside the check loop (e.g. on_update)"""
        return self._thread is threading.current_thread()

    # =========================================================================
    # CHECK LOOP
    # =========================================================================

    def _worker(self) -> None:
        """Thread body: cycle, wait, repeat until stopped"""
        self.logger.info("Connectivity checks started")
        try:
            while True:
                with self._lock:
                    if self._stop_requested:
                        break
                with self._lock:
                    config = self._config.snapshot()
                interval = config.check_interval_sec

                try:
                    self.run_cycle(config)
                except Exception as e:
                    # Steady-state failures are never fatal
                    self.logger.error(f"Check cycle failed: {e}", exc_info=True)

                if self._stop_event.wait(interval):
                    break
        finally:
            self._run_state = SchedulerState.STOPPED
            self.logger.info("Connectivity checks stopped")

    def run_cycle(self, config: MonitorConfig) -> MonitorState:
        """
        Probe once with the given configuration and publish the result.

        Args:
            config: Snapshot to probe with (not the live config)

        Returns:
            Copy of the state after the write
        """
        wan = self._wan_probe.probe(config.wan_servers, config.timeout_ms)
        lan = self._lan_probe.probe(config.lan_interface)
        checked_at = self._clock()

        with self._lock:
            self._state.apply_cycle(wan, lan, checked_at)
            snapshot = self._state.snapshot()
            self._lock.notify_all()

        self.logger.debug(
            f"Cycle {snapshot.cycles}: WAN={'up' if wan.reachable else 'down'}, "
            f"LAN {config.lan_interface}={'up' if lan.up else 'down'}"
        )

        if self._on_update:
            try:
                self._on_update(snapshot)
            except Exception as e:
                self.logger.error(f"Error in update callback: {e}", exc_info=True)

        return snapshot
