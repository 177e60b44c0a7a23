"""
Network Monitor - Connectivity Facade

Long-lived object that keeps the current WAN (internet) and LAN (local link)
status up to date in the background and hands it to callers without ever
blocking them on network I/O.

Usage:
    with NetworkMonitor() as monitor:
        if monitor.get_wan_status():
            upload_pending_files()
        print(monitor)

One lock (a Condition) guards config and state together. Every accessor and
setter holds it for one field read or write only; probes run outside it.
"""

import logging
import threading
from typing import Any, Iterable, Optional

from config.settings import (
    DEFAULT_CHECK_INTERVAL_SEC,
    DEFAULT_LAN_INTERFACE,
    DEFAULT_TIMEOUT_MS,
    LAN_INTERFACE_AUTODETECT_FALLBACK,
    SHUTDOWN_JOIN_TIMEOUT_SEC,
)
from monitor.config import MonitorOptions
from monitor.controllers.scheduler import Scheduler, UpdateCallback
from monitor.factory import MonitorFactory
from monitor.interfaces.probe_interface import (
    LanProbeInterface,
    MonitorError,
    ProbeSetupError,
    WanProbeInterface,
)
from monitor.interfaces.route_table_interface import (
    RouteTableError,
    RouteTableInterface,
)
from monitor.models.monitor_config import MonitorConfig, default_wan_servers
from monitor.models.monitor_state import MonitorState
from monitor.models.probe_error import ProbeError
from monitor.utils.network_utils import positive_or_default, sanitize_interface_name


class MonitorInitError(MonitorError):
    """
    Construction failed; no usable monitor exists.

    Attributes:
        error: Structured cause when a probe failed (e.g. the LAN
               interface could not be queried), else None
    """

    def __init__(self, message: str, error: Optional[ProbeError] = None):
        super().__init__(message)
        self.error = error


class NetworkMonitor:
    """
    Periodic WAN/LAN connectivity monitor.

    Construction picks the configuration, validates that the LAN interface
    can be queried, and starts the background checks. Until the first cycle
    completes, both statuses read False and get_last_check_time() is None.
    """

    def __init__(
        self,
        options: Optional[MonitorOptions] = None,
        *,
        wan_probe: Optional[WanProbeInterface] = None,
        lan_probe: Optional[LanProbeInterface] = None,
        route_table: Optional[RouteTableInterface] = None,
        on_update: Optional[UpdateCallback] = None,
        autostart: bool = True,
    ):
        """
        Initialize monitor.

        Args:
            options: Overrides merged over the defaults (None = all defaults)
            wan_probe: WAN probe to use, or None for the TCP probe
            lan_probe: LAN probe to use, or None for the ioctl probe
            route_table: Default-route source, or None for /proc/net/route
            on_update: Called from the scheduler thread with a state
                       snapshot after every cycle
            autostart: Start background checks immediately

        Raises:
            MonitorInitError: If the LAN probe cannot be created, the chosen
                              interface cannot be queried, or the scheduler
                              thread cannot be started

        Example:
            # Explicit interface, faster checks
            monitor = NetworkMonitor(
                MonitorOptions(lan_interface="wlan0", check_interval_sec=2)
            )
        """
        self.logger = logging.getLogger(__name__)
        options = options or MonitorOptions()

        self._closed = False
        self._route_error: Optional[ProbeError] = None

        try:
            self._wan_probe = wan_probe or MonitorFactory.create_wan_probe(mode="real")
            self._lan_probe = lan_probe or MonitorFactory.create_lan_probe(mode="real")
        except ProbeSetupError as e:
            raise MonitorInitError(f"Cannot create probes: {e}") from e
        self._route_table = route_table or MonitorFactory.create_route_table()

        try:
            self._config = self._build_config(options)
        except ValueError as e:
            raise MonitorInitError(f"Invalid monitor options: {e}") from e
        self._validate_lan_interface(self._config.lan_interface)

        self._lock = threading.Condition()
        # An unreadable route table is the last error until the first cycle
        self._state = MonitorState(last_error=self._route_error)
        self._scheduler = Scheduler(
            self._lock,
            self._config,
            self._state,
            self._wan_probe,
            self._lan_probe,
            on_update=on_update,
        )

        self.logger.info(
            f"Network monitor configured: "
            f"WAN {', '.join(s.address for s in self._config.wan_servers)}, "
            f"LAN {self._config.lan_interface}, "
            f"every {self._config.check_interval_sec}s"
        )

        if autostart:
            self.start()

    # =========================================================================
    # CONSTRUCTION HELPERS
    # =========================================================================

    def _build_config(self, options: MonitorOptions) -> MonitorConfig:
        """Merge options over defaults"""
        config = MonitorConfig(
            timeout_ms=positive_or_default(options.timeout_ms, DEFAULT_TIMEOUT_MS),
            check_interval_sec=positive_or_default(
                options.check_interval_sec, DEFAULT_CHECK_INTERVAL_SEC
            ),
            proxy_url=options.proxy_url or "",
            wan_servers=options.wan_servers or default_wan_servers(),
            lan_interface=self._choose_lan_interface(options.lan_interface),
        )

        # Primary-entry overrides apply on top of either server list
        if options.wan_test_host:
            config.set_wan_test_host(options.wan_test_host)
        if options.wan_test_port:
            config.set_wan_test_port(options.wan_test_port)

        return config

    def _choose_lan_interface(self, requested: Optional[str]) -> str:
        """Explicit name, else the default-route interface, else loopback"""
        name = sanitize_interface_name(requested or DEFAULT_LAN_INTERFACE)
        if name:
            return name

        try:
            detected = self._route_table.detect_default_interface()
        except RouteTableError as e:
            self._route_error = e.error
            self.logger.warning(
                f"{e}. Falling back to {LAN_INTERFACE_AUTODETECT_FALLBACK}"
            )
            return LAN_INTERFACE_AUTODETECT_FALLBACK

        if detected:
            self.logger.info(f"Auto-detected LAN interface: {detected}")
            return sanitize_interface_name(detected)

        self.logger.debug(
            f"No default route, watching {LAN_INTERFACE_AUTODETECT_FALLBACK}"
        )
        return LAN_INTERFACE_AUTODETECT_FALLBACK

    def _validate_lan_interface(self, name: str) -> None:
        """
        Check the interface can be queried at all.

        An interface that is merely down passes: that is a status the
        scheduler will report, not a configuration error.
        """
        result = self._lan_probe.probe(name)
        if result.error is not None:
            raise MonitorInitError(
                f"LAN interface {name!r} cannot be queried: {result.error}",
                error=result.error,
            )
        if not result.up:
            self.logger.warning(f"LAN interface {name} is currently down")

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def start(self) -> None:
        """
        Start background checks (only needed with autostart=False).

        Raises:
            MonitorError: If the monitor was closed
            MonitorInitError: If the scheduler thread cannot be started
        """
        if self._closed:
            raise MonitorError("Network monitor is closed")
        try:
            self._scheduler.start()
        except RuntimeError as e:
            raise MonitorInitError(f"Cannot start connectivity checks: {e}") from e
        self.logger.info("Network monitor started")

    def close(self, timeout: float = SHUTDOWN_JOIN_TIMEOUT_SEC) -> None:
        """
        Stop background checks and wait for the scheduler to exit.

        Safe to call more than once. The interval wait is interrupted at
        once; a connect already in flight still runs to its deadline.

        Args:
            timeout: Maximum seconds to wait for the scheduler thread
        """
        if self._closed:
            return
        self._closed = True

        if self._scheduler.is_worker_thread():
            # Cannot join our own thread; the loop exits after this cycle
            self._scheduler.request_stop()
            self.logger.info("Network monitor stopping after the current cycle")
            return

        self.logger.info("Stopping network monitor...")
        if self._scheduler.stop(timeout=timeout):
            self.logger.info("Network monitor stopped")
        else:
            self.logger.warning(
                f"Scheduler still busy after {timeout}s, leaving it to finish in the background"
            )

    @property
    def closed(self) -> bool:
        return self._closed

    def is_running(self) -> bool:
        """True while background checks are active"""
        return self._scheduler.is_running()

    def wait_for_cycles(self, count: int, timeout: Optional[float] = None) -> bool:
        """
        Block until at least count check cycles have completed.

        Args:
            count: Total cycles since construction
            timeout: Maximum seconds to wait (None = forever)

        Returns:
            True if reached, False on timeout
        """
        with self._lock:
            return self._lock.wait_for(lambda: self._state.cycles >= count, timeout)

    def __enter__(self):
        """
        Enter context manager.

        Usage:
            with NetworkMonitor() as monitor:
                print(monitor.get_wan_status())
        """
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager - always close"""
        self.close()
        return False

    # =========================================================================
    # STATUS ACCESSORS
    # =========================================================================

    def get_wan_status(self) -> bool:
        """True if the last cycle reached a WAN server"""
        with self._lock:
            return self._state.wan_up

    def get_lan_status(self) -> bool:
        """True if the watched interface was up and running at the last cycle"""
        with self._lock:
            return self._state.lan_up

    def get_last_check_time(self) -> Optional[float]:
        """Epoch seconds of the last completed cycle, None before the first"""
        with self._lock:
            return self._state.last_check_time

    def get_last_error(self) -> int:
        """Error code of the most recent failed sub-check (0 = none)"""
        with self._lock:
            return self._state.last_error_code

    def get_last_error_detail(self) -> Optional[ProbeError]:
        """Structured form of the last error (source, kind, errno, target)"""
        with self._lock:
            return self._state.last_error

    def get_state(self) -> MonitorState:
        """Copy of the whole state, read consistently"""
        with self._lock:
            return self._state.snapshot()

    def get_config(self) -> MonitorConfig:
        """Copy of the current configuration"""
        with self._lock:
            return self._config.snapshot()

    def get_status(self) -> dict[str, Any]:
        """
        Combined state and configuration, for status reports.

        Returns:
            Dictionary like:
            {
                'running': True,
                'wan_up': True,
                'lan_up': True,
                'last_check_time': '2024-01-15T14:30:22',
                'last_error': 0,
                ...
                'config': {...}
            }
        """
        with self._lock:
            status = self._state.to_dict()
            status["config"] = self._config.to_dict()
        status["running"] = self.is_running()
        return status

    # =========================================================================
    # CONFIGURATION SETTERS
    # =========================================================================
    # Effective from the next cycle; a probe in flight keeps its snapshot

    def set_timeout_ms(self, timeout_ms: int) -> None:
        with self._lock:
            self._config.set_timeout_ms(timeout_ms)

    def set_check_interval_sec(self, interval_sec: int) -> None:
        with self._lock:
            self._config.set_check_interval_sec(interval_sec)

    def set_proxy(self, proxy_url: Optional[str]) -> None:
        with self._lock:
            self._config.set_proxy(proxy_url)

    def set_wan_test_host(self, host: Optional[str]) -> None:
        with self._lock:
            self._config.set_wan_test_host(host)

    def set_wan_test_port(self, port: int) -> None:
        with self._lock:
            self._config.set_wan_test_port(port)

    def set_lan_interface(self, interface_name: Optional[str]) -> None:
        with self._lock:
            self._config.set_lan_interface(interface_name)

    def set_wan_servers(self, servers: Optional[Iterable]) -> None:
        """
        Replace the WAN candidate list.

        Accepts WanServer objects, (host, port) pairs or {"host", "port"}
        mappings. More than four entries are truncated; an empty list
        restores the defaults.

        Raises:
            ValueError: If an entry has no host
        """
        with self._lock:
            self._config.set_wan_servers(servers)

    # =========================================================================
    # SNAPSHOT
    # =========================================================================

    def to_string(self) -> str:
        """
        One-line summary, read under a single lock acquisition.

        Example:
            NetworkMonitor: WAN=1, LAN=1, LastCheck=1700000000, Timeout=1000ms,
            Proxy=, WANHost=8.8.8.8:53, LANIface=eth0
        """
        with self._lock:
            state = self._state
            config = self._config
            primary = config.primary_server
            return (
                f"NetworkMonitor: WAN={int(state.wan_up)}, LAN={int(state.lan_up)}, "
                f"LastCheck={int(state.last_check_time or 0)}, "
                f"Timeout={config.timeout_ms}ms, Proxy={config.proxy_url}, "
                f"WANHost={primary.host}:{primary.port}, "
                f"LANIface={config.lan_interface}"
            )

    def __str__(self) -> str:
        return self.to_string()

