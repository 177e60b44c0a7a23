"""
Monitor Configuration Models

Data classes for the tunable parameters of a running monitor.

MonitorConfig is NOT thread-safe on its own. NetworkMonitor owns exactly one
instance and touches it only while holding its lock; the scheduler works on
copies returned by snapshot().
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Union

from config.settings import (
    CHECK_INTERVAL_SEC_FALLBACK,
    DEFAULT_WAN_SERVERS,
    LAN_INTERFACE_FALLBACK,
    TIMEOUT_MS_FALLBACK,
    WAN_HOST_FALLBACK,
    WAN_PORT_FALLBACK,
)
from monitor.constants import MAX_WAN_SERVERS
from monitor.utils.network_utils import (
    port_or_default,
    positive_or_default,
    sanitize_interface_name,
)


@dataclass(frozen=True)
class WanServer:
    """
    One WAN probe target.

    The host is stored as given; it is only parsed (strictly as IPv4) when
    probed, so a bad literal shows up as a probe failure for that server.
    """

    host: str
    port: int

    @property
    def address(self) -> str:
        """host:port form used in logs and snapshots"""
        return f"{self.host}:{self.port}"


ServerEntry = Union[WanServer, tuple, list, dict]


def make_wan_server(entry: ServerEntry) -> WanServer:
    """
    Build a WanServer from the loose forms accepted in options.

    Accepts WanServer, (host, port), [host, port] or {"host": .., "port": ..}.
    Missing/invalid ports fall back to WAN_PORT_FALLBACK.

    Raises:
        ValueError: If entry has no usable host
    """
    if isinstance(entry, WanServer):
        return entry
    if isinstance(entry, dict):
        host, port = entry.get("host"), entry.get("port")
    else:
        try:
            host, port = entry
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid WAN server entry: {entry!r}") from e
    if not host:
        raise ValueError(f"WAN server entry has no host: {entry!r}")
    return WanServer(host=str(host).strip(), port=port_or_default(port, WAN_PORT_FALLBACK))


def default_wan_servers() -> list[WanServer]:
    """Fresh copy of the built-in candidate list"""
    return [WanServer(host, port) for host, port in DEFAULT_WAN_SERVERS[:MAX_WAN_SERVERS]]


@dataclass
class MonitorConfig:
    """
    Tunable parameters read by the scheduler at every iteration.

    Invariants (kept by the setters):
    - timeout_ms and check_interval_sec are strictly positive
    - wan_servers has 1..MAX_WAN_SERVERS entries
    - lan_interface fits the kernel name buffer and has no NUL
    """

    timeout_ms: int = TIMEOUT_MS_FALLBACK
    check_interval_sec: int = CHECK_INTERVAL_SEC_FALLBACK
    proxy_url: str = ""  # Stored and reported, never used to route a check
    wan_servers: list[WanServer] = field(default_factory=default_wan_servers)
    lan_interface: str = LAN_INTERFACE_FALLBACK

    def __post_init__(self):
        # Route constructor input through the same clamping as the setters
        self.set_timeout_ms(self.timeout_ms)
        self.set_check_interval_sec(self.check_interval_sec)
        self.set_proxy(self.proxy_url)
        self.set_wan_servers(self.wan_servers)
        self.set_lan_interface(self.lan_interface)

    # =========================================================================
    # SETTERS
    # =========================================================================

    def set_timeout_ms(self, ms) -> None:
        """Connect deadline in ms (<= 0 or invalid -> 1000)"""
        self.timeout_ms = positive_or_default(ms, TIMEOUT_MS_FALLBACK)

    def set_check_interval_sec(self, sec) -> None:
        """Cycle interval in seconds (<= 0 or invalid -> 5)"""
        self.check_interval_sec = positive_or_default(sec, CHECK_INTERVAL_SEC_FALLBACK)

    def set_proxy(self, proxy_url: Optional[str]) -> None:
        """Proxy URL (None clears it)"""
        self.proxy_url = str(proxy_url) if proxy_url else ""

    def set_wan_test_host(self, host: Optional[str]) -> None:
        """Replace the primary WAN host (None/empty -> 8.8.8.8)"""
        host = str(host).strip() if host else ""
        primary = self.wan_servers[0]
        self.wan_servers[0] = WanServer(host or WAN_HOST_FALLBACK, primary.port)

    def set_wan_test_port(self, port) -> None:
        """Replace the primary WAN port (invalid -> 53)"""
        primary = self.wan_servers[0]
        self.wan_servers[0] = WanServer(primary.host, port_or_default(port, WAN_PORT_FALLBACK))

    def set_wan_servers(self, servers: Optional[Iterable[ServerEntry]]) -> None:
        """
        Replace the whole candidate list.

        Extra entries beyond MAX_WAN_SERVERS are dropped; an empty list
        restores the defaults so the list is never empty.
        """
        parsed = [make_wan_server(entry) for entry in (servers or [])]
        self.wan_servers = parsed[:MAX_WAN_SERVERS] or default_wan_servers()

    def set_lan_interface(self, iface: Optional[str]) -> None:
        """Interface to watch (None/empty -> eth0)"""
        self.lan_interface = sanitize_interface_name(iface) or LAN_INTERFACE_FALLBACK

    # =========================================================================
    # UTILITY METHODS
    # =========================================================================

    @property
    def primary_server(self) -> WanServer:
        """First WAN candidate (the one the host/port setters change)"""
        return self.wan_servers[0]

    def snapshot(self) -> "MonitorConfig":
        """Independent copy safe to use without the lock"""
        return replace(self, wan_servers=list(self.wan_servers))

    def to_dict(self) -> dict:
        """Plain representation for logging and status reports"""
        return {
            "timeout_ms": self.timeout_ms,
            "check_interval_sec": self.check_interval_sec,
            "proxy_url": self.proxy_url,
            "wan_servers": [server.address for server in self.wan_servers],
            "lan_interface": self.lan_interface,
        }
