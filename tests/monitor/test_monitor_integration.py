"""
Monitor Integration Tests

End-to-end checks with the real TCP and ioctl probes, talking only to
loopback. Linux only.

Tests cover:
1. Reachable WAN server + loopback interface -> both up
2. Refused WAN server -> WAN down, LAN up, error recorded
3. Construction fails on an interface that does not exist
"""

import errno
import sys

import pytest

from monitor import MonitorInitError, MonitorOptions, NetworkMonitor
from monitor.constants import CheckSource, ErrorKind
from monitor.implementations.tcp_wan_probe import TcpWanProbe

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not sys.platform.startswith("linux"),
        reason="ioctl LAN probe is Linux-only",
    ),
]


@pytest.fixture
def loopback_options():
    def _options(port):
        return MonitorOptions(
            timeout_ms=500,
            check_interval_sec=1,
            wan_servers=[("127.0.0.1", port)],
            lan_interface="lo",
        )

    return _options


def test_reachable_server_and_loopback(loopback_options, tcp_listener):
    with NetworkMonitor(loopback_options(tcp_listener)) as monitor:
        assert monitor.wait_for_cycles(1, timeout=5.0)

        assert monitor.get_wan_status() is True
        assert monitor.get_lan_status() is True
        assert monitor.get_last_error() == 0
        assert monitor.get_last_check_time() is not None
        assert f"WANHost=127.0.0.1:{tcp_listener}" in monitor.to_string()


def test_refused_server_with_loopback_up(loopback_options, closed_port):
    monitor = NetworkMonitor(
        loopback_options(closed_port),
        wan_probe=TcpWanProbe(backoff_base_sec=0),
    )
    try:
        assert monitor.wait_for_cycles(1, timeout=5.0)

        assert monitor.get_wan_status() is False
        assert monitor.get_lan_status() is True
        assert monitor.get_last_error() == errno.ECONNREFUSED
        detail = monitor.get_last_error_detail()
        assert detail.source == CheckSource.WAN
        assert detail.kind == ErrorKind.CONNECT_REFUSED
    finally:
        monitor.close()


def test_unknown_interface_aborts_construction():
    with pytest.raises(MonitorInitError) as exc_info:
        NetworkMonitor(MonitorOptions(lan_interface="nosuchif0"))

    assert exc_info.value.error.code == errno.ENODEV
