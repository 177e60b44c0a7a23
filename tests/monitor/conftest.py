"""
Monitor Test Configuration and Fixtures

Shared fixtures for connectivity monitor tests. Real-socket fixtures only
ever bind to loopback.
"""

import socket

import pytest

from monitor.config import MonitorOptions
from monitor.controllers.network_monitor import NetworkMonitor
from monitor.implementations.mock_lan_probe import MockLanProbe
from monitor.implementations.mock_route_table import MockRouteTable
from monitor.implementations.mock_wan_probe import MockWanProbe

# =============================================================================
# MOCK PROBE FIXTURES
# =============================================================================


@pytest.fixture
def mock_wan():
    """
    Provide MockWanProbe that reports the internet as reachable.

    Usage:
        def test_down(mock_wan):
            mock_wan.set_reachable(False)
    """
    return MockWanProbe()


@pytest.fixture
def mock_lan():
    """Provide MockLanProbe with "lo" and "eth0" up"""
    return MockLanProbe()


@pytest.fixture
def mock_route_table():
    """Provide MockRouteTable with a default route via eth0"""
    return MockRouteTable("eth0")


# =============================================================================
# MONITOR FIXTURES
# =============================================================================


@pytest.fixture
def make_monitor(mock_wan, mock_lan, mock_route_table):
    """
    Factory fixture building NetworkMonitor instances on the mock probes.

    Every monitor created is closed after the test. Defaults: loopback
    interface, 1s interval, 1000ms timeout, not started.

    Usage:
        def test_something(make_monitor):
            monitor = make_monitor(autostart=True)
    """
    created = []

    def _make(options=None, autostart=False, **kwargs):
        if options is None:
            options = MonitorOptions(
                timeout_ms=1000,
                check_interval_sec=1,
                lan_interface="lo",
            )
        kwargs.setdefault("wan_probe", mock_wan)
        kwargs.setdefault("lan_probe", mock_lan)
        kwargs.setdefault("route_table", mock_route_table)
        monitor = NetworkMonitor(options, autostart=autostart, **kwargs)
        created.append(monitor)
        return monitor

    yield _make

    for monitor in created:
        monitor.close(timeout=5.0)


# =============================================================================
# ROUTE TABLE FIXTURES
# =============================================================================


@pytest.fixture
def route_file(tmp_path):
    """
    Provide a writer for fake routing table files.

    Usage:
        def test_route(route_file):
            path = route_file("Iface\tDestination\tGateway ...\n")
    """

    def _write(content: str):
        path = tmp_path / "route"
        path.write_text(content)
        return path

    return _write


# =============================================================================
# LOOPBACK SOCKET FIXTURES
# =============================================================================


@pytest.fixture
def tcp_listener():
    """
    Provide the port of a listening TCP socket on 127.0.0.1.

    The kernel completes handshakes from the backlog, so no accept loop
    is needed for connect() to succeed.
    """
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(16)
    yield server.getsockname()[1]
    server.close()


@pytest.fixture
def closed_port():
    """Provide a loopback port with nothing listening (connect is refused)"""
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    return port


# =============================================================================
# CALLBACK TRACKING FIXTURES
# =============================================================================


@pytest.fixture
def callback_tracker():
    """
    Provide helper for tracking callback calls.

    Usage:
        def test_callback(callback_tracker):
            scheduler = Scheduler(..., on_update=callback_tracker.track)
            assert callback_tracker.was_called()
    """

    class CallbackTracker:
        def __init__(self):
            self.calls = []

        def track(self, *args, **kwargs):
            """Record a callback invocation"""
            self.calls.append({"args": args, "kwargs": kwargs})

        def was_called(self) -> bool:
            return len(self.calls) > 0

        def get_call_count(self) -> int:
            return len(self.calls)

        def get_last_call(self):
            return self.calls[-1] if self.calls else None

    return CallbackTracker()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """
    Configure pytest with custom markers for monitor tests.
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "unit_integration: Integration tests on mocks")
    config.addinivalue_line("markers", "integration: Tests using real sockets/interfaces")
    config.addinivalue_line("markers", "slow: Slow tests")
