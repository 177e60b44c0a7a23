"""
Network Utils Tests

Tests for address parsing, value clamping and routing-table line handling.

To run:
    pytest tests/monitor/utils/test_network_utils.py -v
"""

import pytest

from monitor.constants import RTF_GATEWAY, RTF_UP
from monitor.utils.network_utils import (
    find_default_interface,
    is_default_route,
    is_ipv4_literal,
    parse_route_line,
    port_or_default,
    positive_or_default,
    sanitize_interface_name,
)

# =============================================================================
# ADDRESS PARSING TESTS
# =============================================================================


@pytest.mark.unit
@pytest.mark.parametrize("host", ["8.8.8.8", "127.0.0.1", "208.67.222.222", "0.0.0.0"])
def test_ipv4_literals_accepted(host):
    assert is_ipv4_literal(host) is True


@pytest.mark.unit
@pytest.mark.parametrize(
    "host",
    ["dns.google", "256.1.1.1", "1.2.3", "127.1", "::1", "", None, " 8.8.8.8"],
)
def test_non_ipv4_rejected(host):
    """Hostnames, IPv6 and shorthand forms are not accepted (no DNS)."""
    assert is_ipv4_literal(host) is False


# =============================================================================
# CLAMPING TESTS
# =============================================================================


@pytest.mark.unit
def test_positive_or_default():
    assert positive_or_default(250, 1000) == 250
    assert positive_or_default(0, 1000) == 1000
    assert positive_or_default(-5, 1000) == 1000
    assert positive_or_default(None, 1000) == 1000
    assert positive_or_default("abc", 1000) == 1000
    assert positive_or_default("30", 5) == 30


@pytest.mark.unit
def test_positive_or_default_rejects_bool():
    """True is an int in Python but never a meaningful timeout."""
    assert positive_or_default(True, 1000) == 1000


@pytest.mark.unit
def test_port_or_default():
    assert port_or_default(443, 53) == 443
    assert port_or_default(65535, 53) == 65535
    assert port_or_default(65536, 53) == 53
    assert port_or_default(0, 53) == 53


# =============================================================================
# INTERFACE NAME TESTS
# =============================================================================


@pytest.mark.unit
def test_sanitize_interface_name_truncates_to_15():
    assert sanitize_interface_name("a" * 20) == "a" * 15


@pytest.mark.unit
def test_sanitize_interface_name_strips_nul_and_whitespace():
    assert sanitize_interface_name(" eth\x000 ") == "eth0"


@pytest.mark.unit
def test_sanitize_interface_name_empty():
    assert sanitize_interface_name(None) == ""
    assert sanitize_interface_name("") == ""


# =============================================================================
# ROUTE LINE TESTS
# =============================================================================


@pytest.mark.unit
def test_parse_route_line():
    line = "eth0\t00000000\t0101A8C0\t0003\t0\t0\t100\t00000000\t0\t0\t0"

    assert parse_route_line(line) == ("eth0", 0, 0x0101A8C0, 0x3)


@pytest.mark.unit
def test_parse_route_line_skips_header_and_garbage():
    header = "Iface\tDestination\tGateway \tFlags\tRefCnt\tUse\tMetric\tMask"

    assert parse_route_line(header) is None
    assert parse_route_line("") is None
    assert parse_route_line("eth0 0000") is None


@pytest.mark.unit
def test_is_default_route():
    up_gw = RTF_UP | RTF_GATEWAY

    assert is_default_route(0, 0xC0A80101, up_gw) is True
    # Not a default destination
    assert is_default_route(0x0001A8C0, 0xC0A80101, up_gw) is False
    # No gateway address
    assert is_default_route(0, 0, up_gw) is False
    # Route down
    assert is_default_route(0, 0xC0A80101, RTF_GATEWAY) is False
    # Not via a gateway
    assert is_default_route(0, 0xC0A80101, RTF_UP) is False


@pytest.mark.unit
def test_find_default_interface_first_match_wins():
    lines = [
        "Iface\tDestination\tGateway\tFlags",
        "wlan0\t0001A8C0\t00000000\t0001",
        "wlan0\t00000000\t0101A8C0\t0003",
        "eth0\t00000000\t0102A8C0\t0003",
    ]

    assert find_default_interface(lines) == "wlan0"


@pytest.mark.unit
def test_find_default_interface_none():
    assert find_default_interface(["Iface\tDestination\tGateway\tFlags"]) is None
    assert find_default_interface([]) is None
