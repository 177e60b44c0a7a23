"""
Monitor Utilities Package

Exposes shared helper functions for the connectivity monitor.
"""

from monitor.utils.network_utils import (
    find_default_interface,
    is_default_route,
    is_ipv4_literal,
    parse_route_line,
    port_or_default,
    positive_or_default,
    sanitize_interface_name,
)

# Public API
__all__ = [
    "find_default_interface",
    "is_default_route",
    "is_ipv4_literal",
    "parse_route_line",
    "port_or_default",
    "positive_or_default",
    "sanitize_interface_name",
]
