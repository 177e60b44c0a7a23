#!/usr/bin/env python3
"""
Monitor Check Script - Live Walkthrough

Exercises NetworkMonitor end to end on the current machine:
1. Create a monitor watching loopback with short timeouts
2. Print the initial snapshot (before any check: all down, no timestamp)
3. Print snapshots over three check cycles
4. Change every setting on the running monitor
5. Print one more snapshot and shut down

All configuration at the top for easy override.

Usage:
    python scripts/monitor_check.py
    # or from root directory
    python -m scripts.monitor_check
    # without touching the network
    MONITOR_MODE=mock python scripts/monitor_check.py
"""

import logging
import os
import sys
from pathlib import Path

# Add parent directory to path to allow imports (MUST be before other imports)
sys.path.insert(0, str(Path(__file__).parent.parent))

from monitor import MonitorError, MonitorFactory, MonitorOptions, NetworkMonitor

# =============================================================================
# CONFIGURATION - All parameters in one place
# =============================================================================

# Initial monitor settings
TIMEOUT_MS = 500  # Short timeout for quick checks
CHECK_INTERVAL_SEC = 2  # Frequent checks to see updates
WAN_TEST_HOST = "8.8.8.8"  # Google DNS
WAN_TEST_PORT = 53
LAN_INTERFACE = "lo"  # Loopback is up on any sane host

CHECK_CYCLES = 3

# Settings applied while running
NEW_TIMEOUT_MS = 2000
NEW_WAN_TEST_HOST = "1.1.1.1"  # Cloudflare
NEW_WAN_TEST_PORT = 443
NEW_LAN_INTERFACE = "lo"
NEW_PROXY = "http://example-proxy:8080"  # Stored and reported only
NEW_CHECK_INTERVAL_SEC = 3

# Mode Selection (auto, real, mock)
PROBE_MODE = os.getenv("MONITOR_MODE", "real")


def print_section(title: str) -> None:
    print(f"\n--- {title} ---")


def print_status(monitor: NetworkMonitor, label: str = "") -> None:
    """Print the snapshot line plus the individual accessors"""
    prefix = f"{label}: " if label else ""
    print(f"{prefix}{monitor}")
    print(
        f"WAN: {'UP' if monitor.get_wan_status() else 'DOWN'}, "
        f"LAN: {'UP' if monitor.get_lan_status() else 'DOWN'}, "
        f"Last Check: {int(monitor.get_last_check_time() or 0)}, "
        f"Last Error: {monitor.get_last_error()}"
    )
    detail = monitor.get_last_error_detail()
    if detail:
        print(f"  Last error detail: {detail}")


def main() -> int:
    logging.basicConfig(level=logging.WARNING, format="%(message)s | %(name)s")

    options = MonitorOptions(
        timeout_ms=TIMEOUT_MS,
        check_interval_sec=CHECK_INTERVAL_SEC,
        wan_test_host=WAN_TEST_HOST,
        wan_test_port=WAN_TEST_PORT,
        lan_interface=LAN_INTERFACE,
    )

    print(
        f"Creating NetworkMonitor: timeout={TIMEOUT_MS}ms, interval={CHECK_INTERVAL_SEC}s, "
        f"WAN host={WAN_TEST_HOST}:{WAN_TEST_PORT}, LAN iface={LAN_INTERFACE}, mode={PROBE_MODE}"
    )

    try:
        monitor = NetworkMonitor(
            options,
            wan_probe=MonitorFactory.create_wan_probe(mode=PROBE_MODE),
            lan_probe=MonitorFactory.create_lan_probe(mode=PROBE_MODE),
        )
    except MonitorError as e:
        print(f"ERROR: Failed to create NetworkMonitor: {e}")
        return 1
    print("NetworkMonitor created successfully.")

    with monitor:
        print_section("Initial State")
        print_status(monitor)

        print_section(f"Running checks ({CHECK_CYCLES} cycles)")
        for cycle in range(1, CHECK_CYCLES + 1):
            # A cycle can take longer than the interval when WAN is down
            if not monitor.wait_for_cycles(cycle, timeout=CHECK_INTERVAL_SEC * 10):
                print(f"Check {cycle}: timed out waiting for a result")
                continue
            print_status(monitor, f"Check {cycle}")

        print_section(
            f"Changing settings (timeout {NEW_TIMEOUT_MS}ms, "
            f"WAN host {NEW_WAN_TEST_HOST}:{NEW_WAN_TEST_PORT}, LAN iface {NEW_LAN_INTERFACE})"
        )
        monitor.set_timeout_ms(NEW_TIMEOUT_MS)
        monitor.set_wan_test_host(NEW_WAN_TEST_HOST)
        monitor.set_wan_test_port(NEW_WAN_TEST_PORT)
        monitor.set_lan_interface(NEW_LAN_INTERFACE)
        monitor.set_proxy(NEW_PROXY)
        monitor.set_check_interval_sec(NEW_CHECK_INTERVAL_SEC)

        # Settings apply from the next cycle; wait for the one after that
        done = monitor.get_state().cycles
        monitor.wait_for_cycles(done + 2, timeout=NEW_CHECK_INTERVAL_SEC * 20)
        print_status(monitor, "After setters")

        print_section("Shutting down NetworkMonitor")

    print("NetworkMonitor stopped successfully.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
