"""
Central Configuration File

ALL configuration values live here. This is the single source of truth.

Guidelines:
- Machine-specific overrides belong in .env, NOT here
- Import these settings in modules: from config.settings import DEFAULT_TIMEOUT_MS
- Setters on a running monitor fall back to the *_FALLBACK values below,
  never to environment overrides
"""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# =============================================================================
# CHECK TIMING
# =============================================================================

# Connect deadline for each WAN attempt (milliseconds)
DEFAULT_TIMEOUT_MS = int(os.getenv("MONITOR_TIMEOUT_MS", "1000"))

# Pause between two check cycles (seconds)
DEFAULT_CHECK_INTERVAL_SEC = int(os.getenv("MONITOR_CHECK_INTERVAL_SEC", "5"))

# Values used when a setter receives something invalid (<= 0, None)
TIMEOUT_MS_FALLBACK = 1000
CHECK_INTERVAL_SEC_FALLBACK = 5

# =============================================================================
# WAN CHECK CONFIGURATION
# =============================================================================

# Well-known public resolvers, probed in this order on the DNS port.
# Google, Cloudflare, Quad9, OpenDNS
DEFAULT_WAN_SERVERS = [
    ("8.8.8.8", 53),
    ("1.1.1.1", 53),
    ("9.9.9.9", 53),
    ("208.67.222.222", 53),
]

WAN_HOST_FALLBACK = "8.8.8.8"
WAN_PORT_FALLBACK = 53

# Connection attempts per server and the first backoff delay (seconds).
# Delay doubles after every failed attempt: 0.1, 0.2, 0.4
WAN_CONNECT_ATTEMPTS = 3
WAN_BACKOFF_BASE_SEC = 0.1

# =============================================================================
# LAN CHECK CONFIGURATION
# =============================================================================

# Explicit interface to watch. Empty = auto-detect from the routing table
DEFAULT_LAN_INTERFACE = os.getenv("MONITOR_LAN_INTERFACE", "")

# Used when auto-detection finds no default route
LAN_INTERFACE_AUTODETECT_FALLBACK = "lo"

# Used when set_lan_interface() receives None/empty
LAN_INTERFACE_FALLBACK = "eth0"

# Kernel routing table (text form)
ROUTE_TABLE_PATH = os.getenv("MONITOR_ROUTE_FILE", "/proc/net/route")

# =============================================================================
# MONITOR LIFECYCLE
# =============================================================================

# How long close() waits for the scheduler thread to finish its cycle.
# A connect already in flight always runs to its own deadline.
SHUTDOWN_JOIN_TIMEOUT_SEC = float(os.getenv("MONITOR_SHUTDOWN_TIMEOUT", "10.0"))

# Optional YAML file with construction options (see monitor/config.py)
MONITOR_CONFIG_FILE = os.getenv("MONITOR_CONFIG_FILE", "config/monitor.yaml")

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

LOG_DIR = os.getenv("MONITOR_LOG_DIR", "/var/log/netmonitor")
LOG_SERVICE_FILE = "monitor.log"
LOG_FALLBACK_DIR = "logs"
LOG_BACKUP_DAYS = 7
