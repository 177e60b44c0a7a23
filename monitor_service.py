"""
Monitor Service

Long-running entry point: keeps a NetworkMonitor alive, logs every WAN/LAN
status transition, and shuts down cleanly on SIGTERM/SIGINT.

Intended to run under systemd (or any supervisor) on the machine whose
connectivity is being watched:

    python monitor_service.py --config config/monitor.yaml

Logging goes to stdout and to a daily-rotated file in LOG_DIR, falling
back to ./logs when LOG_DIR is not writable.
"""

import argparse
import logging
import logging.handlers
import signal
import sys
import threading
from pathlib import Path
from typing import Optional

from config.settings import (
    LOG_BACKUP_DAYS,
    LOG_DIR,
    LOG_FALLBACK_DIR,
    LOG_SERVICE_FILE,
    MONITOR_CONFIG_FILE,
)
from monitor import MonitorError, MonitorFactory, MonitorOptions, NetworkMonitor
from monitor.models.monitor_state import MonitorState


def describe_transitions(
    previous: Optional[MonitorState],
    current: MonitorState,
) -> list[str]:
    """
    Compare two state snapshots and describe what changed.

    The first snapshot (previous=None) always reports both statuses.

    Returns:
        Messages like "WAN is now UP", empty if nothing changed
    """
    messages = []
    for label, attr in (("WAN", "wan_up"), ("LAN", "lan_up")):
        now = getattr(current, attr)
        if previous is None or getattr(previous, attr) != now:
            messages.append(f"{label} is now {'UP' if now else 'DOWN'}")
    return messages


class MonitorService:
    """
    Service wrapper around NetworkMonitor.

    Usage:
        service = MonitorService(MonitorOptions(lan_interface="eth0"))
        service.run()  # blocks until SIGTERM/SIGINT
    """

    def __init__(self, options: Optional[MonitorOptions] = None, mode: str = "real"):
        """
        Initialize service.

        Args:
            options: Monitor construction options
            mode: Probe mode passed to MonitorFactory ("real" or "mock")

        Raises:
            MonitorInitError: If the monitor cannot be created
        """
        self.logger = logging.getLogger(__name__)
        self._previous: Optional[MonitorState] = None
        self._shutdown_event = threading.Event()

        self.monitor = NetworkMonitor(
            options,
            wan_probe=MonitorFactory.create_wan_probe(mode=mode),
            lan_probe=MonitorFactory.create_lan_probe(mode=mode),
            on_update=self._on_update,
            autostart=False,
        )

        # Register signal handlers for graceful shutdown
        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

        self.logger.info("Monitor Service initialized successfully")

    def run(self) -> None:
        """Start checks and block until a shutdown signal arrives"""
        self.monitor.start()
        try:
            self._shutdown_event.wait()
        finally:
            self.monitor.close()
            self.logger.info(f"Final status: {self.monitor}")

    def stop(self) -> None:
        """Make run() return"""
        self._shutdown_event.set()

    def _on_update(self, state: MonitorState) -> None:
        """Called from the scheduler thread after every cycle"""
        for message in describe_transitions(self._previous, state):
            if "DOWN" in message and state.last_error:
                self.logger.warning(f"{message} ({state.last_error})")
            else:
                self.logger.info(message)
        self._previous = state

    def _signal_handler(self, signum, _frame):
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            _frame: Current stack frame (unused, required by signal API)
        """
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received signal {signal_name}, shutting down...")
        self.stop()


def setup_logging(log_dir: str = LOG_DIR, level: int = logging.INFO) -> None:
    """
    Setup logging with rotation.

    Logs to both console and file with rotation:
    - Daily rotation
    - Keep LOG_BACKUP_DAYS days of logs
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    log_format = logging.Formatter("%(asctime)s %(levelname)s %(message)s | %(name)s")

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(log_format)
    logger.addHandler(console_handler)

    log_file = Path(log_dir) / LOG_SERVICE_FILE
    try:
        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(log_file),
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_DAYS,
            encoding="utf-8",
        )
    except (PermissionError, FileNotFoundError):
        # Fallback to local logs directory if log_dir not writable
        logs_dir = Path(LOG_FALLBACK_DIR)
        logs_dir.mkdir(exist_ok=True)

        fallback_log = logs_dir / LOG_SERVICE_FILE
        logger.warning(f"Cannot write to {log_file}, using fallback: {fallback_log}")
        logger.info(
            f"To fix: sudo mkdir -p {log_dir} && sudo chown $(whoami) {log_dir}",
        )

        file_handler = logging.handlers.TimedRotatingFileHandler(
            str(fallback_log),
            when="midnight",
            interval=1,
            backupCount=LOG_BACKUP_DAYS,
            encoding="utf-8",
        )

    file_handler.setLevel(level)
    file_handler.setFormatter(log_format)
    logger.addHandler(file_handler)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Periodic WAN/LAN connectivity monitor",
        epilog="""
Examples:
  python monitor_service.py
  python monitor_service.py --interface wlan0 --interval 10
  python monitor_service.py --config /etc/netmonitor.yaml --verbose
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        default=MONITOR_CONFIG_FILE,
        help=f"YAML options file (default: {MONITOR_CONFIG_FILE})",
    )
    parser.add_argument(
        "--interface",
        help="LAN interface to watch (default: auto-detect)",
    )
    parser.add_argument(
        "--interval",
        type=int,
        help="Seconds between checks",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        help="WAN connect timeout in milliseconds",
    )
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use simulated probes (no network access)",
    )
    parser.add_argument(
        "--log-dir",
        default=LOG_DIR,
        help=f"Directory for the rotated log file (default: {LOG_DIR})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every check cycle",
    )
    return parser.parse_args(argv)


def build_options(args: argparse.Namespace) -> MonitorOptions:
    """YAML file options, with command-line values taking precedence"""
    options = MonitorOptions.from_yaml(args.config)
    if args.interface:
        options.lan_interface = args.interface
    if args.interval:
        options.check_interval_sec = args.interval
    if args.timeout:
        options.timeout_ms = args.timeout
    return options


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main entry point for the service.

    Sets up logging and runs the service.
    """
    args = parse_args(argv)
    setup_logging(args.log_dir, logging.DEBUG if args.verbose else logging.INFO)

    logger = logging.getLogger(__name__)
    logger.info("=" * 60)
    logger.info("Network Monitor Service Starting")
    logger.info("=" * 60)

    try:
        service = MonitorService(build_options(args), mode="mock" if args.mock else "real")
    except MonitorError as e:
        logger.critical(f"Cannot start monitor: {e}")
        sys.exit(1)

    try:
        service.run()
    except Exception as e:
        logger.critical(f"Fatal error in main: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
