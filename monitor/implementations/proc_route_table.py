"""
Proc Route Table Implementation

Reads the Linux kernel routing table from /proc/net/route to find which
interface carries the default route.

The file is small and re-read on every call; nothing is cached because the
monitor only asks once, at construction.
"""

import logging
import os
from typing import Optional

from config.settings import ROUTE_TABLE_PATH
from monitor.interfaces.route_table_interface import (
    RouteTableError,
    RouteTableInterface,
)
from monitor.utils.network_utils import find_default_interface


class ProcRouteTable(RouteTableInterface):
    """
    Routing table backed by the /proc text format.

    The path is injectable so tests can point it at a fixture file.
    """

    def __init__(self, path: str = ROUTE_TABLE_PATH):
        self.logger = logging.getLogger(__name__)
        self.path = path

    def detect_default_interface(self) -> Optional[str]:
        """Return the interface of the first active default route, or None"""
        try:
            with open(self.path, encoding="ascii", errors="replace") as f:
                iface = find_default_interface(f)
        except OSError as e:
            raise RouteTableError(
                f"Cannot read routing table {self.path}: {e}",
                errno=e.errno or 0,
                path=self.path,
            ) from e

        if iface is None:
            self.logger.debug(f"No default route found in {self.path}")
        else:
            self.logger.debug(f"Default route via {iface}")
        return iface

    def is_available(self) -> bool:
        """True if the table file exists and is readable"""
        return os.access(self.path, os.R_OK)
