"""
Monitor State Models

Results produced by the probes and the snapshot the scheduler publishes.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from monitor.models.probe_error import ProbeError


@dataclass(frozen=True)
class WanProbeResult:
    """Outcome of one WAN probe pass over the candidate list"""

    reachable: bool
    error: Optional[ProbeError] = None
    server: Optional[str] = None  # host:port that answered, if any


@dataclass(frozen=True)
class LanProbeResult:
    """
    Outcome of one interface flags query.

    up=False with error=None means the query worked and the interface is
    administratively down or has no link. error set means the query failed.
    """

    up: bool
    flags: Optional[int] = None
    error: Optional[ProbeError] = None


@dataclass
class MonitorState:
    """
    Most recent check results.

    Written only by the scheduler thread, under the monitor lock.
    last_check_time is epoch seconds, None until the first cycle completes.
    """

    wan_up: bool = False
    lan_up: bool = False
    last_check_time: Optional[float] = None
    last_error: Optional[ProbeError] = None
    wan_error: Optional[ProbeError] = None
    lan_error: Optional[ProbeError] = None
    cycles: int = 0

    def apply_cycle(
        self,
        wan: WanProbeResult,
        lan: LanProbeResult,
        checked_at: float,
    ) -> None:
        """
        Record the results of one check cycle.

        last_error becomes the error of the most recent failed sub-check
        (LAN runs after WAN), and is cleared only when both succeeded.
        A LAN interface that is merely down is a status, not an error.
        """
        self.wan_up = wan.reachable
        self.lan_up = lan.up
        self.wan_error = wan.error
        self.lan_error = lan.error
        self.last_error = lan.error or wan.error
        self.last_check_time = checked_at
        self.cycles += 1

    @property
    def last_error_code(self) -> int:
        """Integer code of last_error, 0 when there is none"""
        return self.last_error.code if self.last_error else 0

    @property
    def last_check_datetime(self) -> Optional[datetime]:
        """last_check_time as a local datetime"""
        if self.last_check_time is None:
            return None
        return datetime.fromtimestamp(self.last_check_time)

    def snapshot(self) -> "MonitorState":
        """Independent copy safe to hand to callers"""
        return replace(self)

    def to_dict(self) -> dict:
        """Plain representation for status reports"""
        checked = self.last_check_datetime
        return {
            "wan_up": self.wan_up,
            "lan_up": self.lan_up,
            "last_check_time": checked.isoformat() if checked else None,
            "last_error": self.last_error_code,
            "last_error_detail": str(self.last_error) if self.last_error else None,
            "wan_error": str(self.wan_error) if self.wan_error else None,
            "lan_error": str(self.lan_error) if self.lan_error else None,
            "cycles": self.cycles,
        }
