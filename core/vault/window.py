"""
Distribution Window

Start/end timestamp pair gating claims and withdrawals.

Rules:
- Both bounds zero means the window was never configured
- end == start + duration whenever configured
- A window may be replaced before it starts and after it ends,
  never while start <= now <= end
"""

from __future__ import annotations

from dataclasses import dataclass

from core.schemas.errors import (
    AlreadyActiveError,
    InvalidDurationError,
    InvalidTimeError,
)


DAY = 24 * 60 * 60

MAX_DURATION = 365 * DAY
MAX_START_OFFSET = 90 * DAY

UINT64_MAX = 2**64 - 1


@dataclass(frozen=True)
class WindowLimits:
    """Bounds applied when a window is (re)configured."""

    max_duration: int = MAX_DURATION
    max_start_offset: int = MAX_START_OFFSET

    def __post_init__(self) -> None:
        if self.max_duration <= 0 or self.max_start_offset <= 0:
            raise ValueError("Window limits must be positive")


@dataclass(frozen=True)
class DistributionWindow:
    """
    Claim window in epoch seconds.

    Attributes:
        start: First second claims are accepted (0 = unconfigured)
        end: Last second claims are accepted (0 = unconfigured)
    """

    start: int = 0
    end: int = 0

    @property
    def is_configured(self) -> bool:
        return self.start != 0

    @property
    def duration(self) -> int:
        return self.end - self.start

    def is_active(self, now: int) -> bool:
        return self.start != 0 and self.start <= now <= self.end

    def has_started(self, now: int) -> bool:
        return self.start != 0 and now >= self.start

    def has_ended(self, now: int) -> bool:
        return self.end != 0 and now > self.end

    def rearm(
        self,
        start: int,
        duration: int,
        now: int,
        limits: WindowLimits = WindowLimits(),
    ) -> "DistributionWindow":
        """
        Validate a new window against the current one and return it.

        Raises:
            InvalidDurationError: duration is zero or above the limit
            InvalidTimeError: start is not in the future or too far ahead
            AlreadyActiveError: the current window is active
        """
        if duration <= 0 or duration > limits.max_duration:
            raise InvalidDurationError(
                details={"duration": duration, "max_duration": limits.max_duration},
            )
        if start <= now or start > now + limits.max_start_offset:
            raise InvalidTimeError(
                "Window start must be in the future and within the start offset limit",
                details={"start": start, "now": now, "max_start_offset": limits.max_start_offset},
            )
        if start + duration > UINT64_MAX:
            raise InvalidTimeError(
                "Window end overflows uint64",
                details={"start": start, "duration": duration},
            )
        if self.is_active(now):
            raise AlreadyActiveError(
                details={"start": self.start, "end": self.end, "now": now},
            )
        return DistributionWindow(start=start, end=start + duration)


__all__ = [
    "DAY",
    "MAX_DURATION",
    "MAX_START_OFFSET",
    "WindowLimits",
    "DistributionWindow",
]
