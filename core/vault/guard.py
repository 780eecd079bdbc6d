"""
Reentrancy Guard

A busy flag held for the duration of a payout section. The flag is set
before any mutation and released in a finally block, so it clears on
every exit path.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from core.schemas.errors import ReentrantCallError


class ReentrancyGuard:
    """
    Mixin for contracts whose external calls pay out to untrusted accounts.

    The flag lives in the contract's own attributes rather than in a helper
    object: chain snapshots replace attribute values on restore, and the
    release in ``finally`` must land on whatever the contract holds then.

    Example:
        >>> with self.non_reentrant("claim"):
        ...     ...  # nested claim/withdraw raise ReentrantCallError
    """

    _entered: bool = False
    _entered_by: Optional[str] = None

    @property
    def is_entered(self) -> bool:
        return self._entered

    @contextmanager
    def non_reentrant(self, operation: str) -> Iterator[None]:
        if self._entered:
            raise ReentrantCallError(
                details={"operation": operation, "held_by": self._entered_by},
            )
        self._entered = True
        self._entered_by = operation
        try:
            yield
        finally:
            self._entered = False
            self._entered_by = None


__all__ = ["ReentrancyGuard"]
