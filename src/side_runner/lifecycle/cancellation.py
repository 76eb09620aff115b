"""Cancellation token observed between pipeline stages."""

from __future__ import annotations

from side_runner.errors import BatchInterrupted


class CancellationToken:
    """Records the interruption signal received, if any."""

    def __init__(self) -> None:
        self._signum: int | None = None

    @property
    def cancelled(self) -> bool:
        return self._signum is not None

    @property
    def signum(self) -> int | None:
        return self._signum

    def cancel(self, signum: int) -> None:
        if self._signum is None:
            self._signum = signum

    def raise_if_cancelled(self) -> None:
        if self._signum is not None:
            raise BatchInterrupted(self._signum)
