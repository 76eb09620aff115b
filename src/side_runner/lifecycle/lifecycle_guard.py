"""Interruption handling that keeps sandboxes from leaking."""

from __future__ import annotations

import logging
import signal
from collections.abc import Sequence
from types import FrameType, TracebackType
from typing import Any

from side_runner.errors import BatchInterrupted
from side_runner.sandboxing import SandboxManager

from .cancellation import CancellationToken

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


class LifecycleGuard:
    """Context manager installing SIGINT/SIGTERM handlers for the batch.

    On a signal the handler cancels the token, removes the current sandbox
    unless ``preserve_sandbox`` is set, and raises ``BatchInterrupted`` from
    whatever the main thread was waiting on.
    """

    def __init__(
        self,
        sandbox_manager: SandboxManager,
        *,
        preserve_sandbox: bool = False,
        token: CancellationToken | None = None,
        signals: Sequence[signal.Signals] = DEFAULT_SIGNALS,
    ) -> None:
        self._sandbox_manager = sandbox_manager
        self._preserve_sandbox = preserve_sandbox
        self.token = token or CancellationToken()
        self._signals = tuple(signals)
        self._previous_handlers: dict[signal.Signals, Any] = {}

    def __enter__(self) -> CancellationToken:
        for signum in self._signals:
            self._previous_handlers[signum] = signal.signal(signum, self.handle_signal)
        return self.token

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        for signum, previous in self._previous_handlers.items():
            if previous is not None:
                signal.signal(signum, previous)
        self._previous_handlers.clear()

    def handle_signal(self, signum: int, frame: FrameType | None = None) -> None:
        self.token.cancel(signum)
        if not self._preserve_sandbox:
            self.teardown()
        raise BatchInterrupted(signum)

    def teardown(self) -> None:
        """Remove the current sandbox; failures here are ignored."""
        try:
            self._sandbox_manager.destroy_current()
        except OSError as exc:
            logger.debug("Ignoring sandbox teardown failure: %s", exc)
