"""Lifecycle domain exports."""

from .cancellation import CancellationToken
from .lifecycle_guard import DEFAULT_SIGNALS, LifecycleGuard

__all__ = ["CancellationToken", "DEFAULT_SIGNALS", "LifecycleGuard"]
