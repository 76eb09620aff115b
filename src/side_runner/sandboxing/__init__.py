"""Sandbox domain exports."""

from .sandbox_manager import SANDBOX_PREFIX, SandboxManager, sandbox_directory_name

__all__ = ["SANDBOX_PREFIX", "SandboxManager", "sandbox_directory_name"]
