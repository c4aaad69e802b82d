"""Bridge exceptions.

Every failure surfaces to the immediate caller as one of these. Nothing in
the bridge retries; retry policy belongs to the calling layer. The CLI
converts them into a failed :class:`~abstract_bridge.services.result.ServiceResult`.
"""

from __future__ import annotations

import os


class BridgeError(Exception):
    """Base exception for all bridge errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class ConfigurationError(BridgeError):
    """Raised when the bridge cannot be configured from the given settings."""


class ExecutableNotFound(ConfigurationError):
    """Raised when no abstract-cli executable exists on the search path."""

    def __init__(self, searched: list[str]) -> None:
        super().__init__(
            f'Cannot find abstract-cli in "{os.pathsep.join(searched)}"',
            hint="Set ABSTRACT_CLI_PATH or pass --cli-path.",
        )
        self.searched = searched


class SpawnError(BridgeError):
    """Raised when the subprocess could not be started."""


class ResolutionError(BridgeError):
    """Raised when the ``latest`` revision of a descriptor cannot be resolved."""


class UnresolvedReferenceError(BridgeError):
    """Raised when an unresolved ``latest`` marker would reach the tool."""


class ProcessError(BridgeError):
    """Raised when the tool exits with a non-zero status.

    Attributes:
        returncode: The exit status reported for the process.
        stderr: The raw standard-error bytes, in arrival order.
    """

    def __init__(self, returncode: int, stderr: bytes) -> None:
        text = stderr.decode("utf-8", errors="replace").strip()
        super().__init__(text or f"abstract-cli exited with status {returncode}")
        self.returncode = returncode
        self.stderr = stderr


class DecodeError(BridgeError):
    """Raised when standard output is not a well-formed JSON stream."""


class EmptyOutputError(BridgeError):
    """Raised when the tool exits successfully without emitting any JSON value."""


class InvocationTimeoutError(BridgeError):
    """Raised when an invocation outlives its deadline."""


class InvocationCancelledError(BridgeError):
    """Raised when an invocation is cancelled through its token."""
