"""ServiceResult and ServiceError — the CLI's output contract.

The CLI wraps every operation outcome in a ServiceResult so both the JSON
and the human renderer consume one shape. Library callers use the
operation return values and exceptions directly.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from abstract_bridge.domain.errors import BridgeError, ProcessError
from abstract_bridge.domain.records import FileWithPages


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one CLI operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"commits.list"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None


def success(op: str, value: Any) -> ServiceResult:
    """Wrap an operation return value.

    Lists become ``{"items": [...], "count": n}``; a missing page becomes
    ``{"item": None}`` with a warning; dicts pass through.
    """
    if isinstance(value, FileWithPages):
        value = value.to_dict()
    if isinstance(value, list):
        return ServiceResult(ok=True, op=op, data={"items": value, "count": len(value)})
    if value is None:
        return ServiceResult(ok=True, op=op, data={"item": None}, warnings=["Not found"])
    if isinstance(value, dict):
        return ServiceResult(ok=True, op=op, data=value)
    return ServiceResult(ok=True, op=op, data={"value": value})


def failure(op: str, exc: BridgeError) -> ServiceResult:
    """Convert a bridge exception into a failed result."""
    detail: dict[str, Any] = {}
    if exc.hint:
        detail["hint"] = exc.hint
    if isinstance(exc, ProcessError):
        detail["returncode"] = exc.returncode
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=type(exc).__name__, message=exc.message, detail=detail),
    )
