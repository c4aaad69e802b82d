"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, abstract-bridge.toml only
contains overrides. :class:`BridgeConfig` is the resolved struct handed to
:class:`~abstract_bridge.infrastructure.bridge.CommandBridge`; it never reads
the environment itself.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

DEFAULT_API_URL = "https://api.goabstract.com"

EmptyOutputPolicy = Literal["error", "wait"]

# --- abstract-bridge.toml sections ---


class CliConfig(BaseModel):
    """[cli] section."""

    model_config = {"frozen": True}

    path: list[str] = Field(default_factory=list)
    api_url: str = DEFAULT_API_URL


class InvocationConfig(BaseModel):
    """[invocation] section."""

    model_config = {"frozen": True}

    timeout: float | None = Field(default=None, gt=0)
    empty_output: EmptyOutputPolicy = "error"


# --- Resolved bridge configuration ---


class BridgeConfig(BaseModel):
    """Everything a CommandBridge needs, passed explicitly at construction.

    Attributes:
        executable: Located abstract-cli executable.
        cwd: Working directory for every spawned process.
        access_token: Value of the fixed ``--user-token`` flag.
        api_url: Value of the fixed ``--api-url`` flag.
        timeout: Default per-invocation deadline in seconds; None waits forever.
        empty_output: What a successful exit with no JSON output means:
            ``"error"`` raises EmptyOutputError, ``"wait"`` keeps the call
            pending until its deadline or cancellation.
    """

    model_config = {"frozen": True}

    executable: Path
    cwd: Path = Field(default_factory=Path.cwd)
    access_token: str
    api_url: str = DEFAULT_API_URL
    timeout: float | None = Field(default=None, gt=0)
    empty_output: EmptyOutputPolicy = "error"
