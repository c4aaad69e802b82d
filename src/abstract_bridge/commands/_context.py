"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy client construction, descriptor
validation, and centralized result emission (stdout/stderr routing +
exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

import anyio
import click
from pydantic import BaseModel, ValidationError

from abstract_bridge.domain.errors import BridgeError
from abstract_bridge.output.formatters import format_result
from abstract_bridge.services.result import failure, success

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from abstract_bridge.client import AbstractClient
    from abstract_bridge.config.settings import BridgeSettings
    from abstract_bridge.services.result import ServiceResult

_M = TypeVar("_M", bound=BaseModel)


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The client is created lazily on first use so ``--help`` and
    ``--version`` never touch the executable search path or the token.
    """

    def __init__(self, settings: BridgeSettings) -> None:
        self.settings = settings
        self._client: AbstractClient | None = None

        from abstract_bridge.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def client(self) -> AbstractClient:
        """The client instance (created lazily on first access)."""
        if self._client is None:
            from abstract_bridge.client import AbstractClient

            self._client = AbstractClient.from_settings(self.settings)
        return self._client

    def descriptor(self, model: type[_M], **fields: Any) -> _M:
        """Build a descriptor from command arguments, as a usage error if invalid."""
        try:
            return model(**fields)
        except ValidationError as exc:
            names = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
            raise click.UsageError(f"Invalid {model.__name__}: {names}") from exc

    def run(self, op: str, call: Callable[[AbstractClient], Awaitable[Any]]) -> None:
        """Run *call* against the client on a fresh event loop and emit the outcome."""
        try:
            value = anyio.run(call, self.client)
        except BridgeError as exc:
            self.emit(failure(op, exc))
            return
        self.emit(success(op, value))

    def emit(self, result: ServiceResult) -> None:
        emit(result, json_output=self.settings.json_output)


def emit(result: ServiceResult, *, json_output: bool) -> None:
    """Format and output a ServiceResult with correct exit semantics.

    * Success (``result.ok``): writes to stdout, returns normally.
    * Failure: writes to stderr, exits with code 1.

    Usable before an :class:`AppContext` exists, e.g. when settings fail
    to load.
    """
    output = format_result(result, json_output=json_output)
    if result.ok:
        click.echo(output)
    else:
        click.echo(output, err=True)
        raise SystemExit(1)
