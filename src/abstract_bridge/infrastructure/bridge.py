"""CommandBridge — one abstract-cli subprocess per call, settled exactly once.

Each :meth:`CommandBridge.invoke` spawns the tool with the fixed credential
and endpoint flags ahead of the operation arguments, then concurrently:

- feeds stdout chunks to a :class:`JSONStreamDecoder` (first value wins,
  later values are drained and ignored);
- appends stderr chunks to a single buffer, uninterpreted until exit;
- optionally watches a deadline and a :class:`CancellationToken`.

Every completion path (decode failure, exit, timeout, cancellation) goes
through one :class:`_Settlement`, whose explicit PENDING/SETTLED state makes
later paths no-ops. ``invoke`` returns as soon as the call settles; the
process group is then killed if anything still holds the pipes, and the
process is reaped before ``invoke`` returns.

Exit arbitration:

==========================  =============================================
exit 0, value decoded       the first value
exit 0, no value            ``EmptyOutputError`` (or wait, see config)
exit != 0                   ``ProcessError`` with the raw stderr bytes
stdout syntax error         ``DecodeError``, process group killed
spawn failure               ``SpawnError``
==========================  =============================================
"""

from __future__ import annotations

import contextlib
import os
import signal
import subprocess
import sys
from enum import StrEnum
from typing import TYPE_CHECKING, Any

import anyio
import structlog

from abstract_bridge.domain.arguments import fixed_flags, redact
from abstract_bridge.domain.errors import (
    BridgeError,
    DecodeError,
    EmptyOutputError,
    InvocationCancelledError,
    InvocationTimeoutError,
    ProcessError,
    SpawnError,
)
from abstract_bridge.infrastructure.jsonstream import JSONStreamDecoder, JSONStreamError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from anyio.abc import Process

    from abstract_bridge.config.models import BridgeConfig

log = structlog.get_logger(__name__)


class CancellationToken:
    """Cooperative cancellation handle threaded through invocations.

    One token may guard several concurrent invocations; ``cancel()`` stops
    all of them. Must be used from the event loop running the invocations.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._waiters: list[anyio.Event] = []

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True
        for event in self._waiters:
            event.set()

    async def wait(self) -> None:
        """Block until :meth:`cancel` is called."""
        if self._cancelled:
            return
        event = anyio.Event()
        self._waiters.append(event)
        try:
            await event.wait()
        finally:
            self._waiters.remove(event)


class _State(StrEnum):
    PENDING = "pending"
    SETTLED = "settled"


class _Settlement:
    """Single-resolution outcome of one invocation."""

    def __init__(self) -> None:
        self.state = _State.PENDING
        self._value: Any = None
        self._error: BridgeError | None = None
        self._done = anyio.Event()

    @property
    def settled(self) -> bool:
        return self.state is _State.SETTLED

    def resolve(self, value: Any) -> bool:
        """Settle with *value*. Returns False if already settled."""
        if self.settled:
            return False
        self.state = _State.SETTLED
        self._value = value
        self._done.set()
        return True

    def reject(self, error: BridgeError) -> bool:
        """Settle with *error*. Returns False if already settled."""
        if self.settled:
            return False
        self.state = _State.SETTLED
        self._error = error
        self._done.set()
        return True

    async def wait(self) -> None:
        await self._done.wait()

    def result(self) -> Any:
        """Return the value or raise the error. Only valid once settled."""
        assert self.settled
        if self._error is not None:
            raise self._error
        return self._value


class _Invocation:
    """Per-call state: process handle, stderr buffer, decoder, settlement."""

    def __init__(self, process: Process, *, empty_output: str) -> None:
        self.process = process
        self.stderr = bytearray()
        self.decoder = JSONStreamDecoder()
        self.settlement = _Settlement()
        self._empty_output = empty_output
        self._values: list[Any] = []
        self._drained = False

    async def run(self, *, deadline: float | None, cancel: CancellationToken | None) -> None:
        """Return as soon as the call settles.

        Stream pumps still blocked on pipes (a process ignoring SIGTERM, or a
        grandchild holding stdout) are cancelled; :meth:`release` kills and
        reaps the process afterwards.
        """
        async with anyio.create_task_group() as tasks:
            if deadline is not None:
                tasks.start_soon(self._expire, deadline)
            if cancel is not None:
                tasks.start_soon(self._watch, cancel)
            tasks.start_soon(self._communicate)
            await self.settlement.wait()
            tasks.cancel_scope.cancel()

    async def release(self) -> None:
        """Kill whatever still holds the pipes, then reap and close.

        The process leads its own session, so killing the group also takes
        down grandchildren that inherited stdout or stderr.
        """
        with anyio.CancelScope(shield=True):
            if not self._drained or self.process.returncode is None:
                self._kill_group()
            await self.process.aclose()

    def _kill_group(self) -> None:
        with contextlib.suppress(ProcessLookupError, PermissionError):
            if sys.platform == "win32":
                self.process.kill()
            else:
                os.killpg(self.process.pid, signal.SIGKILL)

    # ------------------------------------------------------------------
    # Stream pumps
    # ------------------------------------------------------------------

    async def _communicate(self) -> None:
        async with anyio.create_task_group() as pumps:
            pumps.start_soon(self._pump_stderr)
            await self._pump_stdout()
        self._drained = True
        returncode = await self.process.wait()
        log.debug("bridge.close", returncode=returncode)
        self._settle_on_exit(returncode)

    async def _pump_stdout(self) -> None:
        assert self.process.stdout is not None
        try:
            async for chunk in self.process.stdout:
                if self._values or self.settlement.settled:
                    continue  # drain: only the first value is used
                for value in self.decoder.feed(chunk):
                    log.debug("bridge.stdout.value", kind=type(value).__name__)
                    self._values.append(value)
                    break
        except (JSONStreamError, anyio.BrokenResourceError, OSError) as exc:
            self._fail_stream(exc)

    async def _pump_stderr(self) -> None:
        assert self.process.stderr is not None
        with contextlib.suppress(anyio.BrokenResourceError):
            async for chunk in self.process.stderr:
                self.stderr += chunk

    def _fail_stream(self, exc: Exception) -> None:
        log.debug("bridge.stdout.error", error=str(exc))
        error = DecodeError(f"Malformed abstract-cli output: {exc}")
        error.__cause__ = exc
        self.settlement.reject(error)

    def _settle_on_exit(self, returncode: int) -> None:
        if self.settlement.settled:
            return
        if returncode != 0:
            log.debug(
                "bridge.error",
                returncode=returncode,
                stderr=self.stderr.decode("utf-8", errors="replace"),
            )
            self.settlement.reject(ProcessError(returncode, bytes(self.stderr)))
            return
        if not self._values:
            try:
                self._values.extend(self.decoder.close())
            except JSONStreamError as exc:
                self.settlement.reject(DecodeError(f"Truncated abstract-cli output: {exc}"))
                return
        if self._values:
            self.settlement.resolve(self._values[0])
        elif self._empty_output == "error":
            self.settlement.reject(
                EmptyOutputError(
                    "abstract-cli exited successfully without output",
                    hint="Set empty_output = 'wait' to keep waiting for a deadline instead.",
                )
            )
        # "wait": leave pending until the deadline or cancellation settles it.

    # ------------------------------------------------------------------
    # Watchers
    # ------------------------------------------------------------------

    async def _expire(self, deadline: float) -> None:
        await anyio.sleep(deadline)
        error = InvocationTimeoutError(f"abstract-cli did not finish within {deadline:g}s")
        if self.settlement.reject(error):
            log.debug("bridge.timeout", deadline=deadline)

    async def _watch(self, cancel: CancellationToken) -> None:
        await cancel.wait()
        if self.settlement.reject(InvocationCancelledError("abstract-cli invocation cancelled")):
            log.debug("bridge.cancelled")


class CommandBridge:
    """Spawns abstract-cli and turns its output into a JSON value or an error.

    Stateless between calls: concurrent invocations each own their process,
    buffers, and decoder.
    """

    def __init__(self, config: BridgeConfig) -> None:
        self._config = config

    @property
    def config(self) -> BridgeConfig:
        return self._config

    def command(self, arguments: Sequence[str]) -> list[str]:
        """Full argv: executable, fixed flags, then *arguments*."""
        return [
            str(self._config.executable),
            *fixed_flags(self._config.access_token, self._config.api_url),
            *arguments,
        ]

    async def invoke(
        self,
        arguments: Sequence[str],
        *,
        timeout: float | None = None,
        cancel: CancellationToken | None = None,
    ) -> Any:
        """Run abstract-cli with *arguments* and return its first JSON value.

        Args:
            arguments: Operation arguments (see :mod:`abstract_bridge.domain.arguments`).
            timeout: Seconds before the process group is killed. Defaults to
                ``config.timeout``; None waits indefinitely.
            cancel: Token whose ``cancel()`` ends the invocation early.

        Raises:
            SpawnError, ProcessError, DecodeError, EmptyOutputError,
            InvocationTimeoutError, InvocationCancelledError.
        """
        if cancel is not None and cancel.cancelled:
            raise InvocationCancelledError("abstract-cli invocation cancelled before start")

        argv = self.command(arguments)
        log.debug("bridge.spawn", argv=redact(argv), cwd=str(self._config.cwd))
        try:
            process = await anyio.open_process(
                argv,
                cwd=self._config.cwd,
                stdin=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as exc:
            log.debug("bridge.error", error=str(exc))
            msg = f"Could not start {argv[0]}: {exc}"
            raise SpawnError(msg) from exc

        invocation = _Invocation(process, empty_output=self._config.empty_output)
        deadline = timeout if timeout is not None else self._config.timeout
        try:
            await invocation.run(deadline=deadline, cancel=cancel)
        finally:
            await invocation.release()
        return invocation.settlement.result()
