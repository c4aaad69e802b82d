"""BaseService — shared plumbing for every operation group.

Each service receives the bridge at construction time, along with the
per-client deadline and cancellation token that every invocation it makes
(including ``latest`` resolution) carries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from abstract_bridge.services.resolver import ReferenceResolver

if TYPE_CHECKING:
    from collections.abc import Sequence

    from abstract_bridge.infrastructure.bridge import CancellationToken


class Invoker(Protocol):
    """What services need from a bridge: run arguments, return a JSON value."""

    async def invoke(
        self,
        arguments: Sequence[str],
        *,
        timeout: float | None = None,
        cancel: CancellationToken | None = None,
    ) -> Any: ...


class BaseService:
    """Base for the commit, changeset, file, page, layer, data and collection groups.

    Usage::

        class LayerService(BaseService):
            async def info(self, descriptor: LayerDescriptor) -> dict[str, Any]:
                resolved = await self._resolver.resolve(descriptor)
                payload = await self._invoke(arguments.layer_info(resolved))
                return unwrap(payload, "layer")
    """

    def __init__(
        self,
        bridge: Invoker,
        *,
        timeout: float | None = None,
        cancel: CancellationToken | None = None,
        resolver: ReferenceResolver | None = None,
    ) -> None:
        self._bridge = bridge
        self._timeout = timeout
        self._cancel = cancel
        self._resolver = resolver or ReferenceResolver(bridge, timeout=timeout, cancel=cancel)

    async def _invoke(self, arguments: Sequence[str]) -> Any:
        return await self._bridge.invoke(arguments, timeout=self._timeout, cancel=self._cancel)
