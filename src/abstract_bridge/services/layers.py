"""LayerService — layers inside a file."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from abstract_bridge.domain import arguments
from abstract_bridge.domain.records import unwrap
from abstract_bridge.services.base import BaseService

if TYPE_CHECKING:
    from abstract_bridge.domain.descriptors import FileDescriptor, LayerDescriptor


class LayerService(BaseService):
    """``layers`` and ``layer meta`` commands."""

    async def list(self, descriptor: FileDescriptor) -> list[dict[str, Any]]:
        resolved = await self._resolver.resolve(descriptor)
        payload = await self._invoke(arguments.layers_list(resolved))
        return unwrap(payload, "layers")

    async def info(self, descriptor: LayerDescriptor) -> dict[str, Any]:
        resolved = await self._resolver.resolve(descriptor)
        payload = await self._invoke(arguments.layer_info(resolved))
        return unwrap(payload, "layer")
