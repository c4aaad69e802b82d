"""DataService — rendered layer data (``layer data``)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from abstract_bridge.domain import arguments
from abstract_bridge.services.base import BaseService

if TYPE_CHECKING:
    from abstract_bridge.domain.descriptors import LayerDescriptor


class DataService(BaseService):
    async def info(self, descriptor: LayerDescriptor) -> Any:
        """The layer data payload, passed through as emitted by the tool."""
        resolved = await self._resolver.resolve(descriptor)
        return await self._invoke(arguments.layer_data(resolved))
