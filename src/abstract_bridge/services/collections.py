"""CollectionService — curated collections in a project."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from abstract_bridge.domain import arguments
from abstract_bridge.domain.records import unwrap
from abstract_bridge.services.base import BaseService

if TYPE_CHECKING:
    from abstract_bridge.domain.descriptors import CollectionDescriptor, ProjectDescriptor


class CollectionService(BaseService):
    """``collections`` and ``collection`` commands."""

    async def list(self, descriptor: ProjectDescriptor) -> list[dict[str, Any]]:
        """Collections of the project, or of one branch when the descriptor has ``branch_id``."""
        payload = await self._invoke(arguments.collections_list(descriptor))
        return unwrap(payload, "collections")

    async def info(self, descriptor: CollectionDescriptor) -> dict[str, Any]:
        payload = await self._invoke(arguments.collection_info(descriptor))
        return unwrap(payload, "collection")
