"""ChangesetService — the changes introduced by one commit."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from abstract_bridge.domain import arguments
from abstract_bridge.domain.records import unwrap
from abstract_bridge.services.base import BaseService

if TYPE_CHECKING:
    from abstract_bridge.domain.descriptors import CommitDescriptor


class ChangesetService(BaseService):
    async def info(self, descriptor: CommitDescriptor) -> dict[str, Any]:
        resolved = await self._resolver.resolve(descriptor)
        payload = await self._invoke(arguments.changeset_info(resolved))
        return unwrap(payload, "changeset")
