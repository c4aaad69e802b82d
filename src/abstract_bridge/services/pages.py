"""PageService — pages derived from a file's record.

The tool has no page command; pages come from the owning file's
``file`` payload.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from abstract_bridge.domain.descriptors import file_descriptor_for_page
from abstract_bridge.domain.records import find_page
from abstract_bridge.services.base import BaseService
from abstract_bridge.services.files import FileService

if TYPE_CHECKING:
    from abstract_bridge.domain.descriptors import FileDescriptor, PageDescriptor
    from abstract_bridge.infrastructure.bridge import CancellationToken
    from abstract_bridge.services.base import Invoker
    from abstract_bridge.services.resolver import ReferenceResolver


class PageService(BaseService):
    def __init__(
        self,
        bridge: Invoker,
        *,
        timeout: float | None = None,
        cancel: CancellationToken | None = None,
        resolver: ReferenceResolver | None = None,
    ) -> None:
        super().__init__(bridge, timeout=timeout, cancel=cancel, resolver=resolver)
        self._files = FileService(bridge, timeout=timeout, cancel=cancel, resolver=self._resolver)

    async def list(self, descriptor: FileDescriptor) -> list[dict[str, Any]]:
        file = await self._files.info(descriptor)
        return file.pages

    async def info(self, descriptor: PageDescriptor) -> dict[str, Any] | None:
        """The page whose ``id`` matches, or None when the file has no such page."""
        file = await self._files.info(file_descriptor_for_page(descriptor))
        return find_page(file.pages, descriptor.page_id)
