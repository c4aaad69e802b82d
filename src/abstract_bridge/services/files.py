"""FileService — design files on a branch."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from abstract_bridge.domain import arguments
from abstract_bridge.domain.records import FileWithPages, unwrap
from abstract_bridge.services.base import BaseService

if TYPE_CHECKING:
    from abstract_bridge.domain.descriptors import BranchDescriptor, FileDescriptor


class FileService(BaseService):
    """``files`` and ``file`` commands."""

    async def list(self, descriptor: BranchDescriptor) -> list[dict[str, Any]]:
        """Files at the head of the branch."""
        resolved = await self._resolver.resolve(descriptor)
        payload = await self._invoke(arguments.files_list(resolved))
        return unwrap(payload, "files")

    async def info(self, descriptor: FileDescriptor) -> FileWithPages:
        """The file record composed with its page list.

        ``latest`` is resolved first; the tool needs a concrete sha here.
        """
        resolved = await self._resolver.resolve(descriptor)
        payload = await self._invoke(arguments.file_info(resolved))
        return FileWithPages.from_payload(payload)
