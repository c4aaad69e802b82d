"""CommitService — branch history and single-commit lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from abstract_bridge.domain import arguments
from abstract_bridge.domain.records import unwrap
from abstract_bridge.services.base import BaseService

if TYPE_CHECKING:
    from abstract_bridge.domain.descriptors import BranchDescriptor


class CommitService(BaseService):
    """``commits`` and ``commit`` commands.

    History is scoped to a branch, narrowed to a file or layer when the
    descriptor names one.
    """

    async def list(
        self,
        descriptor: BranchDescriptor,
        *,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Commits on the branch, newest first, at most *limit* of them."""
        payload = await self._invoke(arguments.commits_list(descriptor, limit=limit))
        return unwrap(payload, "commits")

    async def info(self, descriptor: BranchDescriptor) -> dict[str, Any]:
        """A single commit: the descriptor's sha, or the branch head without one."""
        resolved = await self._resolver.resolve(descriptor)
        payload = await self._invoke(arguments.commit_info(resolved))
        return unwrap(payload, "commit")
