"""ReferenceResolver — turns the symbolic ``latest`` revision into a sha.

A descriptor whose ``sha`` is :data:`~abstract_bridge.domain.descriptors.LATEST`
is resolved with a single ``commits --limit 1`` query scoped to its branch
(and file or layer, when present). Anything else comes back untouched with
no subprocess spawned.

INVARIANT: ``latest`` never reaches an outbound command. Resolution is not
retried; a failure is terminal for the calling operation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from pydantic import BaseModel

from abstract_bridge.domain import arguments
from abstract_bridge.domain.descriptors import is_latest
from abstract_bridge.domain.errors import ResolutionError
from abstract_bridge.domain.records import unwrap

if TYPE_CHECKING:
    from abstract_bridge.infrastructure.bridge import CancellationToken
    from abstract_bridge.services.base import Invoker

logger = logging.getLogger(__name__)

_D = TypeVar("_D", bound=BaseModel)


class ReferenceResolver:
    """Resolve ``latest`` on descriptors through a bounded commit query."""

    def __init__(
        self,
        bridge: Invoker,
        *,
        timeout: float | None = None,
        cancel: CancellationToken | None = None,
    ) -> None:
        self._bridge = bridge
        self._timeout = timeout
        self._cancel = cancel

    async def resolve(self, descriptor: _D) -> _D:
        """Return *descriptor* with a concrete sha.

        Raises:
            ResolutionError: The branch has no matching commits, or the
                commit list is malformed.
        """
        if not is_latest(descriptor):
            return descriptor

        query = arguments.commits_list(descriptor, limit=1)  # type: ignore[arg-type]
        payload = await self._bridge.invoke(query, timeout=self._timeout, cancel=self._cancel)
        sha = _first_sha(unwrap(payload, "commits"))
        if sha is None:
            msg = f"Cannot resolve latest revision: no commits found for {descriptor!r}"
            raise ResolutionError(msg)

        logger.debug("Resolved latest to %s for %r", sha, descriptor)
        return descriptor.model_copy(update={"sha": sha})


def _first_sha(commits: Any) -> str | None:
    if not isinstance(commits, list) or not commits:
        return None
    first = commits[0]
    if not isinstance(first, dict):
        return None
    sha = first.get("sha")
    if not isinstance(sha, str) or not sha:
        return None
    return sha
