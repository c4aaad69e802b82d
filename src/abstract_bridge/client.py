"""AbstractClient — the public entry point.

Composes the operation groups over one CommandBridge::

    config = BridgeSettings.from_cli(token="...").to_bridge_config()
    client = AbstractClient(config)
    commits = await client.commits.list(BranchDescriptor(project_id="P", branch_id="B"))
    page = await client.pages.info(PageDescriptor(..., sha=LATEST, page_id="x"))

All groups share one ReferenceResolver and the client's deadline and
cancellation token. Build a second client to scope a different token.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from abstract_bridge.infrastructure.bridge import CommandBridge
from abstract_bridge.services.changesets import ChangesetService
from abstract_bridge.services.collections import CollectionService
from abstract_bridge.services.commits import CommitService
from abstract_bridge.services.data import DataService
from abstract_bridge.services.files import FileService
from abstract_bridge.services.layers import LayerService
from abstract_bridge.services.pages import PageService
from abstract_bridge.services.resolver import ReferenceResolver

if TYPE_CHECKING:
    from abstract_bridge.config.models import BridgeConfig
    from abstract_bridge.config.settings import BridgeSettings
    from abstract_bridge.infrastructure.bridge import CancellationToken
    from abstract_bridge.services.base import Invoker


class AbstractClient:
    """Typed, async access to abstract-cli.

    Parameters:
        config: Resolved bridge configuration. Ignored when *bridge* is given.
        bridge: Alternative invoker (tests, instrumentation).
        timeout: Deadline applied to every invocation, overriding ``config.timeout``.
        cancel: Token that cancels every in-flight and future invocation.
    """

    def __init__(
        self,
        config: BridgeConfig | None = None,
        *,
        bridge: Invoker | None = None,
        timeout: float | None = None,
        cancel: CancellationToken | None = None,
    ) -> None:
        if bridge is None:
            if config is None:
                raise ValueError("AbstractClient needs a BridgeConfig or a bridge")
            bridge = CommandBridge(config)
        self.bridge = bridge

        opts: dict[str, Any] = {"timeout": timeout, "cancel": cancel}
        self.resolver = ReferenceResolver(bridge, **opts)
        opts["resolver"] = self.resolver

        self.commits = CommitService(bridge, **opts)
        self.changesets = ChangesetService(bridge, **opts)
        self.files = FileService(bridge, **opts)
        self.pages = PageService(bridge, **opts)
        self.layers = LayerService(bridge, **opts)
        self.data = DataService(bridge, **opts)
        self.collections = CollectionService(bridge, **opts)

    @classmethod
    def from_settings(cls, settings: BridgeSettings, **kwargs: Any) -> AbstractClient:
        """Build a client from loaded settings (locates the executable).

        Raises:
            ConfigurationError: Missing token.
            ExecutableNotFound: No abstract-cli on the search path.
        """
        return cls(settings.to_bridge_config(), **kwargs)
