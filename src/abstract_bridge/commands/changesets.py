"""Command group: changesets."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from abstract_bridge.commands._options import sha_option
from abstract_bridge.domain.descriptors import CommitDescriptor

if TYPE_CHECKING:
    from abstract_bridge.commands._context import AppContext


@click.group()
def changesets() -> None:
    """Inspect the changes introduced by a commit."""


@changesets.command("info")
@click.argument("project_id")
@click.argument("branch_id")
@sha_option
@click.pass_obj
def changeset_info(app: AppContext, project_id: str, branch_id: str, sha: str) -> None:
    """The changeset of one commit."""
    descriptor = app.descriptor(
        CommitDescriptor, project_id=project_id, branch_id=branch_id, sha=sha
    )
    app.run("changesets.info", lambda client: client.changesets.info(descriptor))
