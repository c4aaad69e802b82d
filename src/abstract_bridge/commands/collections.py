"""Command group: collections."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from abstract_bridge.domain.descriptors import (
    BranchDescriptor,
    CollectionDescriptor,
    ProjectDescriptor,
)

if TYPE_CHECKING:
    from abstract_bridge.commands._context import AppContext


@click.group()
def collections() -> None:
    """List collections and inspect one collection."""


@collections.command("list")
@click.argument("project_id")
@click.option("--branch", "branch_id", default=None, help="Only collections on this branch.")
@click.pass_obj
def list_collections(app: AppContext, project_id: str, branch_id: str | None) -> None:
    """Collections of a project, or of one branch with --branch."""
    descriptor: ProjectDescriptor
    if branch_id:
        descriptor = app.descriptor(BranchDescriptor, project_id=project_id, branch_id=branch_id)
    else:
        descriptor = app.descriptor(ProjectDescriptor, project_id=project_id)
    app.run("collections.list", lambda client: client.collections.list(descriptor))


@collections.command("info")
@click.argument("project_id")
@click.argument("collection_id")
@click.pass_obj
def collection_info(app: AppContext, project_id: str, collection_id: str) -> None:
    descriptor = app.descriptor(
        CollectionDescriptor, project_id=project_id, collection_id=collection_id
    )
    app.run("collections.info", lambda client: client.collections.info(descriptor))
