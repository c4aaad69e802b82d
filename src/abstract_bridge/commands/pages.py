"""Command group: pages of a file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from abstract_bridge.commands._options import sha_option
from abstract_bridge.domain.descriptors import FileDescriptor, PageDescriptor

if TYPE_CHECKING:
    from abstract_bridge.commands._context import AppContext


@click.group()
def pages() -> None:
    """List and look up pages of a file."""


@pages.command("list")
@click.argument("project_id")
@click.argument("branch_id")
@click.argument("file_id")
@sha_option
@click.pass_obj
def list_pages(app: AppContext, project_id: str, branch_id: str, file_id: str, sha: str) -> None:
    descriptor = app.descriptor(
        FileDescriptor, project_id=project_id, branch_id=branch_id, sha=sha, file_id=file_id
    )
    app.run("pages.list", lambda client: client.pages.list(descriptor))


@pages.command("info")
@click.argument("project_id")
@click.argument("branch_id")
@click.argument("file_id")
@click.argument("page_id")
@sha_option
@click.pass_obj
def page_info(
    app: AppContext,
    project_id: str,
    branch_id: str,
    file_id: str,
    page_id: str,
    sha: str,
) -> None:
    """One page; reports a warning rather than an error when it does not exist."""
    descriptor = app.descriptor(
        PageDescriptor,
        project_id=project_id,
        branch_id=branch_id,
        sha=sha,
        file_id=file_id,
        page_id=page_id,
    )
    app.run("pages.info", lambda client: client.pages.info(descriptor))
