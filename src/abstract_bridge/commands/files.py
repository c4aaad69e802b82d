"""Command group: design files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from abstract_bridge.commands._options import sha_option
from abstract_bridge.domain.descriptors import BranchDescriptor, FileDescriptor

if TYPE_CHECKING:
    from abstract_bridge.commands._context import AppContext


@click.group()
def files() -> None:
    """List files on a branch and inspect one file."""


@files.command("list")
@click.argument("project_id")
@click.argument("branch_id")
@click.pass_obj
def list_files(app: AppContext, project_id: str, branch_id: str) -> None:
    """Files at the head of a branch."""
    descriptor = app.descriptor(BranchDescriptor, project_id=project_id, branch_id=branch_id)
    app.run("files.list", lambda client: client.files.list(descriptor))


@files.command("info")
@click.argument("project_id")
@click.argument("branch_id")
@click.argument("file_id")
@sha_option
@click.pass_obj
def file_info(app: AppContext, project_id: str, branch_id: str, file_id: str, sha: str) -> None:
    """A file record with its pages under ``_pages``."""
    descriptor = app.descriptor(
        FileDescriptor, project_id=project_id, branch_id=branch_id, sha=sha, file_id=file_id
    )
    app.run("files.info", lambda client: client.files.info(descriptor))
