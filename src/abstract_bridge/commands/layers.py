"""Command group: layers of a file."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from abstract_bridge.commands._options import sha_option
from abstract_bridge.domain.descriptors import FileDescriptor, LayerDescriptor

if TYPE_CHECKING:
    from abstract_bridge.commands._context import AppContext


@click.group()
def layers() -> None:
    """List layers of a file and inspect layer metadata."""


@layers.command("list")
@click.argument("project_id")
@click.argument("branch_id")
@click.argument("file_id")
@sha_option
@click.pass_obj
def list_layers(app: AppContext, project_id: str, branch_id: str, file_id: str, sha: str) -> None:
    descriptor = app.descriptor(
        FileDescriptor, project_id=project_id, branch_id=branch_id, sha=sha, file_id=file_id
    )
    app.run("layers.list", lambda client: client.layers.list(descriptor))


@layers.command("info")
@click.argument("project_id")
@click.argument("branch_id")
@click.argument("file_id")
@click.argument("layer_id")
@sha_option
@click.pass_obj
def layer_info(
    app: AppContext,
    project_id: str,
    branch_id: str,
    file_id: str,
    layer_id: str,
    sha: str,
) -> None:
    descriptor = app.descriptor(
        LayerDescriptor,
        project_id=project_id,
        branch_id=branch_id,
        sha=sha,
        file_id=file_id,
        layer_id=layer_id,
    )
    app.run("layers.info", lambda client: client.layers.info(descriptor))
