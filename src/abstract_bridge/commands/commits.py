"""Command group: branch history and commit details."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from abstract_bridge.domain.descriptors import (
    LATEST,
    BranchDescriptor,
    CommitDescriptor,
    FileDescriptor,
    LayerDescriptor,
)

if TYPE_CHECKING:
    from abstract_bridge.commands._context import AppContext


@click.group()
def commits() -> None:
    """List commits and inspect a single commit."""


@commits.command("list")
@click.argument("project_id")
@click.argument("branch_id")
@click.option("--file-id", default=None, help="Only commits touching this file.")
@click.option("--layer-id", default=None, help="Only commits touching this layer.")
@click.option("--limit", default=None, type=click.IntRange(min=1), help="Max commits.")
@click.pass_obj
def list_commits(
    app: AppContext,
    project_id: str,
    branch_id: str,
    file_id: str | None,
    layer_id: str | None,
    limit: int | None,
) -> None:
    """Commits on a branch, newest first."""
    if layer_id and not file_id:
        raise click.UsageError("--layer-id requires --file-id")
    ids = {"project_id": project_id, "branch_id": branch_id}
    descriptor: BranchDescriptor
    if layer_id:
        descriptor = app.descriptor(
            LayerDescriptor, **ids, sha=LATEST, file_id=file_id, layer_id=layer_id
        )
    elif file_id:
        descriptor = app.descriptor(FileDescriptor, **ids, sha=LATEST, file_id=file_id)
    else:
        descriptor = app.descriptor(BranchDescriptor, **ids)
    app.run("commits.list", lambda client: client.commits.list(descriptor, limit=limit))


@commits.command("info")
@click.argument("project_id")
@click.argument("branch_id")
@click.option("--sha", default=None, help="Commit sha ('latest' allowed). Defaults to branch head.")
@click.pass_obj
def commit_info(app: AppContext, project_id: str, branch_id: str, sha: str | None) -> None:
    """A single commit."""
    ids = {"project_id": project_id, "branch_id": branch_id}
    descriptor: BranchDescriptor
    if sha:
        descriptor = app.descriptor(CommitDescriptor, **ids, sha=sha)
    else:
        descriptor = app.descriptor(BranchDescriptor, **ids)
    app.run("commits.info", lambda client: client.commits.info(descriptor))
