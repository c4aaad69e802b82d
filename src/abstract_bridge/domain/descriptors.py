"""Resource descriptors — identity records addressing abstract-cli resources.

Descriptors compose by containment: a layer descriptor carries the full
file descriptor, which carries the branch descriptor, which carries the
project descriptor. Every identity field is required, so a descriptor that
names a file or layer can always be addressed without further lookups.

INVARIANT: Descriptors are never mutated. Resolution of the symbolic
``"latest"`` revision produces a copy via ``model_copy(update=...)``.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, Field

LATEST = "latest"
"""Symbolic revision standing in for the newest commit sha of a branch."""

Identifier = Annotated[str, Field(min_length=1)]


class ProjectDescriptor(BaseModel):
    """Root identity: a single project."""

    model_config = {"frozen": True}

    project_id: Identifier


class BranchDescriptor(ProjectDescriptor):
    """A branch within a project."""

    branch_id: Identifier


class CommitDescriptor(BranchDescriptor):
    """A commit on a branch. ``sha`` may be :data:`LATEST`."""

    sha: Identifier


class FileDescriptor(BranchDescriptor):
    """A design file at a revision of a branch."""

    sha: Identifier
    file_id: Identifier


class LayerDescriptor(FileDescriptor):
    """A layer inside a file."""

    layer_id: Identifier


class PageDescriptor(FileDescriptor):
    """A page inside a file."""

    page_id: Identifier


class CollectionDescriptor(ProjectDescriptor):
    """A collection within a project."""

    collection_id: Identifier


def ref(descriptor: BranchDescriptor) -> str:
    """Return the revision reference for *descriptor*: its sha, else its branch."""
    sha = getattr(descriptor, "sha", None)
    return sha or descriptor.branch_id


def is_latest(descriptor: BaseModel) -> bool:
    """Whether *descriptor* still carries the unresolved :data:`LATEST` marker."""
    return getattr(descriptor, "sha", None) == LATEST


def file_descriptor_for_page(page: PageDescriptor) -> FileDescriptor:
    """Project a page descriptor onto the file that owns it."""
    return FileDescriptor(
        project_id=page.project_id,
        branch_id=page.branch_id,
        sha=page.sha,
        file_id=page.file_id,
    )
