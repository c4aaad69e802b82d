"""Argument vectors for abstract-cli commands.

Pure functions: descriptor (+ options) in, ordered argument list out.
Identity fields are emitted in containment order (project, branch or sha,
file, layer). Optional selectors appear only when their value is present.

Credentials and endpoint are *not* part of these vectors. The bridge
prepends :func:`fixed_flags` so that, under first-occurrence-wins flag
parsing, trailing operation arguments can never override them.
"""

from __future__ import annotations

from abstract_bridge.domain.descriptors import (
    BranchDescriptor,
    CollectionDescriptor,
    CommitDescriptor,
    FileDescriptor,
    LayerDescriptor,
    ProjectDescriptor,
    is_latest,
    ref,
)
from abstract_bridge.domain.errors import UnresolvedReferenceError

TOKEN_FLAG = "--user-token"
API_URL_FLAG = "--api-url"

_REDACTED = "***"


def fixed_flags(access_token: str, api_url: str) -> list[str]:
    """Credential and endpoint flags, always placed before operation arguments."""
    return [f"{TOKEN_FLAG}={access_token}", f"{API_URL_FLAG}={api_url}"]


def redact(argv: list[str]) -> list[str]:
    """Copy of *argv* with the access token masked, for logging."""
    prefix = f"{TOKEN_FLAG}="
    return [f"{prefix}{_REDACTED}" if arg.startswith(prefix) else arg for arg in argv]


def _concrete(descriptor: BranchDescriptor) -> str:
    """Return the revision reference, refusing the unresolved ``latest`` marker."""
    if is_latest(descriptor):
        msg = f"Unresolved 'latest' revision in {descriptor!r}"
        raise UnresolvedReferenceError(msg, hint="Resolve the descriptor first.")
    return ref(descriptor)


# --- commits ---


def commits_list(
    descriptor: BranchDescriptor,
    *,
    limit: int | None = None,
) -> list[str]:
    """``commits P B [--file-id F] [--layer-id L] [--limit N]``."""
    args = ["commits", descriptor.project_id, descriptor.branch_id]
    file_id = getattr(descriptor, "file_id", None)
    if file_id:
        args += ["--file-id", file_id]
    layer_id = getattr(descriptor, "layer_id", None)
    if layer_id:
        args += ["--layer-id", layer_id]
    if limit is not None:
        args += ["--limit", str(limit)]
    return args


def commit_info(descriptor: BranchDescriptor) -> list[str]:
    """``commit P <sha-or-branch>``."""
    return ["commit", descriptor.project_id, _concrete(descriptor)]


def changeset_info(descriptor: CommitDescriptor) -> list[str]:
    """``changeset P <sha> --branch B``."""
    return [
        "changeset",
        descriptor.project_id,
        _concrete(descriptor),
        "--branch",
        descriptor.branch_id,
    ]


# --- files and layers ---


def files_list(descriptor: BranchDescriptor) -> list[str]:
    return ["files", descriptor.project_id, _concrete(descriptor)]


def file_info(descriptor: FileDescriptor) -> list[str]:
    return ["file", descriptor.project_id, _concrete(descriptor), descriptor.file_id]


def layers_list(descriptor: FileDescriptor) -> list[str]:
    return ["layers", descriptor.project_id, _concrete(descriptor), descriptor.file_id]


def layer_info(descriptor: LayerDescriptor) -> list[str]:
    return [
        "layer",
        "meta",
        descriptor.project_id,
        _concrete(descriptor),
        descriptor.file_id,
        descriptor.layer_id,
    ]


def layer_data(descriptor: LayerDescriptor) -> list[str]:
    return [
        "layer",
        "data",
        descriptor.project_id,
        _concrete(descriptor),
        descriptor.file_id,
        descriptor.layer_id,
    ]


# --- collections ---


def collections_list(descriptor: ProjectDescriptor) -> list[str]:
    """``collections P [--branch B]`` — branch-scoped only when a branch is given."""
    args = ["collections", descriptor.project_id]
    branch_id = getattr(descriptor, "branch_id", None)
    if branch_id:
        args += ["--branch", branch_id]
    return args


def collection_info(descriptor: CollectionDescriptor) -> list[str]:
    return ["collection", descriptor.project_id, descriptor.collection_id]
