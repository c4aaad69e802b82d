"""Tests for resource descriptors."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from abstract_bridge.domain.descriptors import (
    LATEST,
    BranchDescriptor,
    CollectionDescriptor,
    CommitDescriptor,
    FileDescriptor,
    LayerDescriptor,
    PageDescriptor,
    ProjectDescriptor,
    file_descriptor_for_page,
    is_latest,
    ref,
)


class TestContainment:
    def test_layer_carries_file_identity(self) -> None:
        layer = LayerDescriptor(
            project_id="P", branch_id="B", sha="abc", file_id="F", layer_id="L"
        )
        assert isinstance(layer, FileDescriptor)
        assert isinstance(layer, BranchDescriptor)
        assert isinstance(layer, ProjectDescriptor)
        assert (layer.project_id, layer.branch_id, layer.sha, layer.file_id) == (
            "P",
            "B",
            "abc",
            "F",
        )

    def test_collection_is_project_scoped(self) -> None:
        collection = CollectionDescriptor(project_id="P", collection_id="C")
        assert isinstance(collection, ProjectDescriptor)
        assert not isinstance(collection, BranchDescriptor)

    @pytest.mark.parametrize(
        ("model", "fields"),
        [
            (ProjectDescriptor, {"project_id": ""}),
            (BranchDescriptor, {"project_id": "P"}),
            (FileDescriptor, {"project_id": "P", "branch_id": "B", "sha": "s"}),
            (
                LayerDescriptor,
                {"project_id": "P", "branch_id": "B", "sha": "s", "file_id": "F"},
            ),
            (CollectionDescriptor, {"project_id": "P", "collection_id": ""}),
        ],
    )
    def test_identity_fields_required(self, model: type, fields: dict[str, str]) -> None:
        with pytest.raises(ValidationError):
            model(**fields)

    def test_descriptors_are_frozen(self) -> None:
        branch = BranchDescriptor(project_id="P", branch_id="B")
        with pytest.raises(ValidationError):
            branch.branch_id = "other"  # type: ignore[misc]


class TestRef:
    def test_sha_wins_over_branch(self) -> None:
        assert ref(CommitDescriptor(project_id="P", branch_id="B", sha="abc")) == "abc"

    def test_branch_without_sha(self) -> None:
        assert ref(BranchDescriptor(project_id="P", branch_id="B")) == "B"


class TestLatest:
    def test_latest_marker(self) -> None:
        assert is_latest(FileDescriptor(project_id="P", branch_id="B", sha=LATEST, file_id="F"))

    def test_concrete_sha_is_not_latest(self) -> None:
        assert not is_latest(CommitDescriptor(project_id="P", branch_id="B", sha="abc"))

    def test_branch_without_sha_is_not_latest(self) -> None:
        assert not is_latest(BranchDescriptor(project_id="P", branch_id="B"))

    def test_resolution_copy_leaves_original_untouched(self) -> None:
        original = FileDescriptor(project_id="P", branch_id="B", sha=LATEST, file_id="F")
        resolved = original.model_copy(update={"sha": "abc"})
        assert original.sha == LATEST
        assert resolved.sha == "abc"
        assert resolved.file_id == "F"


class TestFileDescriptorForPage:
    def test_projects_page_onto_file(self) -> None:
        page = PageDescriptor(project_id="P", branch_id="B", sha="abc", file_id="F", page_id="X")
        file = file_descriptor_for_page(page)
        assert type(file) is FileDescriptor
        assert file == FileDescriptor(project_id="P", branch_id="B", sha="abc", file_id="F")
