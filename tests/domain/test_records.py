"""Tests for composed records and payload helpers."""

from __future__ import annotations

import pytest

from abstract_bridge.domain.errors import DecodeError
from abstract_bridge.domain.records import PAGES_FIELD, FileWithPages, find_page, unwrap

PAGES = [{"id": "p1", "name": "Cover"}, {"id": "p2", "name": "Flows"}]


class TestFileWithPages:
    def test_envelope_payload(self) -> None:
        file = FileWithPages.from_payload({"file": {"id": "F", "name": "App"}, "pages": PAGES})
        assert file.file == {"id": "F", "name": "App"}
        assert file.pages == PAGES

    def test_bare_record_with_inline_pages(self) -> None:
        file = FileWithPages.from_payload({"id": "F", "name": "App", "pages": PAGES})
        assert file.file == {"id": "F", "name": "App"}
        assert file.pages == PAGES

    def test_missing_pages_is_empty(self) -> None:
        file = FileWithPages.from_payload({"file": {"id": "F"}})
        assert file.pages == []

    def test_non_dict_payload_rejected(self) -> None:
        with pytest.raises(DecodeError, match="Expected a file record"):
            FileWithPages.from_payload(["not", "a", "file"])

    def test_to_dict_adds_pages_field(self) -> None:
        file = FileWithPages(file={"id": "F"}, pages=PAGES)
        assert file.to_dict() == {"id": "F", PAGES_FIELD: PAGES}


class TestFindPage:
    def test_found(self) -> None:
        assert find_page(PAGES, "p2") == {"id": "p2", "name": "Flows"}

    def test_absent_is_none(self) -> None:
        assert find_page(PAGES, "nope") is None

    def test_empty(self) -> None:
        assert find_page([], "p1") is None


class TestUnwrap:
    def test_envelope(self) -> None:
        assert unwrap({"commits": [1, 2]}, "commits") == [1, 2]

    def test_bare_payload_passes_through(self) -> None:
        assert unwrap([1, 2], "commits") == [1, 2]

    def test_dict_without_key_passes_through(self) -> None:
        assert unwrap({"sha": "abc"}, "commit") == {"sha": "abc"}
