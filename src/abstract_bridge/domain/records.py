"""Result records composed from the tool's JSON payloads.

Domain records (projects, files, pages, layers, collections) are passed
through as plain dicts. Only the composed file result gets its own type.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from abstract_bridge.domain.errors import DecodeError

PAGES_FIELD = "_pages"


class FileWithPages(BaseModel):
    """A file record together with the page list the tool returned for it."""

    model_config = {"frozen": True}

    file: dict[str, Any]
    pages: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_payload(cls, payload: Any) -> FileWithPages:
        """Split a ``file`` command payload into the file record and its pages.

        Accepts the ``{"file": ..., "pages": [...]}`` envelope as well as a
        bare file record carrying ``pages`` inline.
        """
        if not isinstance(payload, dict):
            msg = f"Expected a file record, got {type(payload).__name__}"
            raise DecodeError(msg)
        pages = payload.get("pages") or []
        file = payload.get("file")
        if not isinstance(file, dict):
            file = {key: value for key, value in payload.items() if key != "pages"}
        return cls(file=file, pages=pages)

    def to_dict(self) -> dict[str, Any]:
        """Flatten to the file record plus a derived ``_pages`` field."""
        return {**self.file, PAGES_FIELD: self.pages}


def find_page(pages: list[dict[str, Any]], page_id: str) -> dict[str, Any] | None:
    """Return the page whose ``id`` equals *page_id*, or None."""
    for page in pages:
        if page.get("id") == page_id:
            return page
    return None


def unwrap(payload: Any, key: str) -> Any:
    """Return ``payload[key]`` when *payload* is an envelope holding *key*, else *payload*."""
    if isinstance(payload, dict) and key in payload:
        return payload[key]
    return payload
