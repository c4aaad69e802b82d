"""Incremental JSON value framing over a byte stream.

abstract-cli writes whitespace-separated JSON documents to stdout, and the
pipe hands them over in arbitrarily sized chunks. :class:`JSONStreamDecoder`
buffers partial input, tracks string/escape state and bracket depth at the
byte level, and hands each syntactically closed top-level value to
:func:`json.loads`. Values come out in arrival order.

Scanning works on raw bytes: every structural character is ASCII and UTF-8
continuation bytes never are, so a multi-byte character split across two
chunks cannot be mistaken for structure.
"""

from __future__ import annotations

import json
from typing import Any

_WHITESPACE = frozenset(b" \t\r\n")
_OPEN = frozenset(b"{[")
_CLOSE = frozenset(b"}]")
_DELIMITERS = frozenset(b'{}[],:"') | _WHITESPACE
_QUOTE = ord('"')
_BACKSLASH = ord("\\")


class JSONStreamError(ValueError):
    """Malformed or truncated JSON in the stream."""


class JSONStreamDecoder:
    """Feed byte chunks, get back every JSON value that closed within them.

    Usage::

        decoder = JSONStreamDecoder()
        for chunk in chunks:
            for value in decoder.feed(chunk):
                ...
        trailing = decoder.close()
    """

    def __init__(self) -> None:
        self._buffer = bytearray()
        self._pos = 0
        self._start: int | None = None
        self._depth = 0
        self._in_string = False
        self._escape = False
        self._scalar = False
        self._closed = False
        self._error: JSONStreamError | None = None

    @property
    def pending(self) -> bool:
        """Whether a partial value is buffered."""
        return self._start is not None

    def feed(self, chunk: bytes) -> list[Any]:
        """Append *chunk* and return the values it completed, in order.

        Raises:
            JSONStreamError: A completed value is not valid JSON, or a
                stray closing bracket or separator appears at top level.
                When values completed earlier in the same chunk, they are
                returned first and the error is raised by the next call.
        """
        self._raise_deferred()
        if self._closed:
            raise JSONStreamError("feed() after close()")
        self._buffer += chunk
        values: list[Any] = []
        try:
            self._scan(values)
        except JSONStreamError as exc:
            if not values:
                raise
            self._error = exc
        return values

    def _scan(self, values: list[Any]) -> None:
        buf = self._buffer
        i = self._pos
        end = len(buf)

        while i < end:
            byte = buf[i]

            if self._start is None:
                if byte in _WHITESPACE:
                    i += 1
                    continue
                self._begin(i, byte)
                i += 1
                continue

            if self._in_string:
                if self._escape:
                    self._escape = False
                elif byte == _BACKSLASH:
                    self._escape = True
                elif byte == _QUOTE:
                    self._in_string = False
                    if self._depth == 0:
                        i += 1
                        values.append(self._emit(i))
                        continue
                i += 1
                continue

            if self._scalar:
                if byte in _DELIMITERS:
                    # The delimiter is rescanned as the start of what follows.
                    values.append(self._emit(i))
                    continue
                i += 1
                continue

            if byte == _QUOTE:
                self._in_string = True
            elif byte in _OPEN:
                self._depth += 1
            elif byte in _CLOSE:
                self._depth -= 1
                if self._depth == 0:
                    i += 1
                    values.append(self._emit(i))
                    continue
            i += 1

        self._compact(i)

    def close(self) -> list[Any]:
        """Signal end of stream.

        Returns a trailing bare scalar (e.g. ``42``) that only the end of
        input could terminate.

        Raises:
            JSONStreamError: A container or string is still open.
        """
        self._raise_deferred()
        self._closed = True
        if self._start is None:
            return []
        if self._scalar:
            return [self._emit(len(self._buffer))]
        preview = bytes(self._buffer[self._start : self._start + 40])
        msg = f"Unexpected end of JSON stream after {preview!r}"
        raise JSONStreamError(msg)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _raise_deferred(self) -> None:
        if self._error is not None:
            error, self._error = self._error, None
            raise error

    def _begin(self, index: int, byte: int) -> None:
        if byte in _CLOSE or byte in b",:":
            msg = f"Unexpected {chr(byte)!r} at top level of JSON stream"
            raise JSONStreamError(msg)
        self._start = index
        if byte in _OPEN:
            self._depth = 1
        elif byte == _QUOTE:
            self._in_string = True
        else:
            self._scalar = True

    def _emit(self, end: int) -> Any:
        assert self._start is not None
        raw = bytes(self._buffer[self._start : end])
        self._start = None
        self._depth = 0
        self._scalar = False
        self._pos = end
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise JSONStreamError(str(exc)) from exc

    def _compact(self, scanned: int) -> None:
        """Drop consumed bytes so the buffer holds at most one partial value."""
        cut = self._start if self._start is not None else scanned
        if cut:
            del self._buffer[:cut]
            if self._start is not None:
                self._start -= cut
        self._pos = scanned - cut
