"""Streaming multipart/form-data bodies.

Add-on packages and source archives can be large, so file parts are never
read into memory: the body is an iterator of chunks and the file handle is
open only while that part is being sent. The total length is computed from
file sizes up front so the request carries an exact Content-Length.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

__all__ = ["FieldPart", "FilePart", "MultipartBody"]

CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class FieldPart:
    """A plain text form field."""

    name: str
    value: str


@dataclass(frozen=True, slots=True)
class FilePart:
    """A file form field, streamed from disk."""

    name: str
    path: Path
    content_type: str = "application/octet-stream"

    @property
    def filename(self) -> str:
        return self.path.name


Part = FieldPart | FilePart


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\r", "%0D").replace("\n", "%0A")


@dataclass(frozen=True, slots=True)
class MultipartBody:
    parts: tuple[Part, ...]
    boundary: str

    @classmethod
    def of(cls, *parts: Part) -> MultipartBody:
        return cls(parts=parts, boundary=f"amo-release-{uuid4().hex}")

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    def _head(self, part: Part) -> bytes:
        lines = [f"--{self.boundary}"]
        if isinstance(part, FilePart):
            lines.append(
                f'Content-Disposition: form-data; name="{_quote(part.name)}"; '
                f'filename="{_quote(part.filename)}"'
            )
            lines.append(f"Content-Type: {part.content_type}")
        else:
            lines.append(f'Content-Disposition: form-data; name="{_quote(part.name)}"')
        return ("\r\n".join(lines) + "\r\n\r\n").encode("utf-8")

    def _tail(self) -> bytes:
        return f"--{self.boundary}--\r\n".encode("utf-8")

    def content_length(self) -> int:
        """Exact body size in bytes.

        Raises:
            OSError: If a file part cannot be stat'ed.
        """
        total = 0
        for part in self.parts:
            total += len(self._head(part))
            if isinstance(part, FilePart):
                total += part.path.stat().st_size
            else:
                total += len(part.value.encode("utf-8"))
            total += 2  # CRLF after the part content
        return total + len(self._tail())

    def iter_chunks(self) -> Iterator[bytes]:
        """Yield the encoded body, reading file parts chunk by chunk."""
        for part in self.parts:
            yield self._head(part)
            if isinstance(part, FilePart):
                with part.path.open("rb") as f:
                    while True:
                        chunk = f.read(CHUNK_SIZE)
                        if not chunk:
                            break
                        yield chunk
            else:
                yield part.value.encode("utf-8")
            yield b"\r\n"
        yield self._tail()
