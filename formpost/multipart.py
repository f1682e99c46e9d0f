"""
In-memory multipart/form-data encoder.

Fields are encoded as soon as they are added; `finish()` appends the closing
delimiter and hands back the content type together with the whole body.
"""

from __future__ import annotations

import io
import logging
import os
import random
from collections.abc import Callable, Mapping
from typing import BinaryIO, Union

from .errors import BuilderConsumedError, MultipartIOError
from .utils import DEFAULT_CONTENT_TYPE, filename_from_path, guess_content_type

logger = logging.getLogger(__name__)

BOUNDARY_LEN = 29
DELIMITER_DASHES = 29
# A delimiter line is "--" followed by the boundary parameter.
PARAM_DASHES = DELIMITER_DASHES - 2
CHUNK_SIZE = 8192

BoundarySource = Callable[[], str]

_sysrandom = random.SystemRandom()


def random_boundary() -> str:
    """Return a fresh boundary token of BOUNDARY_LEN decimal digits."""
    return "".join(_sysrandom.choices("0123456789", k=BOUNDARY_LEN))


class TextField:
    """A named UTF-8 text value."""

    def __init__(self, name: str, value: str) -> None:
        self.name = name
        self.value = value

    def __repr__(self) -> str:
        return f"<TextField {self.name!r}>"


class FileField:
    """A file read from disk; filename and type are derived from the path."""

    def __init__(
        self,
        name: str,
        path: str | os.PathLike[str],
        content_type: str | None = None,
    ) -> None:
        self.name = name
        self.path = path
        self.content_type = content_type

    def __repr__(self) -> str:
        return f"<FileField {self.name!r} path={os.fspath(self.path)!r}>"


class StreamField:
    """Raw bytes copied from any readable binary source."""

    def __init__(
        self,
        name: str,
        stream: BinaryIO,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> None:
        self.name = name
        self.stream = stream
        self.filename = filename
        self.content_type = content_type

    def __repr__(self) -> str:
        return f"<StreamField {self.name!r} filename={self.filename!r}>"


Field = Union[TextField, FileField, StreamField]


class MultipartBuilder:
    """
    Accumulates form fields into a multipart/form-data body.

    Every ``add_*`` call mutates the builder and returns it, so calls chain:

        ctype, body = (
            MultipartBuilder()
            .add_text("msg", "hi")
            .add_file("upload", "report.pdf")
            .finish()
        )

    A builder is single-use. After ``finish()``, or after a source fails to
    read, the accumulated bytes are dropped and any further call raises
    BuilderConsumedError.

    Args:
        boundary_source: Callable returning the boundary token (default: 29 random digits)
        chunk_size: Read size used when copying stream sources
    """

    def __init__(
        self,
        boundary_source: BoundarySource | None = None,
        chunk_size: int = CHUNK_SIZE,
    ) -> None:
        self.boundary = (boundary_source or random_boundary)()
        self.chunk_size = chunk_size
        self._buffer = bytearray()
        self._has_written_field = False
        self._field_count = 0
        self._consumed = False

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={'-' * PARAM_DASHES}{self.boundary}"

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def field_count(self) -> int:
        return self._field_count

    def add(self, field: Field) -> MultipartBuilder:
        """Encode one field of any kind."""
        if isinstance(field, TextField):
            return self.add_text(field.name, field.value)
        if isinstance(field, FileField):
            return self.add_file(field.name, field.path, content_type=field.content_type)
        if isinstance(field, StreamField):
            return self.add_stream(
                field.name,
                field.stream,
                filename=field.filename,
                content_type=field.content_type,
            )
        raise TypeError(f"Unsupported field type: {type(field).__name__}")

    def add_text(self, name: str, text: str) -> MultipartBuilder:
        self._check_open()
        content = text.encode("utf-8")
        self._write_field_headers(self._field_header_bytes(name, None, None))
        self._buffer += content
        return self

    def add_file(
        self,
        name: str,
        path: str | os.PathLike[str],
        content_type: str | None = None,
    ) -> MultipartBuilder:
        """
        Add the contents of a file on disk.

        The filename sent is the last component of ``path``. Unless
        ``content_type`` is given it is guessed from the extension, falling
        back to application/octet-stream.
        """
        self._check_open()
        ctype = content_type or guess_content_type(path)
        filename = filename_from_path(path)
        try:
            fh = open(path, "rb")
        except OSError as exc:
            raise self._abort(name, exc) from exc
        with fh:
            return self.add_stream(name, fh, filename=filename, content_type=ctype)

    def add_stream(
        self,
        name: str,
        stream: BinaryIO,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> MultipartBuilder:
        """
        Copy a binary stream until EOF into a new field.

        A Content-Type line is always written so servers treat the part as a
        file; it defaults to application/octet-stream.
        """
        self._check_open()
        header = self._field_header_bytes(
            name, filename, content_type or DEFAULT_CONTENT_TYPE
        )
        self._write_field_headers(header)
        try:
            while True:
                chunk = stream.read(self.chunk_size)
                if chunk is None:
                    raise BlockingIOError(f"Stream for field {name!r} has no data ready")
                if not chunk:
                    break
                if isinstance(chunk, str):
                    raise TypeError(f"Stream for field {name!r} returned str, expected bytes")
                self._buffer += chunk
        # ValueError: read on a closed or detached stream
        except (OSError, ValueError) as exc:
            raise self._abort(name, exc) from exc
        except BaseException:
            self._discard()
            raise
        return self

    def finish(self) -> tuple[str, bytes]:
        """
        Close the body and return ``(content_type, body)``.

        Valid with zero fields; the body is then only the closing delimiter.
        """
        self._check_open()
        if self._has_written_field:
            self._buffer += b"\r\n"
        self._buffer += f"{'-' * DELIMITER_DASHES}{self.boundary}--\r\n".encode("ascii")
        body = bytes(self._buffer)
        self._discard()
        logger.debug(
            "Built multipart body: %d field(s), %d bytes", self._field_count, len(body)
        )
        return self.content_type, body

    def _check_open(self) -> None:
        if self._consumed:
            raise BuilderConsumedError("Multipart builder has already been consumed")

    def _discard(self) -> None:
        self._buffer = bytearray()
        self._consumed = True

    def _abort(self, name: str, exc: OSError | ValueError) -> MultipartIOError:
        self._discard()
        logger.debug("Aborting multipart build at field %r: %s", name, exc)
        return MultipartIOError(f"Failed to read field {name!r}: {exc}")

    def _field_header_bytes(
        self, name: str, filename: str | None, content_type: str | None
    ) -> bytes:
        """Delimiter line plus header block for the next field; the buffer is untouched."""
        delimiter = f"{'-' * DELIMITER_DASHES}{self.boundary}\r\n"
        if self._has_written_field:
            delimiter = "\r\n" + delimiter
        header = f'Content-Disposition: form-data; name="{name}"'
        if filename is not None:
            header += f'; filename="{filename}"'
        if content_type is not None:
            header += f"\r\nContent-Type: {content_type}"
        return delimiter.encode("ascii") + f"{header}\r\n\r\n".encode("utf-8")

    def _write_field_headers(self, header: bytes) -> None:
        self._buffer += header
        self._has_written_field = True
        self._field_count += 1


def build_multipart(
    data: Mapping[str, str] | None,
    files: Mapping[str, bytes | tuple[str, bytes, str | None] | os.PathLike[str]] | None = None,
    boundary_source: BoundarySource | None = None,
) -> tuple[str, bytes]:
    """
    Build a multipart/form-data body in one call.
    Text fields from `data` come first, then `files`, whose values can be
    bytes, (filename, bytes, content_type|None) or a filesystem path.
    """
    builder = MultipartBuilder(boundary_source=boundary_source)
    if data:
        for k, v in data.items():
            builder.add_text(k, v)
    for field, val in (files or {}).items():
        if isinstance(val, (bytes, bytearray)):
            builder.add_stream(field, io.BytesIO(val), filename=field)
        elif isinstance(val, os.PathLike):
            builder.add_file(field, val)
        else:
            filename, content, ctype = val
            builder.add_stream(field, io.BytesIO(content), filename=filename, content_type=ctype)
    return builder.finish()
