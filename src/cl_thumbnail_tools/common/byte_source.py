"""Adapters that turn file paths, streams and buffers into one readable source.

The thumbnail pipeline only ever reads from a binary stream. Each adapter
owns the lifetime of whatever it opens: files are closed when the ``open()``
context exits, caller supplied streams are left open for the caller.
"""

import io
import os
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from pathlib import Path
from typing import BinaryIO, Protocol, runtime_checkable

from typing_extensions import override

from .errors import InvalidArgumentError, NotFoundError


@runtime_checkable
class ByteSource(Protocol):
    """Anything that can hand out a readable binary stream."""

    def open(self) -> AbstractContextManager[BinaryIO]: ...

    def describe(self) -> str: ...


class FileByteSource:
    def __init__(self, path: str | os.PathLike[str]):
        if path is None or not str(path):
            raise InvalidArgumentError("'path' cannot be empty")
        self.path: Path = Path(path)
        if not self.path.is_file():
            raise NotFoundError(str(self.path))

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        try:
            f = self.path.open("rb")
        except FileNotFoundError as exc:
            # Removed between construction and read.
            raise NotFoundError(str(self.path)) from exc
        with f:
            yield f

    def describe(self) -> str:
        return f"file {self.path}"

    @override
    def __repr__(self) -> str:
        return f"FileByteSource({str(self.path)!r})"


class StreamByteSource:
    """Wraps a caller owned binary stream; the stream is never closed here."""

    def __init__(self, stream: BinaryIO):
        if stream is None:
            raise InvalidArgumentError("'stream' cannot be None")
        if not callable(getattr(stream, "read", None)):
            raise InvalidArgumentError(
                f"'stream' must be a readable binary stream, got {type(stream).__name__}"
            )
        self.stream: BinaryIO = stream

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        seekable = getattr(self.stream, "seekable", None)
        if callable(seekable) and seekable() and self.stream.tell() == 0:
            yield self.stream
            return
        # Pillow seeks to 0 while identifying the format, so anything not
        # starting at byte 0 is copied from the current position.
        with io.BytesIO(self.stream.read()) as buffered:
            yield buffered

    def describe(self) -> str:
        return f"stream {type(self.stream).__name__}"


class BufferByteSource:
    def __init__(self, data: bytes | bytearray | memoryview):
        if data is None:
            raise InvalidArgumentError("'data' cannot be None")
        self.data: bytes = bytes(data)

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        with io.BytesIO(self.data) as buffer:
            yield buffer

    def describe(self) -> str:
        return f"buffer of {len(self.data)} bytes"


SourceLike = str | os.PathLike[str] | bytes | bytearray | memoryview | BinaryIO | ByteSource


def as_byte_source(source: SourceLike | None) -> ByteSource:
    """Pick the adapter matching ``source``'s type.

    Raises:
        InvalidArgumentError: If source is None, an empty path, or of an
            unsupported type
        NotFoundError: If source is a path that does not exist
    """
    if source is None:
        raise InvalidArgumentError("'source' cannot be None")
    if isinstance(source, (FileByteSource, StreamByteSource, BufferByteSource)):
        return source
    if isinstance(source, (str, os.PathLike)):
        return FileByteSource(source)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return BufferByteSource(source)
    if callable(getattr(source, "read", None)):
        return StreamByteSource(source)  # pyright: ignore[reportArgumentType]
    if isinstance(source, ByteSource):
        return source
    raise InvalidArgumentError(f"Unsupported image source type: {type(source).__name__}")
