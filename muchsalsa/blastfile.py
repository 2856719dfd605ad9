"""Line-indexed random access to BLAST tabular files."""

from __future__ import annotations

import os
import threading
from typing import BinaryIO


def read_line(stream: BinaryIO) -> bytes | None:
    """Read one line from a binary stream, keeping its newline.

    Returns ``None`` once the stream is exhausted and nothing was read.
    """
    line = stream.readline()
    return line or None


class BlastFileAccessor:
    """Random access to the lines of a BLAST file by their byte offsets.

    Line retrieval is thread-safe.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        try:
            self._file: BinaryIO = open(path, "rb")
        except OSError as exc:
            raise OSError("Can't open blast file.") from exc
        self._lock = threading.Lock()
        self._offsets: list[int] = self._build_index()

    def _build_index(self) -> list[int]:
        offsets = []
        offset = self._file.tell()
        while read_line(self._file) is not None:
            offsets.append(offset)
            offset = self._file.tell()
        return offsets

    @property
    def line_offsets(self) -> list[int]:
        """Byte offsets at which each line of the file starts."""
        return list(self._offsets)

    @property
    def line_count(self) -> int:
        """Number of lines in the file."""
        return len(self._offsets)

    def get_line(self, offset: int) -> str:
        """Return the line starting at ``offset`` without its line terminator.

        An empty string is returned when nothing can be read at ``offset``.
        """
        with self._lock:
            self._file.seek(offset, os.SEEK_SET)
            raw = read_line(self._file)
        if raw is None:
            return ""
        return raw.decode("utf-8", errors="replace").removesuffix("\n")

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()

    def __enter__(self) -> BlastFileAccessor:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()