"""Thread-safe writing of the query, PAF and target output files."""

from __future__ import annotations

import os
import threading
from typing import TextIO


class OutputWriter:
    """Writes data to three output files, each guarded by its own lock."""

    def __init__(
        self,
        query_path: str | os.PathLike[str],
        paf_path: str | os.PathLike[str],
        target_path: str | os.PathLike[str],
    ) -> None:
        opened: list[TextIO] = []
        try:
            for path in (query_path, paf_path, target_path):
                opened.append(open(path, "w", encoding="utf-8", newline=""))
        except OSError as exc:
            for handle in opened:
                handle.close()
            raise OSError("Can't open output file(s).") from exc

        self._query, self._paf, self._target = opened
        self._query_lock = threading.Lock()
        self._paf_lock = threading.Lock()
        self._target_lock = threading.Lock()

    def write_query(self, data: str) -> None:
        """Append ``data`` to the query output file."""
        with self._query_lock:
            self._query.write(data)

    def write_paf(self, data: str) -> None:
        """Append ``data`` to the PAF output file."""
        with self._paf_lock:
            self._paf.write(data)

    def write_target(self, data: str) -> None:
        """Append ``data`` to the target output file."""
        with self._target_lock:
            self._target.write(data)

    def close(self) -> None:
        """Flush and close all output files."""
        for handle in (self._query, self._paf, self._target):
            handle.close()

    def __enter__(self) -> OutputWriter:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()