"""Indexed random access to nanopore and illumina sequence files."""

from __future__ import annotations

import os
import re
import threading
from collections.abc import Iterator
from typing import BinaryIO

from muchsalsa.concurrency import Job, ThreadPool, WaitGroup
from muchsalsa.registry import Registry

FASTA_HEADER = b">"
FASTQ_HEADER = b"@"
FASTQ_SEPARATOR = b"+"

_WHITESPACE = b" \t\n\v\f\r"
_ID_PREFIX = re.compile(r"[^ \t\n\v\f\r]*")


def is_fastq(filename: str | os.PathLike[str]) -> bool:
    """Tell whether a file is treated as FASTQ, judged by its extension.

    Everything except the extensions ``fa`` and ``fasta`` counts as FASTQ.
    """
    extension = os.fspath(filename).rpartition(".")[2]
    return extension not in ("fa", "fasta")


def clean_sequence_id(sequence_id: str) -> str:
    """Cut a sequence identifier at its first whitespace character."""
    match = _ID_PREFIX.match(sequence_id)
    return match.group() if match else ""


def _index_records(stream: BinaryIO, header: bytes, separator: bytes) -> Iterator[tuple[str, int, int]]:
    """Yield ``(id, offset, length)`` for each record in a FASTA or FASTQ stream.

    ``offset`` is where the sequence lines start and ``length`` is the number
    of bytes they span, line terminators included.
    """
    line = stream.readline()
    while line and not line.startswith(header):
        line = stream.readline()
    start = stream.tell()

    while line.startswith(header):
        sequence_id = clean_sequence_id(line[1:].decode("utf-8", errors="replace"))
        length = 0
        while True:
            line = stream.readline()
            if not line or line.startswith(separator):
                yield sequence_id, start, length
                start = stream.tell()
                break
            length += len(line)

        while line and not line.startswith(header):
            line = stream.readline()
            start = stream.tell()


def _read_sequence(stream: BinaryIO, position: tuple[int, int]) -> str:
    offset, length = position
    stream.seek(offset, os.SEEK_SET)
    data = stream.read(length)
    if len(data) != length:
        raise RuntimeError("Failed to read sequence.")
    data = data.split(b"\0", 1)[0]
    return data.translate(None, _WHITESPACE).decode("ascii", errors="replace")


class SequenceAccessor:
    """Access to nanopore and illumina sequences by their registered ids.

    Sequence retrieval is thread-safe; :meth:`build_index` must run first.
    """

    def __init__(
        self,
        thread_pool: ThreadPool,
        nanopore_path: str | os.PathLike[str],
        illumina_path: str | os.PathLike[str],
        registry_nanopore: Registry,
        registry_illumina: Registry,
    ) -> None:
        opened: list[BinaryIO] = []
        try:
            for path in (nanopore_path, illumina_path):
                opened.append(open(path, "rb"))
        except OSError as exc:
            for handle in opened:
                handle.close()
            raise OSError("Can't open sequence file(s).") from exc

        self._thread_pool = thread_pool
        self._nanopore_file, self._illumina_file = opened
        self._registry_nanopore = registry_nanopore
        self._registry_illumina = registry_illumina
        self._nanopore_is_fastq = is_fastq(nanopore_path)
        self._idx_nanopore: dict[int, tuple[int, int]] = {}
        self._idx_illumina: dict[int, tuple[int, int]] = {}
        self._nanopore_lock = threading.Lock()
        self._illumina_lock = threading.Lock()

    def build_index(self) -> None:
        """Index both sequence files in parallel on the thread pool."""
        wait_group = WaitGroup()
        errors: list[BaseException] = []

        def run(job: Job) -> None:
            try:
                job.get_param(1)()
            except BaseException as exc:  # reported to the caller after waiting
                errors.append(exc)
            finally:
                job.get_param(0).done()

        for task in (self._build_nanopore_index, self._build_illumina_index):
            wait_group.add(1)
            self._thread_pool.add_job(Job(run, wait_group, task))

        wait_group.wait()
        if errors:
            raise errors[0]

    def _build_nanopore_index(self) -> None:
        if self._nanopore_is_fastq:
            header, separator = FASTQ_HEADER, FASTQ_SEPARATOR
        else:
            header, separator = FASTA_HEADER, FASTA_HEADER
        with self._nanopore_lock:
            for sequence_id, offset, length in _index_records(self._nanopore_file, header, separator):
                self._idx_nanopore.setdefault(self._registry_nanopore[sequence_id], (offset, length))

    def _build_illumina_index(self) -> None:
        with self._illumina_lock:
            for sequence_id, offset, length in _index_records(self._illumina_file, FASTA_HEADER, FASTA_HEADER):
                self._idx_illumina.setdefault(self._registry_illumina[sequence_id], (offset, length))

    def get_nanopore_sequence(self, nanopore_id: int) -> str:
        """Return the nanopore sequence registered under ``nanopore_id``."""
        with self._nanopore_lock:
            return _read_sequence(self._nanopore_file, self._idx_nanopore[nanopore_id])

    def get_illumina_sequence(self, illumina_id: int) -> str:
        """Return the illumina sequence registered under ``illumina_id``."""
        with self._illumina_lock:
            return _read_sequence(self._illumina_file, self._idx_illumina[illumina_id])

    def close(self) -> None:
        """Close both sequence files."""
        self._nanopore_file.close()
        self._illumina_file.close()

    def __enter__(self) -> SequenceAccessor:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()