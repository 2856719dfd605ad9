"""BLAST file access, FASTA/FASTQ indexing, id registries and threading helpers for read assembly."""

__version__ = "0.1.0"

__all__ = [
    "blastfile",
    "concurrency",
    "output",
    "registry",
    "sequences",
    "util",
]