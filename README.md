# muchsalsa

Building blocks for assembling long nanopore reads with the help of short
illumina reads: random access to BLAST tabular output and to FASTA/FASTQ
sequence files, compact integer ids for read names, and small threading
helpers to do the work in parallel.

## Modules

- `muchsalsa.blastfile`
  - `BlastFileAccessor(path)` opens a BLAST file and indexes the byte offset
    of every line. `line_offsets` (a list) and `line_count` are properties;
    `get_line(offset)` returns the line starting at that offset without its
    trailing `\n`, or `""` if nothing can be read there. Retrieval is
    thread-safe. Raises `OSError("Can't open blast file.")` if the file
    cannot be opened. Usable as a context manager; `close()` closes the file.
  - `read_line(stream)` reads one line, newline included, from a binary
    stream and returns `None` at end of file.
- `muchsalsa.sequences`
  - `SequenceAccessor(thread_pool, nanopore_path, illumina_path,
    registry_nanopore, registry_illumina)` opens both sequence files.
    `build_index()` indexes them in parallel on the given `ThreadPool`,
    registering every record id in the matching `Registry`.
    `get_nanopore_sequence(id)` and `get_illumina_sequence(id)` return the
    sequence with all whitespace removed; an unknown id raises `KeyError`.
    The nanopore file is read as FASTQ unless its extension is exactly `fa`
    or `fasta`; the illumina file is always read as FASTA. Usable as a
    context manager.
  - `is_fastq(filename)` applies that extension rule.
  - `clean_sequence_id(sequence_id)` cuts an id at its first whitespace.
- `muchsalsa.registry` – `Registry` hands out consecutive integers, starting
  at 0, for identifiers in order of first lookup (`registry[name]`). It
  supports `len()`, `in` and `clear()`, which restarts numbering at 0.
  Lookups are thread-safe.
- `muchsalsa.concurrency`
  - `Job(fn, *args)` wraps a function that is called with the job itself;
    `get_param(idx)` returns the stored arguments. A job without a function
    is falsy.
  - `ThreadPool(thread_count)` runs queued jobs on worker threads
    (`add_job(job)`). `shutdown()`, also called on leaving a `with` block,
    finishes all queued jobs before stopping. Exceptions raised by jobs are
    logged, not propagated.
  - `WaitGroup` with `add(n)`, `done()`, `wait()` and a `pending` property
    blocks a caller until all added jobs are done; it can be reused.
- `muchsalsa.output` – `OutputWriter(query_path, paf_path, target_path)`
  writes text to three output files with `write_query`, `write_paf` and
  `write_target`, each guarded by its own lock. Usable as a context manager.
- `muchsalsa.util` – `swap_if`, `reverse_if` and `exchange_if` return their
  input swapped, reversed or replaced when the predicate holds.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from muchsalsa.blastfile import BlastFileAccessor
from muchsalsa.concurrency import ThreadPool
from muchsalsa.registry import Registry
from muchsalsa.sequences import SequenceAccessor

nanopore_ids = Registry()
illumina_ids = Registry()

with BlastFileAccessor("matches.blast") as blast:
    for offset in blast.line_offsets:
        fields = blast.get_line(offset).split("\t")
        print(nanopore_ids[fields[5]], illumina_ids[fields[0]])

with ThreadPool(2) as pool, SequenceAccessor(
    pool, "reads.fastq", "contigs.fa", nanopore_ids, illumina_ids
) as sequences:
    sequences.build_index()
    print(sequences.get_nanopore_sequence(0))
```

Registries hand out identifiers in order of first use:

```python
from muchsalsa.registry import Registry

ids = Registry()
ids["read_a"]  # 0
ids["read_b"]  # 1
ids["read_a"]  # 0
```

## What this package does not do

There is no command-line program. The package does not interpret BLAST
lines as matches, build read graphs or assemble sequences; it provides the
file access, id mapping and threading pieces such a pipeline is built from.