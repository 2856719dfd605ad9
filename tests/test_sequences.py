import pytest

from muchsalsa.concurrency import ThreadPool
from muchsalsa.registry import Registry
from muchsalsa.sequences import SequenceAccessor, clean_sequence_id, is_fastq


@pytest.fixture
def pool():
    with ThreadPool(2) as thread_pool:
        yield thread_pool


def _accessor(pool, tmp_path, nanopore_name, nanopore_text, illumina_text):
    nanopore = tmp_path / nanopore_name
    illumina = tmp_path / "illumina.fa"
    nanopore.write_bytes(nanopore_text.encode())
    illumina.write_bytes(illumina_text.encode())
    reg_n, reg_i = Registry(), Registry()
    accessor = SequenceAccessor(pool, nanopore, illumina, reg_n, reg_i)
    accessor.build_index()
    return accessor, reg_n, reg_i


@pytest.mark.parametrize(
    "name, expected",
    [
        ("reads.fa", False),
        ("reads.fasta", False),
        ("reads.fq", True),
        ("reads.fastq", True),
        ("reads", True),
        ("dir.fa/reads", True),
    ],
)
def test_is_fastq(name, expected):
    assert is_fastq(name) is expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("read1 some description\n", "read1"),
        ("read2\tmore", "read2"),
        ("read3\n", "read3"),
        ("plain", "plain"),
        (" leading", ""),
    ],
)
def test_clean_sequence_id(raw, expected):
    assert clean_sequence_id(raw) == expected


def test_fasta_sequences_round_trip(pool, tmp_path):
    nanopore = "junk line\n>n1 desc\nACGT\nGGCC\n>n2\nTTTT\n"
    illumina = ">i1\nAAAA\nCC\n>i2 x\nGATTACA"
    accessor, reg_n, reg_i = _accessor(pool, tmp_path, "nano.fasta", nanopore, illumina)
    with accessor:
        assert accessor.get_nanopore_sequence(reg_n["n1"]) == "ACGTGGCC"
        assert accessor.get_nanopore_sequence(reg_n["n2"]) == "TTTT"
        assert accessor.get_illumina_sequence(reg_i["i1"]) == "AAAACC"
        assert accessor.get_illumina_sequence(reg_i["i2"]) == "GATTACA"


def test_ids_registered_in_file_order(pool, tmp_path):
    accessor, reg_n, reg_i = _accessor(
        pool, tmp_path, "nano.fa", ">first\nAC\n>second\nGT\n", ">only\nTT\n"
    )
    with accessor:
        assert len(reg_n) == 2
        assert reg_n["first"] == 0
        assert reg_n["second"] == 1
        assert len(reg_i) == 1


def test_fastq_sequences(pool, tmp_path):
    nanopore = "@q1 info\nACGT\nAC\n+\nIIIIII\n@q2\nGGGG\n+q2\nJJJJ\n"
    accessor, reg_n, _ = _accessor(pool, tmp_path, "nano.fq", nanopore, ">i\nA\n")
    with accessor:
        assert accessor.get_nanopore_sequence(reg_n["q1"]) == "ACGTAC"
        assert accessor.get_nanopore_sequence(reg_n["q2"]) == "GGGG"
        assert len(reg_n) == 2


def test_crlf_line_endings_are_stripped(pool, tmp_path):
    accessor, reg_n, reg_i = _accessor(
        pool, tmp_path, "nano.fa", ">n\r\nAC\r\nGT\r\n", ">i\r\nTT\r\n"
    )
    with accessor:
        assert accessor.get_nanopore_sequence(reg_n["n"]) == "ACGT"
        assert accessor.get_illumina_sequence(reg_i["i"]) == "TT"


def test_duplicate_id_keeps_first_record(pool, tmp_path):
    accessor, reg_n, _ = _accessor(pool, tmp_path, "nano.fa", ">d\nAAA\n>d\nCCC\n", ">i\nA\n")
    with accessor:
        assert accessor.get_nanopore_sequence(reg_n["d"]) == "AAA"


def test_unknown_id_raises_key_error(pool, tmp_path):
    accessor, _, _ = _accessor(pool, tmp_path, "nano.fa", ">n\nAC\n", ">i\nGT\n")
    with accessor:
        with pytest.raises(KeyError):
            accessor.get_nanopore_sequence(99)
        with pytest.raises(KeyError):
            accessor.get_illumina_sequence(99)


def test_empty_files_give_empty_index(pool, tmp_path):
    accessor, reg_n, reg_i = _accessor(pool, tmp_path, "nano.fa", "", "")
    with accessor:
        assert len(reg_n) == 0
        assert len(reg_i) == 0
        with pytest.raises(KeyError):
            accessor.get_nanopore_sequence(0)


def test_missing_file_raises(pool, tmp_path):
    existing = tmp_path / "illumina.fa"
    existing.write_text(">i\nA\n")
    with pytest.raises(OSError, match="Can't open sequence file"):
        SequenceAccessor(pool, tmp_path / "missing.fa", existing, Registry(), Registry())


def test_repeated_reads_are_stable(pool, tmp_path):
    accessor, reg_n, reg_i = _accessor(pool, tmp_path, "nano.fa", ">a\nAC\n>b\nGT\n", ">x\nCC\n")
    with accessor:
        first = [accessor.get_nanopore_sequence(reg_n[name]) for name in ("a", "b", "a")]
        assert first == ["AC", "GT", "AC"]
        assert accessor.get_illumina_sequence(reg_i["x"]) == accessor.get_illumina_sequence(reg_i["x"])