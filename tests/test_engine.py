import numpy as np
import pytest

from snp_dists.engine import DistanceEngine
from snp_dists.io import Alignment, EmptyInputError, LengthMismatchError
from snp_dists.logic import distance
from snp_dists.registry import get_table


def make_alignment(records):
    return Alignment(list(records), list(records.values()))


def test_three_sequences():
    aln = make_alignment({"s1": "ACGT", "s2": "ACGA", "s3": "ACGT"})
    matrix = DistanceEngine().compute(aln)
    expected = np.array([
        [0, 1, 0],
        [1, 0, 1],
        [0, 1, 0],
    ])
    assert (matrix == expected).all()


def test_ignore_char_excluded():
    aln = make_alignment({"s1": "AC.T", "s2": "ACGT"})
    assert DistanceEngine().compute(aln)[0, 1] == 0


def test_all_positions_differ():
    aln = make_alignment({"s1": "ACGT", "s2": "TGCA"})
    assert DistanceEngine().compute(aln)[0, 1] == 4


def test_all_ignored_sequence():
    aln = make_alignment({"s1": "....", "s2": "ACGT", "s3": "TTTT"})
    matrix = DistanceEngine().compute(aln)
    assert (matrix[0] == 0).all()
    assert (matrix[:, 0] == 0).all()


def test_matrix_properties():
    rng = np.random.default_rng(7)
    alphabet = np.array(list("ACGT.NW"))
    seqs = ["".join(rng.choice(alphabet, size=60)) for _ in range(8)]
    aln = Alignment([f"s{i}" for i in range(8)], seqs)
    for name in ("snp", "iupac"):
        table = get_table(name)
        matrix = DistanceEngine(table).compute(aln)
        assert matrix.shape == (8, 8)
        assert (np.diagonal(matrix) == 0).all()
        assert (matrix == matrix.T).all()
        assert (matrix <= aln.length).all()
        for i in range(8):
            for j in range(8):
                assert matrix[i, j] == distance(seqs[i], seqs[j], table)


def test_equal_residues_never_count():
    # a table that flags everything still gives zero for identical sequences
    table = np.ones((256, 256), dtype=np.uint8)
    engine = DistanceEngine(table)
    aln = make_alignment({"s1": "ACNW", "s2": "ACNW"})
    assert (engine.compute(aln) == 0).all()
    assert engine.pair_distance("ACNW", "ACNW") == 0


def test_pair_distance_accepts_arrays():
    engine = DistanceEngine()
    a = np.frombuffer(b"ACGT", dtype=np.uint8)
    b = np.frombuffer(b"TGCA", dtype=np.uint8)
    assert engine.pair_distance(a, b) == 4
    assert engine.pair_distance("ACGT", "ACGA") == 1


def test_custom_ignore_char():
    engine = DistanceEngine(ignore_char="-")
    aln = make_alignment({"s1": "AC-T", "s2": "ACGA"})
    assert engine.compute(aln)[0, 1] == 1


def test_single_sequence():
    matrix = DistanceEngine().compute(make_alignment({"only": "ACGT"}))
    assert matrix.tolist() == [[0]]


def test_empty_alignment():
    with pytest.raises(EmptyInputError):
        DistanceEngine().compute(Alignment([], []))


def test_unequal_lengths():
    with pytest.raises(LengthMismatchError, match="'s2' has length 3 but expected 4"):
        DistanceEngine().compute(make_alignment({"s1": "ACGT", "s2": "ACG"}))


def test_input_not_mutated():
    records = {"s1": "ACGT", "s2": "TGCA"}
    aln = make_alignment(records)
    DistanceEngine().compute(aln)
    assert aln.sequences == ["ACGT", "TGCA"]
    assert aln.names == ["s1", "s2"]


def test_ignore_char_must_fit_in_a_byte():
    with pytest.raises(ValueError, match="one-byte"):
        DistanceEngine(ignore_char="€")
    with pytest.raises(ValueError, match="one-byte"):
        DistanceEngine(ignore_char="..")
