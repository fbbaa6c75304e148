# snp_dists/engine.py

from typing import Optional

import numpy as np

from snp_dists.io import Alignment, EmptyInputError, LengthMismatchError
from snp_dists.logic import IGNORE_CHAR, distance
from snp_dists.registry import DEFAULT_TABLE, get_table


class DistanceEngine:
    """
    Computes the all-pairs SNP distance matrix of an alignment.

    The engine holds a read-only mismatch table and the ignore character;
    it keeps no other state, so one engine can serve any number of
    alignments.
    """

    def __init__(self, table: Optional[np.ndarray] = None, ignore_char: str = IGNORE_CHAR):
        self.table = get_table(DEFAULT_TABLE) if table is None else table
        if len(ignore_char) != 1 or ord(ignore_char) > 255:
            raise ValueError(f"ignore_char must be a single one-byte character, got '{ignore_char}'")
        self.ignore_char = ignore_char
        self.ignore_code = ord(ignore_char)

    def pair_distance(self, a, b) -> int:
        """
        Number of SNPs between two aligned sequences.

        Accepts strings or uint8 arrays. Equal residues and positions where
        either side is the ignore character never count.
        """
        if isinstance(a, str):
            return distance(a, b, self.table, self.ignore_char)
        a = np.asarray(a, dtype=np.uint8)
        b = np.asarray(b, dtype=np.uint8)
        return int(self._row(a, b[np.newaxis, :])[0])

    def _row(self, seq: np.ndarray, seqs: np.ndarray) -> np.ndarray:
        """Distances from one sequence to every row of seqs."""
        counted = (seqs != seq) & (seqs != self.ignore_code) & (seq != self.ignore_code)
        hits = self.table[seq[np.newaxis, :], seqs]
        return np.sum(hits * counted, axis=1, dtype=np.int64)

    def compute(self, alignment: Alignment) -> np.ndarray:
        """
        Computes the full N x N distance matrix.

        Every cell is filled, both (i, j) and (j, i) and the diagonal, so the
        result is symmetric with zeros on the diagonal.

        Args:
            alignment (Alignment): Sequences of one common length.

        Returns:
            np.ndarray: N x N matrix of SNP counts.

        Raises:
            EmptyInputError: The alignment has no sequences.
            LengthMismatchError: The sequences differ in length.
        """
        n = len(alignment)
        if n < 1:
            raise EmptyInputError("alignment contains no sequences")
        length = alignment.length
        for k, (name, seq) in enumerate(zip(alignment.names, alignment.sequences), 1):
            if len(seq) != length:
                raise LengthMismatchError(
                    f"sequence #{k} '{name}' has length {len(seq)} but expected {length}"
                )

        seqs = alignment.as_array()
        matrix = np.zeros((n, n), dtype=np.int64)
        for j in range(n):
            matrix[j, :] = self._row(seqs[j], seqs)
        return matrix
