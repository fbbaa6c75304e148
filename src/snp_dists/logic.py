"""
Low-level residue logic for snp-dists.

Includes the mismatch lookup tables (plain ACGT and full IUPAC),
the classify lookup and the pairwise SNP distance function.

These functions are stateless and pure.
"""

from typing import Union

import numpy as np


BASES       = ['A', 'C', 'G', 'T']
IGNORE_CHAR = '.'
# Extra ambiguity pairs that count as a SNP in the reference table
SNP_EXTRA_PAIRS = [('W', 'T')]

IUPAC_CODES = {
    'A': 'A', 'C': 'C', 'G': 'G', 'T': 'T', 'U': 'T',
    'R': 'AG', 'Y': 'CT', 'S': 'CG', 'W': 'AT', 'K': 'GT', 'M': 'AC',
    'B': 'CGT', 'D': 'AGT', 'H': 'ACT', 'V': 'ACG',
    'N': 'ACGT',
}

Residue = Union[str, int]


def _code(residue: Residue) -> int:
    """Byte code of a one-character string, or the int itself."""
    if isinstance(residue, str):
        return ord(residue) & 0xFF
    return int(residue) & 0xFF


def _empty_table() -> np.ndarray:
    return np.zeros((256, 256), dtype=np.uint8)


def _freeze(table: np.ndarray) -> np.ndarray:
    table.setflags(write=False)
    return table


def build_snp_table() -> np.ndarray:
    """
    Builds the reference mismatch table.

    Every cell defaults to 0. Distinct pairs of A, C, G and T are 1,
    as are the handful of ambiguity pairs in SNP_EXTRA_PAIRS.
    Any other ambiguity code never counts.

    Returns:
        np.ndarray: Read-only 256x256 uint8 matrix.
    """
    table = _empty_table()
    for x in BASES:
        for y in BASES:
            if x != y:
                table[ord(x), ord(y)] = 1
    for x, y in SNP_EXTRA_PAIRS:
        table[ord(x), ord(y)] = table[ord(y), ord(x)] = 1
    return _freeze(table)


def build_iupac_table() -> np.ndarray:
    """
    Builds a mismatch table from the full IUPAC nucleotide alphabet.

    Two codes count as a SNP only when the sets of bases they stand for
    are disjoint, so W (A/T) against C is a SNP but W against T is not.
    Gaps and characters outside IUPAC_CODES never count.

    Returns:
        np.ndarray: Read-only 256x256 uint8 matrix.
    """
    table = _empty_table()
    for x, xs in IUPAC_CODES.items():
        for y, ys in IUPAC_CODES.items():
            if not set(xs) & set(ys):
                table[ord(x), ord(y)] = 1
    return _freeze(table)


def classify(table: np.ndarray, a: Residue, b: Residue) -> int:
    """
    Looks up whether residues a and b count as a SNP.

    Args:
        table (np.ndarray): A 256x256 mismatch table.
        a (Residue): One-character string or byte code.
        b (Residue): One-character string or byte code.

    Returns:
        int: 1 for a SNP, 0 otherwise.
    """
    return int(table[_code(a), _code(b)])


def distance(a: str, b: str, table: np.ndarray, ignore_char: str = IGNORE_CHAR) -> int:
    """
    Counts SNPs between two equal-length aligned sequences.

    Positions where either sequence holds ignore_char are skipped.

    Args:
        a (str): First sequence.
        b (str): Second sequence.
        table (np.ndarray): Mismatch table used to weight differences.
        ignore_char (str): Placeholder for positions with no usable call.

    Returns:
        int: Number of SNP positions.
    """
    diff = 0
    for x, y in zip(a, b):
        if x != y and x != ignore_char and y != ignore_char:
            diff += classify(table, x, y)
    return diff
