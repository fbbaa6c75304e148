import gzip
import re
import string
from typing import Iterator, List, Optional, TextIO, Tuple

import numpy as np

from snp_dists import EXENAME, __version__
from snp_dists.logic import IGNORE_CHAR

# IO module for snp-dists

MAX_SEQ = 100000
GZIP_MAGIC = b"\x1f\x8b"
NON_ACGT = re.compile(r"[^ACGT]")
# ASCII letters only, so each character stays exactly one byte
ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


class SnpDistsError(Exception):
    """Base class for errors that abort a run."""


class InputAccessError(SnpDistsError, OSError):
    """The alignment file cannot be opened or read."""


class LengthMismatchError(SnpDistsError, ValueError):
    """A sequence does not have the length of the first one."""


class CapacityExceededError(SnpDistsError, ValueError):
    """More sequences than the configured maximum."""


class EmptyInputError(SnpDistsError, ValueError):
    """The alignment holds no sequences."""


class FastaReader:
    """
    Iterator over the records of a FASTA file, plain or gzipped.

    Records are yielded lazily in file order and the reader can only be
    consumed once.

    Yields:
        Tuple[str, str]: (name, sequence)
    """

    def __init__(self, filename: str) -> None:
        """
        Opens the FASTA file.

        Args:
            filename (str): Path to a FASTA file, optionally gzip-compressed.

        Raises:
            InputAccessError: If the file cannot be opened.
        """
        self.filename = str(filename)
        try:
            with open(self.filename, "rb") as fh:
                compressed = fh.read(2) == GZIP_MAGIC
            # latin-1 keeps one character per byte
            if compressed:
                self.handle = gzip.open(self.filename, "rt", encoding="latin-1")
            else:
                self.handle = open(self.filename, "rt", encoding="latin-1")
        except OSError as e:
            raise InputAccessError(f"Could not open filename '{self.filename}'") from e
        self._next_name: Optional[str] = None
        self._done = False

    @staticmethod
    def _parse_name(header: str) -> str:
        parts = header[1:].split(maxsplit=1)
        return parts[0] if parts else ""

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return self

    def __next__(self) -> Tuple[str, str]:
        """
        Reads the next record.

        Returns:
            Tuple[str, str]: name, sequence

        Raises:
            StopIteration: If end of file is reached.
            InputAccessError: If the file cannot be read.
        """
        if self._done:
            raise StopIteration
        try:
            if self._next_name is None:
                for line in self.handle:
                    if line.startswith(">"):
                        self._next_name = self._parse_name(line)
                        break
                else:
                    raise StopIteration

            name, self._next_name = self._next_name, None
            chunks = []
            for line in self.handle:
                if line.startswith(">"):
                    self._next_name = self._parse_name(line)
                    break
                chunks.append("".join(line.split()))
            return name, "".join(chunks)
        except StopIteration:
            self.close()
            raise
        except Exception as e:
            self.close()
            raise InputAccessError(f"Error reading FASTA file '{self.filename}'") from e

    def close(self) -> None:
        """Closes the input file."""
        self._done = True
        self.handle.close()

    def __enter__(self):
        """Support for context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Close file when exiting context."""
        self.close()


class Alignment:
    """
    Named sequences that all share one length.
    """

    def __init__(self, names: List[str], sequences: List[str]) -> None:
        self.names = names
        self.sequences = sequences

    def __len__(self) -> int:
        return len(self.sequences)

    @property
    def length(self) -> int:
        """Alignment length L, taken from the first sequence."""
        return len(self.sequences[0]) if self.sequences else 0

    def as_array(self) -> np.ndarray:
        """Returns the sequences as an N x L matrix of byte codes."""
        data = "".join(self.sequences).encode("latin-1")
        return np.frombuffer(data, dtype=np.uint8).reshape(len(self), self.length)


def load_alignment(
    filename: str,
    *,
    keep_case: bool = False,
    all_chars: bool = False,
    max_seqs: int = MAX_SEQ,
    ignore_char: str = IGNORE_CHAR
) -> Alignment:
    """
    Reads every record of a FASTA alignment into memory.

    Sequences are uppercased unless keep_case is set, and anything other
    than A, C, G or T becomes ignore_char unless all_chars is set.

    Args:
        filename (str): Path to the FASTA file (can be gzipped).
        keep_case (bool): Leave letters in their original case.
        all_chars (bool): Count all differences, not just ACGT.
        max_seqs (int): Maximum number of sequences accepted.
        ignore_char (str): Character used to mask non-ACGT positions.

    Returns:
        Alignment: The loaded sequences.

    Raises:
        InputAccessError: File cannot be opened or read.
        LengthMismatchError: A sequence differs in length from the first.
        CapacityExceededError: More than max_seqs sequences.
        EmptyInputError: No sequences at all.
    """
    names: List[str] = []
    seqs: List[str] = []
    length = -1
    mask = ignore_char.replace("\\", r"\\")

    with FastaReader(filename) as reader:
        for name, seq in reader:
            # first sequence fixes the length
            if length < 0:
                length = len(seq)
            if len(seq) != length:
                raise LengthMismatchError(
                    f"sequence #{len(seqs) + 1} '{name}' has length {len(seq)} "
                    f"but expected {length}"
                )
            if len(seqs) >= max_seqs:
                raise CapacityExceededError(
                    f"{EXENAME} can only handle {max_seqs} sequences at most. "
                    f"Please raise max_seqs."
                )
            if not keep_case:
                seq = seq.translate(ASCII_UPPER)
            if not all_chars:
                seq = NON_ACGT.sub(mask, seq)
            names.append(name)
            seqs.append(seq)

    if not seqs:
        raise EmptyInputError("file contained no sequences")
    return Alignment(names, seqs)


def format_matrix(names: List[str], matrix: np.ndarray, sep: str = "\t",
                  corner: bool = True) -> Iterator[str]:
    """
    Yields the lines of a distance matrix as delimited text, without newlines.

    The header holds the corner label followed by every name; each row
    holds a name followed by its distances.
    """
    label = f"{EXENAME} {__version__}" if corner else ""
    yield label + "".join(f"{sep}{name}" for name in names)
    for name, row in zip(names, matrix):
        yield name + "".join(f"{sep}{int(d)}" for d in row)


class MatrixWriter:
    """
    Writes a distance matrix as TSV or CSV to an open text handle.
    """

    def __init__(self, handle: TextIO, sep: str = "\t", corner: bool = True) -> None:
        """
        Args:
            handle (TextIO): Destination, e.g. sys.stdout.
            sep (str): Column delimiter, tab or comma.
            corner (bool): Put the program name in the top left cell.
        """
        self.handle = handle
        self.sep = sep
        self.corner = corner

    def write(self, names: List[str], matrix: np.ndarray) -> None:
        """Writes the header line and one row per sequence."""
        for line in format_matrix(names, matrix, self.sep, self.corner):
            self.handle.write(line + "\n")
