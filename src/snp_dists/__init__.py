"""snp-dists: pairwise SNP distance matrix from a FASTA alignment."""

__version__ = "0.6.3"
EXENAME = "snp-dists"
GITHUB_URL = "https://github.com/tseemann/snp-dists"
