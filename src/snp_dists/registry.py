# snp_dists/registry.py
"""
Registry of mismatch tables that the command line and config can reference by name.
"""

from snp_dists.logic import build_snp_table, build_iupac_table

DEFAULT_TABLE = "snp"

MISMATCH_TABLES = {
    "snp": build_snp_table(),
    "iupac": build_iupac_table(),
}


def get_table(name: str):
    """Returns the named mismatch table, raising KeyError for unknown names."""
    try:
        return MISMATCH_TABLES[name]
    except KeyError:
        valid = ", ".join(sorted(MISMATCH_TABLES))
        raise KeyError(f"Unknown mismatch table '{name}' (choose from: {valid})") from None
