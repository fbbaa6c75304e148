#!/usr/bin/env python3
"""
Command-line interface for snp-dists.

Reads a FASTA alignment (plain or gzipped) and prints the pairwise SNP
distance matrix as TSV or CSV.
"""

import argparse
import sys
from pathlib import Path

import yaml

from snp_dists import EXENAME, GITHUB_URL, __version__
from snp_dists.config import DEFAULTS, load_config
from snp_dists.engine import DistanceEngine
from snp_dists.io import MatrixWriter, SnpDistsError, load_alignment
from snp_dists.registry import MISMATCH_TABLES, get_table


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=EXENAME,
        description="Pairwise SNP distance matrix from a FASTA alignment",
        usage=f"{EXENAME} [options] alignment.fasta[.gz] > matrix.tsv",
        epilog=GITHUB_URL,
    )
    parser.add_argument(
        "alignment",
        type=Path,
        help="FASTA alignment (can be gzipped)"
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"{EXENAME} {__version__}",
        help="Print version and exit"
    )
    parser.add_argument(
        "-q", dest="quiet", action="store_true", default=None,
        help="Quiet mode; do not print progress information"
    )
    parser.add_argument(
        "-a", dest="all_chars", action="store_true", default=None,
        help="Count all differences not just [AGTC]"
    )
    parser.add_argument(
        "-k", dest="keep_case", action="store_true", default=None,
        help="Keep case, don't uppercase all letters"
    )
    parser.add_argument(
        "-c", dest="csv", action="store_true", default=None,
        help="Output CSV instead of TSV"
    )
    parser.add_argument(
        "-b", dest="blank", action="store_true", default=None,
        help="Blank top left corner cell"
    )
    parser.add_argument(
        "--table",
        choices=sorted(MISMATCH_TABLES),
        default=None,
        help="Mismatch table (default: snp)"
    )
    parser.add_argument(
        "--max-seqs",
        type=int,
        default=None,
        help=f"Maximum number of sequences (default: {DEFAULTS['max_seqs']})"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with default settings"
    )
    return parser


def resolve_settings(args: argparse.Namespace) -> dict:
    """Merge defaults, the optional config file and command-line flags."""
    settings = dict(DEFAULTS)
    if args.config is not None:
        if not args.config.exists():
            sys.exit(f"ERROR: Configuration file not found: {args.config}")
        try:
            settings = load_config(args.config)
        except (OSError, ValueError, yaml.YAMLError) as e:
            sys.exit(f"ERROR: Could not load configuration: {e}")

    for key in ("quiet", "all_chars", "keep_case", "csv", "table", "max_seqs"):
        value = getattr(args, key)
        if value is not None:
            settings[key] = value
    if args.blank:
        settings["corner"] = False
    return settings


def main(argv=None):
    """Main CLI entry point."""
    args = build_arg_parser().parse_args(argv)
    settings = resolve_settings(args)

    if not settings["quiet"]:
        print(f"This is {EXENAME} {__version__}", file=sys.stderr)

    try:
        table = get_table(settings["table"])
    except KeyError as e:
        sys.exit(f"ERROR: {e.args[0]}")

    try:
        alignment = load_alignment(
            args.alignment,
            keep_case=settings["keep_case"],
            all_chars=settings["all_chars"],
            max_seqs=settings["max_seqs"],
            ignore_char=settings["ignore_char"],
        )
    except SnpDistsError as e:
        sys.exit(f"ERROR: {e}")

    if not settings["quiet"]:
        print(f"Read {len(alignment)} sequences of length {alignment.length}", file=sys.stderr)

    engine = DistanceEngine(table, ignore_char=settings["ignore_char"])
    try:
        matrix = engine.compute(alignment)
    except SnpDistsError as e:
        sys.exit(f"ERROR: {e}")

    sep = "," if settings["csv"] else "\t"
    writer = MatrixWriter(sys.stdout, sep=sep, corner=settings["corner"])
    writer.write(alignment.names, matrix)


if __name__ == "__main__":
    main()
