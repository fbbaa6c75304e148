# snp_dists/config.py
"""
Run settings for snp-dists.

Settings come from DEFAULTS, optionally overridden by a YAML file such as

    all_chars: false
    csv: true
    table: iupac
    max_seqs: 200000

and finally by command-line flags.
"""

from pathlib import Path
from typing import Any, Dict

import yaml

from snp_dists.io import MAX_SEQ
from snp_dists.logic import IGNORE_CHAR

DEFAULTS: Dict[str, Any] = {
    "quiet": False,
    "all_chars": False,
    "keep_case": False,
    "csv": False,
    "corner": True,
    "table": "snp",
    "max_seqs": MAX_SEQ,
    "ignore_char": IGNORE_CHAR,
}


def load_config(path) -> Dict[str, Any]:
    """
    Reads a YAML settings file and merges it over DEFAULTS.

    Args:
        path: Path to the YAML file.

    Returns:
        Dict[str, Any]: Complete settings.

    Raises:
        ValueError: If the file is not a mapping or holds unknown keys.
    """
    cfg = yaml.safe_load(Path(path).read_text()) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Configuration in {path} must be a mapping")
    unknown = sorted(set(cfg) - set(DEFAULTS))
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")

    settings = dict(DEFAULTS)
    settings.update(cfg)
    settings["ignore_char"] = str(settings["ignore_char"])
    if len(settings["ignore_char"]) != 1 or ord(settings["ignore_char"]) > 255:
        raise ValueError("ignore_char must be a single one-byte character")
    settings["max_seqs"] = int(settings["max_seqs"])
    return settings
