import pytest

from snp_dists.config import DEFAULTS, load_config


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("")
    assert load_config(path) == DEFAULTS


def test_values_override_defaults(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("csv: true\ntable: iupac\nmax_seqs: 12\n")
    cfg = load_config(path)
    assert cfg["csv"] is True
    assert cfg["table"] == "iupac"
    assert cfg["max_seqs"] == 12
    assert cfg["corner"] is True


def test_unknown_key(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("colour: blue\n")
    with pytest.raises(ValueError, match="colour"):
        load_config(path)


def test_not_a_mapping(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("- csv\n")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)


def test_bad_ignore_char(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("ignore_char: '..'\n")
    with pytest.raises(ValueError, match="single one-byte character"):
        load_config(path)


def test_ignore_char_must_fit_in_a_byte(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text('ignore_char: "\\u20ac"\n')
    with pytest.raises(ValueError, match="one-byte"):
        load_config(path)
