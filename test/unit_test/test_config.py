import pytest

import treehash.intern.dbc as dbc
import treehash.intern.helper as h


def test_load_valid_config(tmp_path):
    config_file = tmp_path / "treehash.toml"
    config_file.write_text(
        '[hash]\nalgorithm = "SHA512"\nhash_names = true\nexclude = ["*.tmp", "*.bak;*.old"]\n'
        '[logging]\nlevel = "DEBUG"\n')
    config = h.load_toml_config(config_file)
    assert h.get_config_value(config, "hash", "algorithm") == "SHA512"
    assert h.get_config_value(config, "hash", "hash_names") is True
    assert h.get_config_value(config, "hash", "exclude") == ["*.tmp", "*.bak;*.old"]
    assert h.get_config_value(config, "logging", "level") == "DEBUG"
    assert h.get_config_value(config, "cli", "wait", True) is True


def test_schema_violations():
    for config in [
        {"unknown_section": {}},
        {"hash": {"hash_names": "yes"}},
        {"hash": {"exclude": "*.tmp"}},
        {"hash": {"name_encoding": "latin-1"}},
        {"logging": {"level": "VERBOSE"}},
    ]:
        with pytest.raises(dbc.ConfigError):
            h.validate_config(config)


def test_missing_config_file(tmp_path):
    with pytest.raises(dbc.ConfigError) as e:
        h.load_toml_config(tmp_path / "missing.toml")
    assert e.value.error_description["msg"] == "CONFIG_NOT_LOADED"
    assert e.value.exit_code == 12


def test_malformed_config_file(tmp_path):
    config_file = tmp_path / "broken.toml"
    config_file.write_text("[hash\nalgorithm = ")
    with pytest.raises(dbc.ConfigError):
        h.load_toml_config(config_file)


def test_max_path():
    assert h.MAX_PATH >= 260
    assert h.RESERVED_PATH_SUFFIX == 3
