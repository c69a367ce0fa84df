# a helper module for the rest of the code.

import json
import os
import platform
from pathlib import Path

import jsonschema
import toml
import treehash.intern.dbc as dbc

WINDOWS: bool = True if os.name == 'nt' or platform.system() == 'Windows' else False


def _platform_max_path() -> int:
    """
    Returns the platform's maximum path length. This is MAX_PATH (260) on Windows and PATH_MAX on POSIX systems.

    Returns:
        int: The maximum number of characters of a path.
    """
    if WINDOWS:
        return 260
    try:
        return os.pathconf("/", "PC_PATH_MAX")
    except (OSError, ValueError, AttributeError):
        return 4096


MAX_PATH: int = _platform_max_path()
"""The platform path-length ceiling. Longer paths are neither canonicalized nor checked for exclusion."""

RESERVED_PATH_SUFFIX: int = 3
"""Characters reserved for traversal suffixes. An input path may have at most MAX_PATH - 3 characters."""


def load_toml_config(config_file: Path) -> dict:
    """
    Load configuration from TOML file and validate it against the configuration schema.

    Args:
        config_file (Path): Path to the configuration file

    Returns:
        dict: Configuration dictionary

    Raises:
        ConfigError: If the file can't be read, is no valid TOML or violates the schema.
    """
    try:
        config = toml.load(config_file)
    except (OSError, toml.TomlDecodeError) as e:
        dbc.raise_error({"msg": "CONFIG_NOT_LOADED", "file": str(config_file), "reason": str(e)})
    validate_config(config, config_file)
    return config


def validate_config(config: dict, config_file: Path = None) -> None:
    """
    Validate a configuration dictionary against the schema.

    Args:
        config (dict): The configuration to validate.
        config_file (Path, optional): Where the configuration was read from, used in the error message.

    Raises:
        ConfigError: If validation fails.
    """
    try:
        jsonschema.validate(instance=config, schema=_schema)
    except jsonschema.exceptions.ValidationError as e:
        dbc.raise_error({"msg": "INVALID_CONFIG", "file": str(config_file), "error": e.message})


def get_config_value(config: dict, section: str, key: str, default=None):
    """
    Retrieves a value from a section of the configuration.

    Args:
        config (dict): The configuration dictionary.
        section (str): The name of the TOML table, e.g. "hash".
        key (str): The key in that table.
        default: Returned if the section or the key is missing.

    Returns:
        The configured value or the default.
    """
    return config.get(section, {}).get(key, default)


# Construct an absolute path to the schema for the configuration file and load it
def _load_schema(file_path):
    with open(file_path, 'r') as schema_file:
        return json.load(schema_file)


_schema_file_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
                                 "resources", "schema-def-for-config.json")
_schema = _load_schema(_schema_file_path)
