#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file loading for the office2site CLI.

Config files hold the same settings as the command line, as a flat table
for site settings plus optional ``pptx`` and ``docx`` sub-tables::

    # office2site.toml
    output_dir = "site/docs"
    slides_mode = "viewer"

    [pptx]
    include_notes = false

TOML, YAML and JSON are accepted; ``pyproject.toml`` is read from its
``[tool.office2site]`` section.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import IO, Any, Callable, Dict, NamedTuple

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]

import yaml

from office2site.exceptions import ValidationError
from office2site.options import DocxOptions, PptxOptions, SiteOptions

NESTED_SECTIONS = {"pptx": PptxOptions, "docx": DocxOptions}


class _Format(NamedTuple):
    label: str
    binary: bool
    load: Callable[[IO[Any]], Any]
    error: type[Exception]


_FORMATS = {
    ".toml": _Format("TOML", True, tomllib.load, tomllib.TOMLDecodeError),
    ".yaml": _Format("YAML", False, yaml.safe_load, yaml.YAMLError),
    ".yml": _Format("YAML", False, yaml.safe_load, yaml.YAMLError),
    ".json": _Format("JSON", False, json.load, json.JSONDecodeError),
}


def _parse(config_path: Path, fmt: _Format) -> Any:
    if fmt.binary:
        with open(config_path, "rb") as f:
            return fmt.load(f)
    with open(config_path, "r", encoding="utf-8") as f:
        return fmt.load(f)


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a TOML, YAML, JSON or pyproject.toml file.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Settings table; empty for a pyproject.toml without ``[tool.office2site]``

    Raises
    ------
    argparse.ArgumentTypeError
        If the file is missing, unreadable, unparsable, not a table, or has an unknown extension

    Examples
    --------
    >>> config = load_config_file("office2site.toml")  # doctest: +SKIP
    >>> config.get("slides_mode")
    'viewer'

    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")
    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    fmt = _FORMATS.get(config_path.suffix.lower())
    if fmt is None:
        raise argparse.ArgumentTypeError(
            f"Unsupported config file format: {config_path.suffix.lower()}. Use .json, .toml, or .yaml"
        )

    try:
        config = _parse(config_path, fmt)
    except fmt.error as e:
        raise argparse.ArgumentTypeError(f"Invalid {fmt.label} in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    where = f"{fmt.label} config file {config_path}"
    if config_path.name.lower() == "pyproject.toml":
        config = config.get("tool", {}).get("office2site", {})
        where = f"[tool.office2site] in {config_path}"
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"{where} must hold a table, got {type(config).__name__}")
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries with deep merging.

    The override dictionary takes precedence over base for conflicting keys.
    Nested dictionaries are merged recursively, not replaced entirely.

    Examples
    --------
    >>> merge_configs({"pptx": {"include_notes": False}, "slides_mode": "viewer"}, {"pptx": {"a": 1}})
    {'pptx': {'include_notes': False, 'a': 1}, 'slides_mode': 'viewer'}

    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def build_site_options(config: Dict[str, Any]) -> SiteOptions:
    """Build :class:`SiteOptions` from a merged configuration dictionary.

    Raises
    ------
    ValidationError
        If a key is unknown or a value fails option validation.

    """
    values = dict(config)
    for section_name, options_class in NESTED_SECTIONS.items():
        section = values.get(section_name)
        if section is None:
            continue
        if not isinstance(section, dict):
            raise ValidationError(
                f"'{section_name}' must be a table, got {type(section).__name__}",
                parameter_name=section_name,
                parameter_value=section,
            )
        values[section_name] = options_class.from_mapping(section, section_name)

    return SiteOptions.from_mapping(values)
