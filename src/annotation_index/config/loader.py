"""Configuration loading with YAML parsing and validation."""

from pathlib import Path
from typing import Any

import pydantic_yaml
import yaml

from .schema import IndexConfig


def load_config(config_path: Path | str) -> IndexConfig:
    """
    Load and validate annotation index configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Validated IndexConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If config is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        yaml_content = f.read()

    return pydantic_yaml.parse_yaml_raw_as(IndexConfig, yaml_content)


def load_config_with_overrides(
    config_path: Path | str,
    overrides: dict[str, Any],
) -> IndexConfig:
    """
    Load config from YAML and apply dictionary overrides.

    Used by CLI flags that override config file values.

    Args:
        config_path: Path to YAML configuration file
        overrides: Values to override; dotted keys address nested fields
                   (e.g. "output.output_dir")

    Returns:
        Validated IndexConfig with overrides applied

    Raises:
        FileNotFoundError: If config file doesn't exist
        pydantic.ValidationError: If final config is invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    # Overrides are applied before validation; validators create output_dir
    with open(config_path, "r") as f:
        config_dict = yaml.safe_load(f) or {}

    for key, value in overrides.items():
        if "." in key:
            parts = key.split(".")
            target = config_dict
            for part in parts[:-1]:
                if target.get(part) is None:
                    target[part] = {}
                target = target[part]
            target[parts[-1]] = value
        else:
            config_dict[key] = value

    # Validate with overrides applied
    return IndexConfig.model_validate(config_dict)
