"""
Configuration utility functions
"""

from pathlib import Path
from typing import Any

import yaml


def load_yaml(filepath: str | Path) -> dict[str, Any]:
    """
    Load a YAML mapping

    Raises:
        FileNotFoundError: If file doesn't exist
        yaml.YAMLError: If YAML is invalid

    Example:
        >>> config = load_yaml("config/providers/market_data.yaml")
        >>> config["coinbase"]["rest"]["base_url"]
        'https://api.exchange.coinbase.com'
    """
    path = Path(filepath)

    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {filepath}")

    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_yaml_safe(filepath: str | Path) -> dict[str, Any]:
    """Like load_yaml(), but an absent or invalid file yields {}"""
    try:
        return load_yaml(filepath)
    except (FileNotFoundError, yaml.YAMLError):
        return {}


def get_nested(config: dict[str, Any], dotted_key: str, default: Any = None) -> Any:
    """
    Look up "a.b.c" in nested dicts

    Example:
        >>> get_nested({"rest": {"retry": {"max_attempts": 3}}}, "rest.retry.max_attempts")
        3
    """
    node: Any = config
    for part in dotted_key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node
