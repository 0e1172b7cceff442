"""Recursive mapping merge."""

from typing import Any, Dict, Mapping


def deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Deep merge override into base (mutates and returns base).

    Nested mappings present on both sides are merged key by key; any other
    value from override replaces the one in base.
    """
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, Mapping):
            deep_merge(base[key], value)
        elif isinstance(value, Mapping):
            base[key] = deep_merge({}, value)
        else:
            base[key] = value
    return base
