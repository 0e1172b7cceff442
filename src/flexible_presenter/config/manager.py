"""Two-tier configuration manager (packaged defaults, user, project override)."""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..utils.errors import ConfigError
from ..utils.logging import get_logger
from ..utils.merge import deep_merge
from .paths import get_defaults_path, get_project_config_path, get_user_config_path

logger = get_logger("config.manager")


def read_config_file(path: Path) -> Dict[str, Any]:
    """
    Read one YAML config file.

    Raises:
        ConfigError: If the file is missing, not valid YAML, or not a mapping
    """
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a mapping: {path}")
    return data


def load_config(config_path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load the full config tree.

    Packaged defaults are overridden by the user config, which is overridden by
    the project config. An explicit ``config_path`` replaces both user and
    project files.

    Returns:
        Configuration dictionary
    """
    config = read_config_file(get_defaults_path())

    if config_path is not None:
        deep_merge(config, read_config_file(Path(config_path)))
        logger.info(f"Loaded configuration from {config_path}")
        return config

    user_config_path = get_user_config_path()
    if user_config_path.exists():
        deep_merge(config, read_config_file(user_config_path))
        logger.info(f"Loaded user config from {user_config_path}")

    project_config_path = get_project_config_path()
    if project_config_path:
        deep_merge(config, read_config_file(project_config_path))
        logger.info(f"Loaded project config from {project_config_path}")

    return config


def get_scaffold_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the scaffold subsection (loads config when not given)."""
    if config is None:
        config = load_config()
    return config.get("scaffold", {})


def get_pagination_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the pagination subsection (loads config when not given)."""
    if config is None:
        config = load_config()
    return config.get("pagination", {})
