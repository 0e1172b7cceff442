"""Configuration module: scaffold and pagination defaults."""

from typing import Any, Dict, Optional

from .manager import get_pagination_config, get_scaffold_config, load_config, read_config_file
from .paths import get_defaults_path, get_project_config_path, get_user_config_path

__all__ = [
    "load_config",
    "read_config_file",
    "get_scaffold_config",
    "get_pagination_config",
    "get_defaults_path",
    "get_user_config_path",
    "get_project_config_path",
    "paginator_defaults",
]


def paginator_defaults(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Keyword arguments for paginator constructors taken from configuration.

    Example:
        Paginator(items=rows, per_page=15, **paginator_defaults())
    """
    pagination = get_pagination_config(config)
    return {key: pagination[key] for key in ("path", "page_name") if key in pagination}
