"""
get-response layered configuration.

Each config name (currently only ``theme``) resolves in three layers:

1. ``get_response/config/<name>.yaml`` shipped with the package
2. the ``<name>:`` section of a project file (``.get-response.yaml``,
   ``.get-response.yml`` or ``.get-response/config.yaml``)
3. ``GET_RESPONSE_<NAME>_<KEY>`` environment variables
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger

CONFIG_DIR = Path(__file__).parent

PROJECT_CONFIG_PATHS = [
    ".get-response.yaml",
    ".get-response.yml",
    ".get-response/config.yaml",
]

ENV_PREFIX = "GET_RESPONSE_"


def _read_mapping(path: Path) -> Dict[str, Any]:
    """Parse a YAML mapping; unreadable, invalid or non-mapping files count as empty."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {path}: {e}")
        return {}

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {path}: top level is not a mapping")
        return {}
    return data


def _deep_merge(base: Dict, override: Dict) -> Dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def find_project_config(root: Path) -> Optional[Path]:
    """First project config file under ``root``, if any."""
    for rel_path in PROJECT_CONFIG_PATHS:
        candidate = root / rel_path
        if candidate.is_file():
            return candidate
    return None


def _coerce_env_value(value: str) -> Any:
    # "2" -> 2, "true" -> True, "bold blue" stays a string
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError:
        return value
    return parsed if isinstance(parsed, (bool, int, float)) else value


class ConfigLoader:
    """Resolves and caches named configs. Class-level, like a module singleton."""

    _cache: Dict[str, Dict[str, Any]] = {}
    _project_root: Optional[Path] = None

    @classmethod
    def set_project_root(cls, path: Path):
        """Look for project config files under ``path`` instead of the cwd."""
        cls._project_root = Path(path)
        cls._cache.clear()

    @classmethod
    def load(cls, config_name: str) -> Dict[str, Any]:
        """
        Resolve ``config_name`` through all layers.

        Returns:
            The merged mapping; empty if no layer defines anything
        """
        if config_name not in cls._cache:
            cls._cache[config_name] = cls._resolve(config_name)
        return cls._cache[config_name]

    @classmethod
    def _resolve(cls, config_name: str) -> Dict[str, Any]:
        config = _read_mapping(CONFIG_DIR / f"{config_name}.yaml")

        project_file = find_project_config(cls._project_root or Path.cwd())
        if project_file is not None:
            section = _read_mapping(project_file).get(config_name)
            if isinstance(section, dict):
                logger.debug(f"Applying [{config_name}] from {project_file}")
                config = _deep_merge(config, section)

        return _deep_merge(config, cls._env_overrides(config_name))

    @staticmethod
    def _env_overrides(config_name: str) -> Dict[str, Any]:
        # GET_RESPONSE_THEME_BORDER_STYLE -> {"border_style": ...}
        prefix = f"{ENV_PREFIX}{config_name.upper()}_"
        return {
            key[len(prefix):].lower(): _coerce_env_value(value)
            for key, value in os.environ.items()
            if key.startswith(prefix)
        }

    @classmethod
    def reload(cls, config_name: Optional[str] = None):
        """Drop cached configs so the next load reads from disk again."""
        if config_name:
            cls._cache.pop(config_name, None)
        else:
            cls._cache.clear()

    @classmethod
    def get_all_configs(cls) -> List[str]:
        """Names of the configs shipped with the package."""
        return sorted(path.stem for path in CONFIG_DIR.glob("*.yaml"))


def load_config(name: str) -> Dict[str, Any]:
    return ConfigLoader.load(name)


def set_project_root(path: Path):
    ConfigLoader.set_project_root(path)


def reload_configs():
    ConfigLoader.reload()
