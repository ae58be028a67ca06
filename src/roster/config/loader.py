from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("roster.config.yaml")

ALLOWED_BACKENDS = ("sqlite", "file", "memory")

BASE_STORAGE_DEFAULTS: Dict[str, Any] = {
    "backend": "sqlite",
    "sqlite_path": "roster.db",
    "file_dir": ".roster",
    "key": "students",
}

BASE_LOGGING_DEFAULTS: Dict[str, Any] = {
    "level": "INFO",
}

DEFAULT_CONFIG_TEXT = """\
storage:
  backend: sqlite        # sqlite | file | memory
  sqlite_path: roster.db
  file_dir: .roster
  key: students
logging:
  level: INFO
"""


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load runtime configuration from YAML file.

    Args:
        path: Optional path to config file. Defaults to roster.config.yaml

    Returns:
        Dictionary with configuration (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If the document is not a mapping
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")
    return config


def get_storage_settings(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """
    Resolve the storage section with built-in defaults.

    Raises:
        ValueError: If the section is not a mapping or names an unknown backend
    """
    section = (config or {}).get("storage") or {}
    if not isinstance(section, dict):
        raise ValueError("Config 'storage' must be a dictionary")

    settings = {**BASE_STORAGE_DEFAULTS, **section}
    backend = str(settings["backend"]).lower()
    if backend not in ALLOWED_BACKENDS:
        raise ValueError(
            f"Unknown storage backend '{settings['backend']}' (expected one of: {', '.join(ALLOWED_BACKENDS)})"
        )
    settings["backend"] = backend

    key = settings.get("key")
    if not key or not isinstance(key, str):
        raise ValueError("Config 'storage.key' must be a non-empty string")

    settings["sqlite_path"] = str(settings["sqlite_path"])
    settings["file_dir"] = str(settings["file_dir"])
    return settings


def get_logging_settings(config: Dict[str, Any] | None = None) -> Dict[str, Any]:
    section = (config or {}).get("logging") or {}
    if not isinstance(section, dict):
        raise ValueError("Config 'logging' must be a dictionary")
    settings = {**BASE_LOGGING_DEFAULTS, **section}
    settings["level"] = str(settings["level"]).upper()
    return settings
