"""
Configuration loading for fsplay.

Settings live under the ``fsplay:`` key of a YAML file. Missing or broken
files fall back to the defaults.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logger import AuditLogger
from .file_manager.directories import DirectoryLayout


DEFAULT_CONFIG_PATH = "config.yaml"


def default_config() -> Dict[str, Any]:
    """Return default configuration."""
    return {
        "root": str(Path.home() / ".fsplay"),
        "temp_dir": None,
        "audit_log": None,
    }


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        The merged ``fsplay`` section
    """
    config = default_config()
    path = Path(config_path)
    if not path.exists():
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return config

    if not isinstance(loaded, dict):
        return config

    section = loaded.get("fsplay", loaded)
    if isinstance(section, dict):
        config.update({k: v for k, v in section.items() if k in config})
    return config


def build_layout(config: Dict[str, Any]) -> DirectoryLayout:
    """Create the app directory layout described by the config."""
    root = Path(config["root"]).expanduser()
    temp_dir: Optional[str] = config.get("temp_dir")
    return DirectoryLayout(root, Path(temp_dir).expanduser() if temp_dir else None)


def build_logger(config: Dict[str, Any]) -> AuditLogger:
    """Create the audit logger described by the config."""
    log_path = config.get("audit_log") or Path(config["root"]).expanduser() / "audit_log.jsonl"
    return AuditLogger(log_path=str(Path(log_path).expanduser()))
