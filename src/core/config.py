from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml

CONFIG_DIR_NAME = "config"
CONFIG_FILE_NAME = "config.yml"


@dataclass(slots=True)
class LoggingConfig:
    """Logging configuration from config.yml."""

    level: str = "INFO"
    app_log_max_mb: int = 10
    app_log_backup_count: int = 5


@dataclass(slots=True)
class ViewerConfig:
    """Viewer window configuration from config.yml."""

    font_family: str = "Monospace"
    font_point_size: int = 10
    window_width: int = 1100
    window_height: int = 720
    show_url_list: bool = True  # List every Tab URL under the file summary


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration resolved from disk."""

    base_dir: Path
    logs_dir: Path
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    viewer: ViewerConfig = field(default_factory=ViewerConfig)


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        content = yaml.safe_load(handle) or {}
        if not isinstance(content, dict):
            raise ValueError(f"Config file {path} must contain a mapping at the top level.")
        return content


def _section(overrides: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = overrides.get(name) or {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{name}' must be a mapping.")
    return value


def load_app_config(base_dir: Path) -> AppConfig:
    """Load application configuration from disk, providing sensible defaults."""

    config_overrides = _load_yaml(base_dir / CONFIG_DIR_NAME / CONFIG_FILE_NAME)

    logs_dir = base_dir / "logs"

    logging_cfg = _section(config_overrides, "logging")
    defaults = LoggingConfig()
    logging_config = LoggingConfig(
        level=str(logging_cfg.get("level", defaults.level)),
        app_log_max_mb=int(logging_cfg.get("app_log_max_mb", defaults.app_log_max_mb)),
        app_log_backup_count=int(logging_cfg.get("app_log_backup_count", defaults.app_log_backup_count)),
    )

    viewer_cfg = _section(config_overrides, "viewer")
    viewer_defaults = ViewerConfig()
    viewer_config = ViewerConfig(
        font_family=str(viewer_cfg.get("font_family", viewer_defaults.font_family)),
        font_point_size=int(viewer_cfg.get("font_point_size", viewer_defaults.font_point_size)),
        window_width=int(viewer_cfg.get("window_width", viewer_defaults.window_width)),
        window_height=int(viewer_cfg.get("window_height", viewer_defaults.window_height)),
        show_url_list=bool(viewer_cfg.get("show_url_list", viewer_defaults.show_url_list)),
    )

    return AppConfig(
        base_dir=base_dir,
        logs_dir=logs_dir,
        logging=logging_config,
        viewer=viewer_config,
    )
