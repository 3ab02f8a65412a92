"""Ambient services shared by the decoder and the viewer: config, logging, enums."""

from .config import AppConfig, LoggingConfig, ViewerConfig, load_app_config  # noqa: F401
from .enums import ContentKind, DecodeStatus, StateLayout  # noqa: F401
from .logging import configure_logging, get_logger  # noqa: F401
