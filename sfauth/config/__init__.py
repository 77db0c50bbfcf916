"""Configuration package exports."""

from .loader import load_session_config, read_config_file
from .model import SessionConfig

__all__ = ["SessionConfig", "load_session_config", "read_config_file"]
