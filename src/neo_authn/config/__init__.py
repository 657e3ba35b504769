"""Configuration for neo-authn: environment settings and logging."""

from .settings import AuthSettings, get_settings, CALLBACK_PATH
from .logging_config import (
    setup_logging,
    LogVerbosity,
    LogFormat,
    LoggingConfig,
)

__all__ = [
    "AuthSettings",
    "get_settings",
    "CALLBACK_PATH",
    "setup_logging",
    "LogVerbosity",
    "LogFormat",
    "LoggingConfig",
]
