"""Common utilities for notifs."""

from notifs.common.errors import ConfigurationError, ErrorCode, NotifsError
from notifs.common.settings import Settings, get_settings

__all__ = [
    "ConfigurationError",
    "ErrorCode",
    "NotifsError",
    "Settings",
    "get_settings",
]
