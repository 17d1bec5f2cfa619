from .constants import (
    DEFAULT_EXPIRES,
    DEFAULT_PREFIX,
    NULL_PAYLOAD,
    UPDATED_FIELD,
    VALUE_FIELD,
    ReadErrorPolicy,
    Stage,
)
from .settings import (
    CacherSettings,
    LoggingSettings,
    RedisSettings,
    Settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "DEFAULT_EXPIRES",
    "DEFAULT_PREFIX",
    "NULL_PAYLOAD",
    "UPDATED_FIELD",
    "VALUE_FIELD",
    "ReadErrorPolicy",
    "Stage",
    "CacherSettings",
    "LoggingSettings",
    "RedisSettings",
    "Settings",
    "get_settings",
    "reload_settings",
]
