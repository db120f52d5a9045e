# Data models package

from edgeblock.models.blacklist import (
    ConfigError,
    ConfigStats,
    EmptyConfigurationError,
    Node,
    SourceObject,
    SourceType,
    UnknownViewKindError,
    CONFIG_EMPTY,
    CONFIG_FILE_NOT_FOUND,
    CONFIG_FILE_UNREADABLE,
    CONFIG_NOT_LOADED,
    VIEW_UNKNOWN_KIND,
    DOMAINS_NODE,
    HOSTS_NODE,
    ROOT_NODE,
)
from edgeblock.models.settings import Settings, load_settings
from edgeblock.models.view import View, ViewKind

__all__ = [
    # Blacklist configuration models
    "ConfigError",
    "ConfigStats",
    "EmptyConfigurationError",
    "Node",
    "SourceObject",
    "SourceType",
    "UnknownViewKindError",
    "CONFIG_EMPTY",
    "CONFIG_FILE_NOT_FOUND",
    "CONFIG_FILE_UNREADABLE",
    "CONFIG_NOT_LOADED",
    "VIEW_UNKNOWN_KIND",
    "DOMAINS_NODE",
    "HOSTS_NODE",
    "ROOT_NODE",
    # Settings
    "Settings",
    "load_settings",
    # Views
    "View",
    "ViewKind",
]
