"""EdgeOS/VyOS blacklist configuration module.

Parses configuration dumps into a queryable tree and builds views over it.
"""

from edgeblock.core.edgeos.entries import EntrySet, ReadWriteLock, get_subdomains
from edgeblock.core.edgeos.tree import Config
from edgeblock.core.edgeos.parser import ConfigParser, parse_lines, parse_text
from edgeblock.core.edgeos.factory import new_view, resolve_kind
from edgeblock.core.edgeos.renderer import render_config, render_view
from edgeblock.core.edgeos.loader import lines_from_file, lines_from_text
from edgeblock.core.edgeos.config_manager import (
    ConfigManager,
    ConfigFileWatcher,
    get_config_manager,
    reset_config_manager,
    start_config_watcher,
    stop_config_watcher,
)

__all__ = [
    "EntrySet",
    "ReadWriteLock",
    "get_subdomains",
    "Config",
    "ConfigParser",
    "parse_lines",
    "parse_text",
    "new_view",
    "resolve_kind",
    "render_config",
    "render_view",
    "lines_from_file",
    "lines_from_text",
    "ConfigManager",
    "ConfigFileWatcher",
    "get_config_manager",
    "reset_config_manager",
    "start_config_watcher",
    "stop_config_watcher",
]
