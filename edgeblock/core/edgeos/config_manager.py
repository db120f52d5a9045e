"""Process-wide holder of the parsed blacklist configuration.

Singleton pattern like the other managers: get_config_manager() returns
the shared instance, reset_config_manager() drops it (tests).
ConfigFileWatcher re-parses the dump when it changes on disk.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path

from edgeblock.core.edgeos.entries import EntrySet
from edgeblock.core.edgeos.factory import new_view
from edgeblock.core.edgeos.loader import lines_from_file, lines_from_text
from edgeblock.core.edgeos.parser import parse_lines
from edgeblock.core.edgeos.tree import Config
from edgeblock.models.blacklist import DOMAINS_NODE, ConfigStats
from edgeblock.models.settings import Settings
from edgeblock.models.view import View, ViewKind

logger = logging.getLogger(__name__)


class ConfigManager:
    """Holds the current Config and the exclusion entry sets built from it."""

    _instance: ConfigManager | None = None

    def __new__(cls) -> ConfigManager:
        """Singleton pattern - one instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self) -> None:
        if self._initialized:
            return
        self._initialized = True

        self._lock = threading.Lock()
        self._config: Config | None = None
        self._settings = Settings()
        self._file_loaded: str | None = None
        self._domain_excludes = EntrySet()
        self._excludes = EntrySet()
        logger.debug("ConfigManager initialized")

    def load_file(self, settings: Settings) -> Config:
        """Parse the dump named by settings.file.

        Raises:
            ConfigError: If the file is missing or holds no configuration
        """
        logger.info(f"Loading configuration (path={settings.file})")
        config = parse_lines(lines_from_file(settings.file), settings=settings)
        self._install(config, settings, settings.file)
        return config

    def load_text(self, text: str, settings: Settings | None = None) -> Config:
        """Parse an in-memory dump.

        Raises:
            EmptyConfigurationError: If the text holds no configuration
        """
        settings = settings or self._settings
        config = parse_lines(lines_from_text(text), settings=settings)
        self._install(config, settings, None)
        return config

    def _install(self, config: Config, settings: Settings, source: str | None) -> None:
        domain_excludes = config.excludes(DOMAINS_NODE)
        excludes = config.excludes()
        with self._lock:
            self._config = config
            self._settings = settings
            self._file_loaded = source
            self._domain_excludes = domain_excludes
            self._excludes = excludes

        stats = self.get_stats()
        logger.info(
            f"Configuration ready (nodes={stats.nodes_count}, "
            f"sources={stats.sources_count}, excludes={stats.excludes_count})"
        )

    @property
    def config(self) -> Config | None:
        return self._config

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    @property
    def domain_excludes(self) -> EntrySet:
        """Excluded entries of the 'domains' node."""
        return self._domain_excludes

    @property
    def excludes(self) -> EntrySet:
        """Excluded entries of every node."""
        return self._excludes

    def is_excluded(self, domain: str) -> bool:
        """True if domain or one of its parent domains is excluded anywhere."""
        return self._excludes.contains_suffix(domain.lower().strip())

    def view(self, kind: ViewKind | str) -> View | None:
        config = self._config
        if config is None:
            return None
        return new_view(config, kind)

    def get_stats(self) -> ConfigStats:
        config = self._config
        if config is None:
            return ConfigStats()
        return config.stats(file_loaded=self._file_loaded)


_config_manager: ConfigManager | None = None


def get_config_manager() -> ConfigManager:
    """Get the global ConfigManager instance, creating it on first call."""
    global _config_manager

    if _config_manager is None:
        _config_manager = ConfigManager()

    return _config_manager


def reset_config_manager() -> None:
    """Reset the global ConfigManager instance (for testing)."""
    global _config_manager
    _config_manager = None
    ConfigManager._instance = None


# =============================================================================
# HOT-RELOAD FILE WATCHER
# =============================================================================

class ConfigFileWatcher:
    """Re-parses the configuration dump when it changes on disk.

    Uses watchdog to monitor the directory holding settings.file.

    Usage:
        watcher = ConfigFileWatcher(settings)
        watcher.start()
        # ... application runs ...
        watcher.stop()
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._observer = None
        self._running = False
        logger.debug("ConfigFileWatcher initialized")

    def start(self) -> bool:
        """Start watching the dump directory.

        Returns:
            True if the watcher started
        """
        from watchdog.observers import Observer

        path = Path(self._settings.file)
        if not path.parent.exists():
            logger.warning(f"Configuration directory not found (path={path.parent})")
            return False

        handler = _ConfigChangeHandler(self._settings)
        self._observer = Observer()
        self._observer.schedule(handler, str(path.parent), recursive=False)
        self._observer.start()
        self._running = True
        logger.info(f"Configuration hot-reload watcher started (path={path})")
        return True

    def stop(self) -> None:
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5.0)
            self._observer = None
            self._running = False
            logger.info("Configuration hot-reload watcher stopped")

    @property
    def is_running(self) -> bool:
        return self._running


class _ConfigChangeHandler:
    """Trailing-edge debounced reload on changes to the dump file."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._filename = Path(settings.file).name
        self._pending_timer: threading.Timer | None = None
        self._timer_lock = threading.Lock()

    def dispatch(self, event) -> None:
        """Handle a watchdog file system event."""
        paths = [getattr(event, "src_path", None), getattr(event, "dest_path", None)]
        if not any(p and Path(str(p)).name == self._filename for p in paths):
            return
        if getattr(event, "event_type", None) not in ("modified", "created", "moved"):
            return
        self._schedule_reload()

    def _schedule_reload(self) -> None:
        with self._timer_lock:
            if self._pending_timer is not None:
                self._pending_timer.cancel()
            self._pending_timer = threading.Timer(self._settings.poll, self._do_reload)
            self._pending_timer.daemon = True
            self._pending_timer.start()

    def _do_reload(self) -> None:
        with self._timer_lock:
            self._pending_timer = None

        logger.info(f"Configuration file changed, reloading (file={self._filename})")
        try:
            get_config_manager().load_file(self._settings)
        except Exception as e:
            # Keep serving the previous configuration
            logger.error(f"Hot-reload failed (error={e})")


_file_watcher: ConfigFileWatcher | None = None


def start_config_watcher(settings: Settings) -> ConfigFileWatcher | None:
    """Start the global watcher if settings.reload_on_change is set."""
    global _file_watcher

    if not settings.reload_on_change:
        logger.info("Configuration hot-reload disabled in settings")
        return None

    stop_config_watcher()

    watcher = ConfigFileWatcher(settings)
    if watcher.start():
        _file_watcher = watcher
        return watcher
    return None


def stop_config_watcher() -> None:
    global _file_watcher
    if _file_watcher is not None:
        _file_watcher.stop()
        _file_watcher = None
