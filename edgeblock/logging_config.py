"""EDGEBLOCK logging configuration with custom formatter.

Provides a formatter that shortens Python module paths:
[YYYY-MM-DD HH:MM:SS][LEVEL][module.submodule] Message (key=value)

Examples:
    edgeblock.core.edgeos.parser -> edgeos.parser
    edgeblock.core.edgeos.config_manager -> edgeos.config
    edgeblock.blueprints.api.routes -> api.routes
"""

import logging


class EdgeBlockFormatter(logging.Formatter):
    """Custom formatter that produces short module names."""

    # Suffixes to remove for cleaner module names
    SUFFIXES_TO_STRIP = ('_manager', '_handler', '_service')

    def __init__(
        self,
        fmt: str = '[%(asctime)s][%(levelname)s][%(shortname)s] %(message)s',
        datefmt: str = '%Y-%m-%d %H:%M:%S',
    ):
        """Initialize the formatter.

        Args:
            fmt: Log format string. Use %(shortname)s for the short module name.
            datefmt: Date format string.
        """
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: logging.LogRecord) -> str:
        record.shortname = self._get_short_name(record.name)
        return super().format(record)

    def _get_short_name(self, name: str) -> str:
        """Transform full module path to short name.

        Args:
            name: Full Python module path (e.g., 'edgeblock.core.edgeos.parser')

        Returns:
            Short module name (e.g., 'edgeos.parser')
        """
        if name.startswith('edgeblock.'):
            name = name[len('edgeblock.'):]

        # edgeblock.blueprints.api.routes -> api.routes
        if name.startswith('blueprints.'):
            name = name[len('blueprints.'):]

        for suffix in self.SUFFIXES_TO_STRIP:
            if name.endswith(suffix):
                name = name[:-len(suffix)]
                break

        if name.startswith('core.'):
            name = name[len('core.'):]

        return name


def configure_logging(app) -> None:
    """Configure application logging with EDGEBLOCK formatter.

    Args:
        app: Flask application instance.
    """
    log_level = logging.DEBUG if app.config.get('DEBUG') else logging.INFO

    formatter = EdgeBlockFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Reduce noise from external libraries
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logging.getLogger('watchdog').setLevel(logging.WARNING)
