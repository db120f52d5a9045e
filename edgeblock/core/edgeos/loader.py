"""Line sources for configuration dumps."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from edgeblock.models.blacklist import (
    CONFIG_FILE_NOT_FOUND,
    CONFIG_FILE_UNREADABLE,
    ConfigError,
)

logger = logging.getLogger(__name__)


def lines_from_text(text: str) -> Iterator[str]:
    """Yield the lines of an in-memory dump in order."""
    yield from text.splitlines()


def lines_from_file(path: str | Path) -> Iterator[str]:
    """Yield the lines of a dump file in order.

    The whole file is read before the first line is yielded, so read
    failures surface before any parsing starts.

    Raises:
        ConfigError: CONFIG_FILE_NOT_FOUND if the file does not exist,
            CONFIG_FILE_UNREADABLE if it cannot be read
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(
            code=CONFIG_FILE_NOT_FOUND,
            message=f"Configuration file not found: {path}",
            details={"path": str(path)},
        )

    logger.debug(f"Reading configuration (path={path})")
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            text = f.read()
    except OSError as e:
        raise ConfigError(
            code=CONFIG_FILE_UNREADABLE,
            message=f"Configuration file cannot be read: {path}",
            details={"path": str(path), "reason": e.strerror or str(e)},
        ) from e

    yield from text.splitlines()
