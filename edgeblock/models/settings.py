"""Settings bag consumed by the parser, the view factory and the manager.

Settings are plain values populated from the 'edgeblock' section of
data/config/edgeblock.yaml; nothing here is reparsed later.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


@dataclass
class Settings:
    """Parser and rendering settings.

    Attributes:
        nodes: Node names of interest, in the order views visit them
        leaf_kinds: Leaf block kinds that open a source definition
        ltypes: Recognized source type labels
        file: Path of the configuration dump to parse
        dir: Directory the dnsmasq fragments are written to
        ext: dnsmasq fragment file extension
        fn_fmt: Fragment path template ({dir}, {node}, {name}, {ext})
        poll: Debounce delay in seconds for config file reloads
        reload_on_change: Re-parse the dump when it changes on disk
    """

    nodes: list[str] = field(default_factory=lambda: ["domains", "hosts"])
    leaf_kinds: list[str] = field(default_factory=lambda: ["source"])
    ltypes: list[str] = field(
        default_factory=lambda: [
            "file",
            "pre-configured-domain",
            "pre-configured-host",
            "url",
        ]
    )
    file: str = "/config/config.boot"
    dir: str = "/etc/dnsmasq.d"
    ext: str = "blacklist.conf"
    fn_fmt: str = "{dir}/{node}.{name}.{ext}"
    poll: float = 1.0
    reload_on_change: bool = False

    def to_dict(self) -> dict[str, Any]:
        """JSON serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Settings:
        """Build settings from a mapping, ignoring unknown keys."""
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown settings (keys={','.join(unknown)})")
        return cls(**{k: v for k, v in data.items() if k in known})


def load_settings(path: str | Path, base_path: Path | None = None) -> Settings:
    """Load settings from the 'edgeblock' section of a YAML file.

    Relative 'file' values are resolved against base_path. A missing,
    unreadable or malformed YAML file yields the defaults.
    """
    path = Path(path)
    if not path.is_absolute() and base_path:
        path = base_path / path

    if not path.exists():
        logger.warning(f"Settings file not found: {path} (using defaults)")
        return Settings()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to read settings: {path} (error={e}, using defaults)")
        return Settings()

    section = data.get("edgeblock") if isinstance(data, dict) else None
    if section is not None and not isinstance(section, dict):
        logger.error(f"Invalid 'edgeblock' section in {path} (using defaults)")
        return Settings()

    settings = Settings.from_dict(section)

    dump = Path(settings.file)
    if not dump.is_absolute() and base_path:
        settings.file = str(base_path / dump)

    logger.info(f"Settings loaded (path={path.name}, nodes={','.join(settings.nodes)})")
    return settings
