"""Blacklist configuration data models for EDGEBLOCK.

Defines the node/source dataclasses parsed out of an EdgeOS/VyOS
configuration dump, plus the error types raised by the parser and the
view factory.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Well-known node names
ROOT_NODE = "blacklist"
DOMAINS_NODE = "domains"
HOSTS_NODE = "hosts"


class SourceType(Enum):
    """Types of objects carried by a configuration node."""

    FILE = "file"
    URL = "url"
    PRE_DOMAIN = "pre-configured-domain"
    PRE_HOST = "pre-configured-host"
    DOMAIN_EXCLUDES = "domn-excludes"
    HOST_EXCLUDES = "host-excludes"
    ROOT_EXCLUDES = "root-excludes"
    UNKNOWN = "unknown"


@dataclass
class SourceObject:
    """A blacklist source, or an aggregate include/exclude object.

    Attributes:
        name: Logical name (source label, or a synthetic label for aggregates)
        source_type: Kind of object, fixed once the source is finalized
        node: Name of the owning configuration node
        location: File path or URL of the source
        description: Optional human text
        ip: Blackhole IP, filled from the owning node when empty
        prefix: Line prefix used when the source content is rendered
        includes: Inline entries (pre-configured aggregates only)
        excludes: Excluded entries (exclusion aggregates only)
    """

    name: str
    source_type: SourceType = SourceType.UNKNOWN
    node: str = ""
    location: str = ""
    description: str = ""
    ip: str = ""
    prefix: str = ""
    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)

    def target_path(self, settings) -> str:
        """Path of the dnsmasq fragment generated for this object."""
        label = self.node
        if self.source_type not in (SourceType.FILE, SourceType.URL):
            label = self.source_type.value
        return settings.fn_fmt.format(
            dir=settings.dir, node=label, name=self.name, ext=settings.ext
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON serialization."""
        data: dict[str, Any] = {
            "name": self.name,
            "type": self.source_type.value,
            "node": self.node,
            "description": self.description,
            "ip": self.ip,
            "prefix": self.prefix,
            "location": self.location,
        }
        if self.includes:
            data["includes"] = list(self.includes)
        if self.excludes:
            data["excludes"] = list(self.excludes)
        return data


@dataclass
class Node:
    """A named configuration block (e.g. 'blacklist', 'domains', 'hosts').

    Attributes:
        name: Node name, unique in the tree
        disabled: True when the node is switched off
        ip: Blackhole IP; empty means inherit from the root node
        description: Optional node description
        prefix: Optional node-level prefix
        includes: Inline blacklisted entries, declaration order
        excludes: Excluded entries, declaration order
        sources: File/url sources, declaration order
    """

    name: str
    disabled: bool = False
    ip: str = ""
    description: str = ""
    prefix: str = ""
    includes: list[str] = field(default_factory=list)
    excludes: list[str] = field(default_factory=list)
    sources: list[SourceObject] = field(default_factory=list)


@dataclass
class ConfigStats:
    """Statistics about the parsed configuration.

    Attributes:
        nodes_count: Number of nodes in the tree
        sources_count: Number of file/url sources
        includes_count: Number of inline included entries
        excludes_count: Number of excluded entries
        file_loaded: Path of the parsed dump, if any
    """

    nodes_count: int = 0
    sources_count: int = 0
    includes_count: int = 0
    excludes_count: int = 0
    file_loaded: str | None = None

    def to_dict(self) -> dict[str, int | str | None]:
        """JSON serialization."""
        return {
            "nodes_count": self.nodes_count,
            "sources_count": self.sources_count,
            "includes_count": self.includes_count,
            "excludes_count": self.excludes_count,
            "file_loaded": self.file_loaded,
        }


class ConfigError(Exception):
    """Exception for configuration parsing and view errors.

    Attributes:
        code: Error code (e.g., 'CONFIG_EMPTY')
        message: Human-readable error message
        details: Additional error details
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON error response."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


# Error code constants
CONFIG_EMPTY = "CONFIG_EMPTY"
CONFIG_FILE_NOT_FOUND = "CONFIG_FILE_NOT_FOUND"
CONFIG_FILE_UNREADABLE = "CONFIG_FILE_UNREADABLE"
CONFIG_NOT_LOADED = "CONFIG_NOT_LOADED"
VIEW_UNKNOWN_KIND = "VIEW_UNKNOWN_KIND"


class EmptyConfigurationError(ConfigError):
    """Raised when a parse yields no configuration nodes."""

    def __init__(self, details: dict[str, Any] | None = None):
        super().__init__(
            code=CONFIG_EMPTY,
            message="Configuration data is empty, cannot continue",
            details=details,
        )


class UnknownViewKindError(ConfigError):
    """Raised when the view factory receives an unrecognized request."""

    def __init__(self, kind: Any):
        super().__init__(
            code=VIEW_UNKNOWN_KIND,
            message=f"Invalid view kind requested: {kind!r}",
            details={"kind": str(kind)},
        )
