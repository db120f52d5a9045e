"""View models: request kinds and the read-only projection they produce."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from edgeblock.models.blacklist import SourceObject, SourceType


class ViewKind(Enum):
    """Closed set of views the factory can build."""

    EXCLUDE_DOMAINS = "exclusion-domains"
    EXCLUDE_HOSTS = "exclusion-hosts"
    EXCLUDE_ROOT = "exclusion-root"
    URL_DOMAINS = "url-domains"
    URL_HOSTS = "url-hosts"
    PRE_DOMAINS = "preconfigured-domain-includes"
    PRE_HOSTS = "preconfigured-host-includes"
    FILE_SOURCES = "file-sources"
    ALL_SOURCES = "all-sources"


@dataclass
class View:
    """Ordered collection of objects produced for one ViewKind."""

    kind: ViewKind
    objects: list[SourceObject] = field(default_factory=list)

    def __iter__(self) -> Iterator[SourceObject]:
        return iter(self.objects)

    def __len__(self) -> int:
        return len(self.objects)

    def names(self) -> list[str]:
        return [obj.name for obj in self.objects]

    def filter(self, source_type: SourceType) -> View:
        """Keep only objects of one type, preserving order."""
        return View(
            kind=self.kind,
            objects=[o for o in self.objects if o.source_type == source_type],
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON serialization."""
        return {
            "kind": self.kind.value,
            "count": len(self.objects),
            "objects": [obj.to_dict() for obj in self.objects],
        }
