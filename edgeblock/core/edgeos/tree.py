"""Parsed configuration tree and its queries.

Config owns every Node and SourceObject produced by one parse. It is
rebuilt wholesale on each parse and never patched incrementally.
"""

from __future__ import annotations

import logging

from edgeblock.core.edgeos.entries import EntrySet
from edgeblock.models.blacklist import ROOT_NODE, ConfigStats, Node, SourceObject
from edgeblock.models.settings import Settings

logger = logging.getLogger(__name__)


class Config:
    """Mapping of node name -> Node, plus the settings it was parsed with."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.tree: dict[str, Node] = {}

    def nodes(self) -> list[str]:
        """Configured node names in lexicographic order."""
        return sorted(self.tree)

    def get(self, name: str) -> Node | None:
        return self.tree.get(name)

    def get_ip(self, name: str) -> str:
        """Blackhole IP of a node, inherited from the root node when unset."""
        node = self.tree.get(name)
        if node is not None and node.ip:
            return node.ip
        root = self.tree.get(ROOT_NODE)
        return root.ip if root is not None else ""

    def sources(self, name: str) -> list[SourceObject]:
        """Sources of a node, with empty source IPs filled from the node.

        A source IP set in the configuration is never overwritten.
        """
        node = self.tree.get(name)
        if node is None:
            return []
        ip = self.get_ip(name)
        for obj in node.sources:
            if not obj.ip:
                obj.ip = ip
        return list(node.sources)

    def get_all(self, *ltypes: str) -> list[SourceObject]:
        """Sources across the settings nodes, optionally filtered by type label.

        Labels missing from settings.ltypes are skipped with a warning.
        """
        known = self.ltypes()
        unknown = [ltype for ltype in ltypes if ltype not in known]
        if unknown:
            logger.warning(f"Ignoring unrecognized source types (ltypes={','.join(unknown)})")
        ltypes = tuple(ltype for ltype in ltypes if ltype in known)
        if unknown and not ltypes:
            return []

        objects: list[SourceObject] = []
        for name in self.settings.nodes:
            sources = self.sources(name)
            if not ltypes:
                objects.extend(sources)
                continue
            for ltype in ltypes:
                objects.extend(o for o in sources if o.source_type.value == ltype)
        return objects

    def exclude_list(self, *names: str) -> list[str]:
        """Excluded entries of the given nodes, or of every node.

        Duplicates are dropped; first declaration order is kept.
        """
        seen: dict[str, None] = {}
        for name in names or self.nodes():
            node = self.tree.get(name)
            if node is None:
                continue
            for entry in node.excludes:
                seen.setdefault(entry, None)
        return list(seen)

    def excludes(self, *names: str) -> EntrySet:
        """EntrySet of excluded entries for the given nodes (all by default)."""
        return EntrySet(self.exclude_list(*names))

    def ltypes(self) -> list[str]:
        """Recognized source type labels."""
        return list(self.settings.ltypes)

    def stats(self, file_loaded: str | None = None) -> ConfigStats:
        nodes = self.tree.values()
        return ConfigStats(
            nodes_count=len(self.tree),
            sources_count=sum(len(n.sources) for n in nodes),
            includes_count=sum(len(n.includes) for n in nodes),
            excludes_count=sum(len(n.excludes) for n in nodes),
            file_loaded=file_loaded,
        )

    def __len__(self) -> int:
        return len(self.tree)

    def __str__(self) -> str:
        from edgeblock.core.edgeos.renderer import render_config

        return render_config(self)
