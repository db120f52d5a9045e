"""Line-scanning parser for EdgeOS/VyOS blacklist configuration.

Turns a configuration dump such as:

    blacklist {
        dns-redirect-ip 0.0.0.0
        domains {
            exclude example.org
            source mysrc {
                url https://x/list
            }
        }
    }

into a Config tree. The parser keeps a stack of open block names; the
current node is the innermost open node block. Malformed input (stray
closing braces, unknown attribute keys) is absorbed, only a parse that
produces no node at all is an error.
"""

from __future__ import annotations

import logging
from typing import Iterable

from edgeblock.core.edgeos.recognizers import (
    LineCategory,
    LineMatch,
    classify,
    str_to_bool,
)
from edgeblock.core.edgeos.tree import Config
from edgeblock.models.blacklist import (
    EmptyConfigurationError,
    Node,
    SourceObject,
    SourceType,
)
from edgeblock.models.settings import Settings

logger = logging.getLogger(__name__)


class ConfigParser:
    """State machine fed one line at a time."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self._leaf_kinds = set(config.settings.leaf_kinds)
        self._context: list[str] = []
        self._current: str | None = None
        self._pending: SourceObject | None = None
        self._lineno = 0
        self._handlers = {
            LineCategory.MULTI_VALUE: self._on_multi_value,
            LineCategory.NODE_OPEN: self._on_node_open,
            LineCategory.LEAF_OPEN: self._on_leaf_open,
            LineCategory.DISABLED: self._on_disabled,
            LineCategory.BLACKHOLE_IP: self._on_blackhole_ip,
            LineCategory.NAMED_ATTRIBUTE: self._on_named_attribute,
            LineCategory.IGNORED: self._on_ignored,
            LineCategory.CLOSE_BRACE: self._on_close_brace,
        }

    @property
    def context(self) -> list[str]:
        """Open block names, innermost last."""
        return list(self._context)

    @property
    def current(self) -> str | None:
        return self._current

    def feed(self, raw: str) -> LineMatch:
        """Classify and apply one line; returns the match for diagnostics."""
        self._lineno += 1
        match = classify(raw.strip())
        self._handlers[match.category](match)
        return match

    def parse(self, lines: Iterable[str]) -> Config:
        for raw in lines:
            self.feed(raw)

        if len(self._config.tree) < 1:
            raise EmptyConfigurationError(details={"lines": self._lineno})

        stats = self._config.stats()
        logger.info(
            f"Configuration parsed (lines={self._lineno}, nodes={stats.nodes_count}, "
            f"sources={stats.sources_count}, excludes={stats.excludes_count})"
        )
        return self._config

    def _node(self) -> Node | None:
        if self._current is None:
            return None
        return self._config.tree.get(self._current)

    def _in_leaf(self) -> bool:
        return bool(self._context) and self._context[-1] in self._leaf_kinds

    def _on_multi_value(self, match: LineMatch) -> None:
        node = self._node()
        if node is None:
            logger.debug(f"{match.key} outside of a node ignored (line={self._lineno})")
            return
        if match.key == "exclude":
            node.excludes.append(match.value)
        else:
            node.includes.append(match.value)

    def _on_node_open(self, match: LineMatch) -> None:
        name = match.key
        if name not in self._config.tree:
            self._config.tree[name] = Node(name=name)
        self._context.append(name)
        self._current = name

    def _on_leaf_open(self, match: LineMatch) -> None:
        self._context.append(match.key)
        if match.key in self._leaf_kinds:
            self._pending = SourceObject(name=match.value, node=self._current or "")

    def _on_disabled(self, match: LineMatch) -> None:
        node = self._node()
        if node is not None:
            node.disabled = str_to_bool(match.value)

    def _on_blackhole_ip(self, match: LineMatch) -> None:
        # A source's own address belongs to the source, not to the node
        if self._in_leaf():
            if self._pending is not None:
                self._pending.ip = match.value
            return
        node = self._node()
        if node is not None:
            node.ip = match.value

    def _on_named_attribute(self, match: LineMatch) -> None:
        key, value = match.key, match.value
        pending = self._pending if self._in_leaf() else None
        node = self._node()

        if key in ("file", "url"):
            self._finalize(pending, node, SourceType(key), value)
            return

        target = pending if pending is not None else node
        if target is None:
            return
        if key == "description":
            target.description = value
        elif key == "dns-redirect-ip":
            target.ip = value
        elif key == "prefix":
            target.prefix = value

    def _finalize(
        self,
        pending: SourceObject | None,
        node: Node | None,
        source_type: SourceType,
        location: str,
    ) -> None:
        if pending is None or node is None:
            logger.debug(
                f"{source_type.value} outside of a source ignored (line={self._lineno})"
            )
            return
        if pending.source_type is not SourceType.UNKNOWN:
            logger.debug(
                f"Source already finalized, {source_type.value} ignored "
                f"(source={pending.name}, line={self._lineno})"
            )
            return
        pending.source_type = source_type
        pending.location = location
        node.sources.append(pending)

    def _on_ignored(self, match: LineMatch) -> None:
        pass

    def _on_close_brace(self, match: LineMatch) -> None:
        if len(self._context) <= 1:
            if not self._context:
                logger.debug(f"Unbalanced closing brace ignored (line={self._lineno})")
            return

        closed = self._context.pop()
        if closed in self._leaf_kinds and self._pending is not None:
            if self._pending.source_type is SourceType.UNKNOWN:
                logger.debug(
                    f"Source without file or url dropped (source={self._pending.name})"
                )
            self._pending = None

        self._current = next(
            (n for n in reversed(self._context) if n in self._config.tree), None
        )


def parse_lines(
    lines: Iterable[str],
    config: Config | None = None,
    settings: Settings | None = None,
) -> Config:
    """Parse configuration lines into a Config.

    Raises:
        EmptyConfigurationError: If no node was found
    """
    if config is None:
        config = Config(settings)
    return ConfigParser(config).parse(lines)


def parse_text(text: str, settings: Settings | None = None) -> Config:
    return parse_lines(text.splitlines(), settings=settings)
