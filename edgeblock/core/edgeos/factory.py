"""View factory: typed projections over a parsed Config.

new_view() dispatches one ViewKind to a builder. Builders only read the
tree; the single write they perform is filling empty source IPs with
the inherited blackhole address.
"""

from __future__ import annotations

import logging
from typing import Callable

from edgeblock.core.edgeos.tree import Config
from edgeblock.models.blacklist import (
    DOMAINS_NODE,
    HOSTS_NODE,
    ROOT_NODE,
    SourceObject,
    SourceType,
    UnknownViewKindError,
)
from edgeblock.models.view import View, ViewKind

logger = logging.getLogger(__name__)

_EXCLUDE_TYPES = {
    DOMAINS_NODE: SourceType.DOMAIN_EXCLUDES,
    HOSTS_NODE: SourceType.HOST_EXCLUDES,
    ROOT_NODE: SourceType.ROOT_EXCLUDES,
}

_INCLUDE_TYPES = {
    DOMAINS_NODE: SourceType.PRE_DOMAIN,
    HOSTS_NODE: SourceType.PRE_HOST,
}


def build_exclusion(config: Config, scope: str) -> SourceObject:
    """Aggregate object carrying the excluded entries of one scope.

    The root scope aggregates the excludes of every node without
    duplicates; other scopes carry the node's exclude list as declared.
    """
    source_type = _EXCLUDE_TYPES[scope]
    if scope == ROOT_NODE:
        excludes = config.exclude_list()
    else:
        node = config.get(scope)
        excludes = list(node.excludes) if node is not None else []
    return SourceObject(
        name=source_type.value,
        source_type=source_type,
        node=scope,
        description=f"{source_type.value} exclusions",
        ip=config.get_ip(scope),
        excludes=excludes,
    )


def build_inclusion(config: Config, scope: str) -> SourceObject | None:
    """Aggregate object for inline includes, or None when there are none."""
    node = config.get(scope)
    if node is None or not node.includes:
        return None
    source_type = _INCLUDE_TYPES[scope]
    return SourceObject(
        name=f"includes.[{len(node.includes)}]",
        source_type=source_type,
        node=scope,
        description=f"{source_type.value} blacklist content",
        ip=config.get_ip(scope),
        includes=list(node.includes),
    )


def _exclusions(scope: str) -> Callable[[Config], list[SourceObject]]:
    return lambda config: [build_exclusion(config, scope)]


def _inclusions(scope: str) -> Callable[[Config], list[SourceObject]]:
    def build(config: Config) -> list[SourceObject]:
        if scope not in config.settings.nodes:
            return []
        obj = build_inclusion(config, scope)
        return [obj] if obj is not None else []

    return build


def _urls(scope: str) -> Callable[[Config], list[SourceObject]]:
    return lambda config: [
        o for o in config.sources(scope) if o.source_type is SourceType.URL
    ]


_BUILDERS: dict[ViewKind, Callable[[Config], list[SourceObject]]] = {
    ViewKind.EXCLUDE_DOMAINS: _exclusions(DOMAINS_NODE),
    ViewKind.EXCLUDE_HOSTS: _exclusions(HOSTS_NODE),
    ViewKind.EXCLUDE_ROOT: _exclusions(ROOT_NODE),
    ViewKind.URL_DOMAINS: _urls(DOMAINS_NODE),
    ViewKind.URL_HOSTS: _urls(HOSTS_NODE),
    ViewKind.PRE_DOMAINS: _inclusions(DOMAINS_NODE),
    ViewKind.PRE_HOSTS: _inclusions(HOSTS_NODE),
    ViewKind.FILE_SOURCES: lambda config: config.get_all(SourceType.FILE.value),
    ViewKind.ALL_SOURCES: lambda config: config.get_all(),
}


def resolve_kind(kind: ViewKind | str) -> ViewKind:
    """Accept a ViewKind or its string value.

    Raises:
        UnknownViewKindError: If the kind is not part of ViewKind
    """
    if isinstance(kind, ViewKind):
        return kind
    try:
        return ViewKind(kind)
    except ValueError:
        raise UnknownViewKindError(kind) from None


def new_view(config: Config, kind: ViewKind | str) -> View:
    """Build the view requested by kind.

    Raises:
        UnknownViewKindError: If kind is not a known view kind
    """
    view_kind = resolve_kind(kind)
    view = View(kind=view_kind, objects=_BUILDERS[view_kind](config))
    logger.debug(f"View built (kind={view_kind.value}, objects={len(view)})")
    return view
