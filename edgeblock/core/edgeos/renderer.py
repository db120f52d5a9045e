"""Deterministic text rendering of the configuration tree and views.

Output is stable for a given tree so it can be compared against golden
files: nodes are emitted in lexicographic order, include/exclude lists
sorted, sources in declaration order.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from edgeblock.models.blacklist import ROOT_NODE, Node, SourceObject

if TYPE_CHECKING:
    from edgeblock.core.edgeos.tree import Config
    from edgeblock.models.view import View


def bool_to_str(value: bool) -> str:
    return "true" if value else "false"


def _source_dict(obj: SourceObject) -> dict[str, Any]:
    return {
        "name": obj.name,
        "description": obj.description,
        "ip": obj.ip,
        "prefix": obj.prefix,
        "type": obj.source_type.value,
        "location": obj.location,
    }


def node_to_dict(node: Node) -> dict[str, Any]:
    data: dict[str, Any] = {
        "disabled": bool_to_str(node.disabled),
        "ip": node.ip,
        "excludes": sorted(node.excludes),
    }
    if node.name != ROOT_NODE:
        data["includes"] = sorted(node.includes)
        data["sources"] = [_source_dict(obj) for obj in node.sources]
    return data


def config_to_dict(config: Config) -> dict[str, Any]:
    return {
        "nodes": [{name: node_to_dict(config.tree[name])} for name in config.nodes()]
    }


def render_config(config: Config) -> str:
    """Render the tree as tab-indented JSON text."""
    return json.dumps(config_to_dict(config), indent="\t", ensure_ascii=False)


def render_view(view: View) -> str:
    return json.dumps(view.to_dict(), indent="\t", ensure_ascii=False)
