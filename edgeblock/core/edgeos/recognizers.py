"""Line recognizers for EdgeOS/VyOS configuration dumps.

Each recognizer tests one line category against a stripped line and
returns a LineMatch, or None. classify() applies them in priority order
so every line lands in exactly one category.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable


class LineCategory(Enum):
    """Line shapes understood by the parser, in priority order."""

    MULTI_VALUE = "multi-value"
    NODE_OPEN = "node-open"
    LEAF_OPEN = "leaf-open"
    DISABLED = "disabled-flag"
    BLACKHOLE_IP = "blackhole-ip"
    NAMED_ATTRIBUTE = "named-attribute"
    IGNORED = "comment-misc"
    CLOSE_BRACE = "close-brace"


@dataclass(frozen=True)
class LineMatch:
    """Result of classifying one line.

    Attributes:
        category: Matched line category
        key: Attribute key, node name or leaf kind (category dependent)
        value: Attribute value or leaf name (category dependent)
    """

    category: LineCategory
    key: str = ""
    value: str = ""


MULTI_KEYS = ("exclude", "include")
NAMED_KEYS = ("description", "dns-redirect-ip", "file", "prefix", "url")
BLACKHOLE_KEY = "dns-redirect-ip"
TRUE_VALUES = ("true", "yes", "on", "1", "enable", "enabled")

_MLTI = re.compile(
    r'''
    ^(include|exclude)          # list keyword
    \s+
    ["']?(.+?)["']?$            # value, optionally quoted
    ''', re.VERBOSE
)
_NODE = re.compile(r'^([\w-]+)\s*\{$')
_LEAF = re.compile(
    r'''
    ^([\w-]+)                   # leaf kind, e.g. 'source'
    \s+
    ["']?([^\s{"']+)["']?       # leaf name
    \s*\{$
    ''', re.VERBOSE
)
_DSBL = re.compile(r'^disabled?(?:\s+["\']?(\S+?)["\']?)?$')
_IPV4 = r'(?:\d{1,3}\.){3}\d{1,3}'
_IPV6 = r'[0-9A-Fa-f]{0,4}:[0-9A-Fa-f:.]*'
_IPBH = re.compile(
    rf'''
    ^(?:dns-redirect-ip\s+["']?)?   # optional keyword
    ({_IPV4}|{_IPV6})               # blackhole address
    ["']?$
    ''', re.VERBOSE
)
_NAME = re.compile(
    r'''
    ^([\w-]+)                   # key
    \s+
    ["']?(.*?)["']?$            # value, optionally quoted
    ''', re.VERBOSE
)
_CMNT = re.compile(r'^(?:/\*.*\*/|#.*|//.*)$')
_MISC = re.compile(r'^[\w-]+$')
_RBRC = re.compile(r'^\}$')


def match_multi_value(line: str) -> LineMatch | None:
    m = _MLTI.match(line)
    if m is None:
        return None
    return LineMatch(LineCategory.MULTI_VALUE, key=m.group(1), value=m.group(2))


def match_node_open(line: str) -> LineMatch | None:
    m = _NODE.match(line)
    if m is None:
        return None
    return LineMatch(LineCategory.NODE_OPEN, key=m.group(1))


def match_leaf_open(line: str) -> LineMatch | None:
    m = _LEAF.match(line)
    if m is None:
        return None
    return LineMatch(LineCategory.LEAF_OPEN, key=m.group(1), value=m.group(2))


def match_disabled(line: str) -> LineMatch | None:
    """'disable', 'disabled' or either followed by a boolean word."""
    m = _DSBL.match(line)
    if m is None:
        return None
    return LineMatch(LineCategory.DISABLED, key="disabled", value=m.group(1) or "true")


def match_blackhole_ip(line: str) -> LineMatch | None:
    m = _IPBH.match(line)
    if m is None:
        return None
    return LineMatch(LineCategory.BLACKHOLE_IP, key=BLACKHOLE_KEY, value=m.group(1))


def match_named_attribute(line: str) -> LineMatch | None:
    m = _NAME.match(line)
    if m is None or m.group(1) not in NAMED_KEYS:
        return None
    return LineMatch(LineCategory.NAMED_ATTRIBUTE, key=m.group(1), value=m.group(2))


def match_ignored(line: str) -> LineMatch | None:
    if not line or _CMNT.match(line) or _MISC.match(line):
        return LineMatch(LineCategory.IGNORED)
    return None


def match_close_brace(line: str) -> LineMatch | None:
    if _RBRC.match(line):
        return LineMatch(LineCategory.CLOSE_BRACE)
    return None


RECOGNIZERS: tuple[Callable[[str], LineMatch | None], ...] = (
    match_multi_value,
    match_node_open,
    match_leaf_open,
    match_disabled,
    match_blackhole_ip,
    match_named_attribute,
    match_ignored,
    match_close_brace,
)


def classify(line: str) -> LineMatch:
    """Classify a stripped line; unrecognized shapes are IGNORED."""
    for recognizer in RECOGNIZERS:
        match = recognizer(line)
        if match is not None:
            return match
    return LineMatch(LineCategory.IGNORED)


def str_to_bool(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES
