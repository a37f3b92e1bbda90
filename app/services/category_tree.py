"""
Category tree engine

Pure functions shared by the category service: slug/key derivation,
suffix allocation and assembly of the nested menu tree from a flat list
of category records. Nothing in here touches the database.
"""

import re
import logging
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Set

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_SLUG_STRIP = re.compile(r"[^a-z0-9\s-]")
_KEY_STRIP = re.compile(r"[^a-z0-9\s_]")

LOCALE_NAME_FIELDS = ("name_en", "name_vi", "name_ko")


def _derive(name: str, strip: re.Pattern, separator: str) -> str:
    text = (name or "").lower().strip()
    text = strip.sub("", text)
    text = _WHITESPACE.sub(separator, text)
    text = re.sub(re.escape(separator) + "+", separator, text)
    return text.strip(separator)


def derive_slug(name: str) -> str:
    """
    Build a URL slug from a display name

    "About Us" -> "about-us". Characters outside [a-z0-9 -] are dropped
    after lowercasing, so "Công ty!!!" becomes "cng-ty".
    """
    return _derive(name, _SLUG_STRIP, "-")


def derive_key(name: str) -> str:
    """Build the underscore form used by clients: "About Us" -> "about_us" """
    return _derive(name, _KEY_STRIP, "_")


def suffixed(candidate: str, separator: str, attempt: int, max_length: Optional[int] = None) -> str:
    """
    Candidate for the given attempt: the bare value first, then value-1, value-2...

    With max_length the base is cut so that base plus suffix still fits.
    """
    suffix = f"{separator}{attempt}" if attempt else ""
    if max_length is not None and len(candidate) + len(suffix) > max_length:
        candidate = candidate[:max_length - len(suffix)].rstrip(separator)
    return f"{candidate}{suffix}"


async def allocate_unique(
    candidate: str,
    separator: str,
    exists: Callable[[str], Awaitable[bool]],
    max_length: Optional[int] = None,
) -> str:
    """
    Return the first free value among candidate, candidate-1, candidate-2...

    `exists` probes the store and must already exclude the record being
    updated. Values never exceed max_length when it is given.
    """
    attempt = 0
    value = suffixed(candidate, separator, attempt, max_length)
    while await exists(value):
        attempt += 1
        value = suffixed(candidate, separator, attempt, max_length)
    return value


def resolve_display_name(record: Any) -> str:
    """Explicit name, else the first localized name, else an empty string"""
    name = _field(record, "name")
    if name:
        return name
    for field in LOCALE_NAME_FIELDS:
        value = _field(record, field)
        if value:
            return value
    return ""


def sort_key(node: Dict[str, Any]):
    """Siblings order: sort_order ascending, then display name"""
    return (node.get("sort_order") or 0, resolve_display_name(node))


def _field(record: Any, name: str) -> Any:
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def build_tree(
    records: Iterable[Any],
    to_node: Callable[[Any], Dict[str, Any]],
    known_ids: Optional[Set[Any]] = None,
) -> List[Dict[str, Any]]:
    """
    Assemble the nested tree from a flat set of categories

    Each record is converted with `to_node` and linked under its parent when
    the parent is part of the same set. A record whose parent is absent
    (filtered out as inactive, or missing) becomes a root. Every sibling list,
    roots included, is ordered with `sort_key`.

    `known_ids`, when given, holds every stored category id and separates a
    parent that was filtered out from one that no longer exists.
    """
    records = list(records)
    nodes: Dict[Any, Dict[str, Any]] = {}
    for record in records:
        node = to_node(record)
        node["children"] = []
        nodes[_field(record, "id")] = node

    roots: List[Dict[str, Any]] = []
    for record in records:
        node = nodes[_field(record, "id")]
        parent_id = _field(record, "parent_id")
        parent = nodes.get(parent_id) if parent_id is not None else None
        if parent is None:
            if parent_id is not None and known_ids is not None and parent_id not in known_ids:
                logger.warning(f"Category {node.get('id')} references missing parent {parent_id}, shown as root")
            elif parent_id is not None:
                logger.debug(f"Category {node.get('id')} shown as root, parent {parent_id} not in view")
            roots.append(node)
        else:
            parent["children"].append(node)

    roots.sort(key=sort_key)
    reached = 0
    stack = list(roots)
    while stack:
        node = stack.pop()
        reached += 1
        node["children"].sort(key=sort_key)
        stack.extend(node["children"])

    if reached != len(nodes):
        logger.warning(f"{len(nodes) - reached} categories unreachable from any root (parent cycle in stored data)")

    return roots


def find_cycle(
    category_id: Any,
    new_parent_id: Optional[Any],
    parent_of: Dict[Any, Optional[Any]],
) -> bool:
    """
    True if making `new_parent_id` the parent of `category_id` closes a loop

    `parent_of` maps every known category id to its current parent id.
    """
    seen = set()
    current = new_parent_id
    while current is not None:
        if current == category_id:
            return True
        if current in seen:
            # Pre-existing loop that does not involve this category
            return False
        seen.add(current)
        current = parent_of.get(current)
    return False
