"""Merges fragments from every source into one Terraform document."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Set, Tuple

from clone_agent.errors import FragmentCollisionError

from .types import CATEGORIES, Document, ResourceFragment

logger = logging.getLogger(__name__)

Key = Tuple[str, ...]


def _find_overlap(key: Key, seen: Set[Key], prefixes: Dict[Key, Key]) -> Optional[Key]:
    """
    Return an existing key equal to, containing, or contained by ``key``.

    ``prefixes`` maps every proper prefix of a placed key to the first key
    that introduced it.
    """
    if key in seen:
        return key
    if key in prefixes:
        return prefixes[key]
    for end in range(1, len(key)):
        if key[:end] in seen:
            return key[:end]
    return None


def assemble_document(*sources: Iterable[ResourceFragment]) -> Document:
    """
    Merge fragment sources, in order, into a document keyed by category,
    then type, then name.

    Raises:
        ValueError: A fragment uses an unknown category
        FragmentCollisionError: Two fragments share a key, or one fragment
            would be nested inside another
    """
    tree: Dict[str, Dict[str, Any]] = {category: {} for category in CATEGORIES}
    seen: Set[Key] = set()
    prefixes: Dict[Key, Key] = {}

    for source in sources:
        for fragment in source:
            if fragment.category not in CATEGORIES:
                raise ValueError(f"Unknown Terraform category: {fragment.category}")

            key = fragment.key
            existing = _find_overlap(key, seen, prefixes)
            if existing is not None:
                logger.error(f"Fragment collision: {'.'.join(key)} vs {'.'.join(existing)}")
                raise FragmentCollisionError(key, existing)
            seen.add(key)
            for end in range(1, len(key)):
                prefixes.setdefault(key[:end], key)

            if len(key) == 1:
                tree[fragment.category] = dict(fragment.attributes)
                continue
            node = tree[fragment.category]
            for part in key[1:-1]:
                node = node.setdefault(part, {})
            node[key[-1]] = dict(fragment.attributes)

    logger.debug(f"Assembled {len(seen)} fragments")
    return tree
