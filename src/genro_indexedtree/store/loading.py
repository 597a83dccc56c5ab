# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Loading functions for IndexedTreeStore.

Turns an input sequence of records into TreeItem instances and builds the
two lookup indices the store keeps next to its canonical sequence:
- by_id: identifier -> item
- children: parent key -> items having that parent, in insertion order
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..item import TreeItem, parent_key

LOGGER = logging.getLogger(__name__)


def coerce_item(item: Mapping[str, Any], copy: bool = False) -> TreeItem:
    """Return item as a TreeItem.

    A TreeItem is returned unchanged (same object) unless copy is True. Any
    other mapping is copied into a new TreeItem. Copies are shallow.

    Raises:
        TypeError: If item is not a mapping.
        ValueError: If item has no 'id'.
    """
    if isinstance(item, TreeItem) and not copy:
        return item
    if not isinstance(item, Mapping):
        raise TypeError(f"item must be a mapping, not {type(item).__name__}")
    return TreeItem(item)


def add_to_bucket(
    children: dict[Any, list[TreeItem]], item: TreeItem
) -> None:
    """Append item to the bucket of its parent, creating the bucket."""
    key = parent_key(item.parent)
    if key not in children:
        children[key] = []
    children[key].append(item)


def build_indices(
    items: Iterable[TreeItem],
) -> tuple[dict[Any, TreeItem], dict[Any, list[TreeItem]]]:
    """Build the identifier and children indices in a single pass.

    With duplicate identifiers the later item wins in the identifier index,
    while both stay in their children buckets.

    Args:
        items: TreeItem instances in canonical order.

    Returns:
        Tuple of (by_id, children).
    """
    by_id: dict[Any, TreeItem] = {}
    children: dict[Any, list[TreeItem]] = {}
    for item in items:
        if item.id in by_id:
            LOGGER.debug(
                "Duplicate id while indexing, later item wins",
                extra={"op": "build_indices", "item_id": item.id},
            )
        by_id[item.id] = item
        add_to_bucket(children, item)
    return by_id, children


def load_items(
    source: Iterable[Mapping[str, Any]],
    copy: bool = False,
) -> tuple[list[TreeItem], dict[Any, TreeItem], dict[Any, list[TreeItem]]]:
    """Coerce source records and index them.

    Args:
        source: Input records in canonical order.
        copy: If True, every record is copied, TreeItem instances included.

    Returns:
        Tuple of (items, by_id, children).
    """
    items = [coerce_item(item, copy=copy) for item in source]
    by_id, children = build_indices(items)
    return items, by_id, children
