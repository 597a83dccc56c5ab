# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""IndexedTreeStore - A flat collection of tree-structured items.

This module provides the IndexedTreeStore class. Items are kept in a single
insertion-ordered list (the canonical sequence) while two indices give O(1)
access to an item by id and to the direct children of any id. The tree is
implied by the ``parent`` field of each item.

Key Features:
    - **O(1) lookup**: dict-based identifier index
    - **O(1) children**: per-parent buckets, in insertion order
    - **Cascading operations**: breadth-first subtree listing and deletion
    - **Initial snapshot**: deep copy of the construction input, never mutated
    - **Merge updates**: update_item() merges fields onto the live record

Example:
    Basic usage::

        store = IndexedTreeStore([
            {'id': 1, 'parent': None, 'label': 'Root'},
            {'id': 2, 'parent': 1, 'label': 'Child'},
            {'id': 3, 'parent': 2, 'label': 'Grandchild', 'color': 'red'},
        ])

        store.get_children(1)       # [TreeItem(id=2 ...)]
        store.get_all_children(1)   # [TreeItem(id=2 ...), TreeItem(id=3 ...)]

        store.update_item({'id': 3, 'label': 'Leaf'})
        store.get_item(3)['color']  # 'red' (merged, not replaced)

        store.remove_item(2)        # removes 2 and 3
"""

from __future__ import annotations

import copy
import logging
from collections import deque
from collections.abc import Iterable, Mapping
from typing import Any, Iterator

from ..exceptions import CycleError, DuplicateIdentifierError, ItemNotFoundError
from ..item import ROOT, TreeItem, parent_key
from .loading import add_to_bucket, coerce_item, load_items

LOGGER = logging.getLogger(__name__)


class IndexedTreeStore:
    """An in-memory store of items linked by parent identifiers.

    IndexedTreeStore provides:
    - get_all() / get_initial_state(): Whole collection, live or as constructed
    - get_item(id): O(1) lookup of the live record
    - get_children(id) / get_all_children(id): Direct children, whole subtree
    - add_item / remove_item / update_item / update_items: Mutations that keep
      the canonical sequence and both indices consistent

    Returned lists are new lists, the items inside them are the live records.

    Attributes:
        detect_cycles: If True, traversals raise CycleError when an item's
            id is already on its own parent path. If False (default), a parent cycle makes traversals loop
            forever.

    Example:
        >>> store = IndexedTreeStore([{'id': 1, 'parent': None, 'label': 'a'}])
        >>> store.add_item({'id': 2, 'parent': 1, 'label': 'b'})
        >>> [item.id for item in store.get_children(1)]
        [2]
    """

    __slots__ = ('_items', '_initial', '_by_id', '_children', '_detect_cycles')

    def __init__(
        self,
        items: Iterable[Mapping[str, Any]] | None = None,
        *,
        detect_cycles: bool = False,
    ) -> None:
        """Initialize an IndexedTreeStore.

        Args:
            items: Optional initial records, in order. Each is a mapping with
                at least an 'id'; TreeItem instances are kept as they are,
                other mappings are copied into new TreeItem instances.
                No uniqueness check is done here: with duplicate ids the
                later item wins in the identifier index.
            detect_cycles: Raise CycleError instead of looping forever when a
                traversal meets a parent cycle.
        """
        self._items, self._by_id, self._children = load_items(items or ())
        self._initial: list[TreeItem] = copy.deepcopy(self._items)
        self._detect_cycles = detect_cycles

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"IndexedTreeStore({len(self._items)} items)"

    def __len__(self) -> int:
        """Return the number of items in the canonical sequence."""
        return len(self._items)

    def __iter__(self) -> Iterator[TreeItem]:
        """Iterate over items in canonical order."""
        return iter(self._items)

    def __contains__(self, item_id: Any) -> bool:
        return item_id in self._by_id

    @property
    def detect_cycles(self) -> bool:
        return self._detect_cycles

    # ==================== Queries ====================

    def get_all(self) -> list[TreeItem]:
        """Return all items in insertion order."""
        return list(self._items)

    def get_initial_state(self) -> list[TreeItem]:
        """Return a deep copy of the items as they were at construction.

        Later mutations of the store never show up here, and mutating the
        returned records does not alter the snapshot.
        """
        return copy.deepcopy(self._initial)

    def get_item(self, item_id: Any) -> TreeItem | None:
        """Return the live item with the given id, or None."""
        return self._by_id.get(item_id)

    def get_children(self, item_id: Any) -> list[TreeItem]:
        """Return the direct children of item_id in insertion order.

        Args:
            item_id: Parent identifier. None (or ROOT) returns root items.

        Returns:
            New list of children; empty if there are none or item_id is unknown.
        """
        return list(self._children.get(parent_key(item_id), ()))

    def iter_all_children(self, item_id: Any) -> Iterator[TreeItem]:
        """Yield every descendant of item_id in breadth-first order.

        With detect_cycles set, each queued item carries the ids on its path
        from item_id; an item whose id is on its own path closes a cycle.
        Duplicate ids among siblings are not a cycle.

        Raises:
            CycleError: If detect_cycles is set and a parent cycle is found.
        """
        if not self._detect_cycles:
            queue = deque(self._children.get(parent_key(item_id), ()))
            while queue:
                item = queue.popleft()
                yield item
                queue.extend(self._children.get(item.id, ()))
            return

        root_path = frozenset((item_id,))
        tracked = deque(
            (child, root_path) for child in self._children.get(parent_key(item_id), ())
        )
        while tracked:
            item, path = tracked.popleft()
            if item.id in path:
                raise CycleError(item.id)
            yield item
            child_path = path | {item.id}
            tracked.extend((child, child_path) for child in self._children.get(item.id, ()))

    def get_all_children(self, item_id: Any) -> list[TreeItem]:
        """Return every descendant of item_id, level by level.

        Siblings come before grandchildren: for A -> (B, E) and B -> C -> D
        the result is [B, E, C, D].

        Args:
            item_id: Root of the subtree (excluded from the result).

        Returns:
            List of descendants; empty if item_id has none or is unknown.

        Raises:
            CycleError: If detect_cycles is set and a parent cycle is found.
        """
        return list(self.iter_all_children(item_id))

    def get_parent(self, item_id: Any) -> TreeItem | None:
        """Return the parent item of item_id.

        Returns None for root items, unknown ids and parents that are not
        in the store.
        """
        item = self._by_id.get(item_id)
        if item is None or item.parent is None:
            return None
        return self._by_id.get(item.parent)

    def get_all_parents(self, item_id: Any) -> list[TreeItem]:
        """Return the ancestors of item_id, nearest first.

        The walk stops at a root item or at a parent id missing from the store.

        Raises:
            CycleError: If detect_cycles is set and a parent cycle is found.
        """
        result: list[TreeItem] = []
        seen = {item_id} if self._detect_cycles else None
        parent = self.get_parent(item_id)
        while parent is not None:
            if seen is not None:
                if parent.id in seen:
                    raise CycleError(parent.id)
                seen.add(parent.id)
            result.append(parent)
            parent = self.get_parent(parent.id)
        return result

    # ==================== Mutations ====================

    def add_item(self, item: Mapping[str, Any]) -> None:
        """Add a new item at the end of the collection and of its sibling list.

        The parent id is not checked: it may reference a missing item.

        Args:
            item: Mapping with at least an 'id'. A TreeItem is stored as is,
                other mappings are copied.

        Raises:
            DuplicateIdentifierError: If an item with the same id exists.
                The store is left unchanged.
        """
        new_item = coerce_item(item)
        if new_item.id in self._by_id:
            raise DuplicateIdentifierError(new_item.id)

        self._items.append(new_item)
        self._by_id[new_item.id] = new_item
        add_to_bucket(self._children, new_item)
        LOGGER.debug(
            "Item added",
            extra={"op": "add_item", "item_id": new_item.id, "parent": new_item.parent},
        )

    def remove_item(self, item_id: Any) -> None:
        """Remove an item together with its whole subtree.

        The subtree is found through the children index, so an id missing
        from the store still removes the items whose parent is that id (and
        their subtrees). An id that is neither stored nor used as a parent is
        ignored. None and ROOT are not identifiers and are ignored as well.

        Raises:
            CycleError: If detect_cycles is set and a parent cycle is found.
        """
        if item_id is None or item_id is ROOT:
            return

        doomed = {item_id}
        doomed.update(item.id for item in self.iter_all_children(item_id))

        self._items = [item for item in self._items if item.id not in doomed]
        for doomed_id in doomed:
            self._by_id.pop(doomed_id, None)
            self._children.pop(doomed_id, None)

        for key in list(self._children):
            kept = [child for child in self._children[key] if child.id not in doomed]
            if kept:
                self._children[key] = kept
            else:
                del self._children[key]

        LOGGER.debug(
            "Item removed",
            extra={"op": "remove_item", "item_id": item_id, "removed": len(doomed)},
        )

    def update_item(self, updated: Mapping[str, Any]) -> None:
        """Merge fields onto an existing item.

        Every key of ``updated`` overwrites the stored one; keys not present
        are left untouched. The id is used for lookup and never changes.

        If the parent or the label changes, the item is taken out of its
        sibling list and appended to the list of its (new) parent. A change
        of label alone thus moves the item to the end of its siblings.

        Args:
            updated: Mapping with the item's 'id' and the fields to change.

        Raises:
            ValueError: If updated has no 'id'.
            ItemNotFoundError: If no item has that id. The store is left
                unchanged.
            TypeError: If the new parent is not hashable. The store is left
                unchanged.
        """
        if 'id' not in updated:
            raise ValueError("update_item requires an 'id'")
        item_id = updated['id']
        current = self._by_id.get(item_id)
        if current is None:
            raise ItemNotFoundError(item_id)

        new_parent = updated.get('parent', current.parent)
        new_label = updated.get('label', current.label)
        moved = new_parent != current.parent or new_label != current.label

        if moved:
            new_key = parent_key(new_parent)
            # unhashable parents fail here, before any bucket changes
            self._children.get(new_key)
            old_key = parent_key(current.parent)
            siblings = [child for child in self._children.get(old_key, ()) if child is not current]
            if siblings:
                self._children[old_key] = siblings
            else:
                self._children.pop(old_key, None)

        current.update(updated)

        if moved:
            add_to_bucket(self._children, current)

        LOGGER.debug(
            "Item updated",
            extra={"op": "update_item", "item_id": item_id, "moved": moved},
        )

    def update_items(self, new_items: Iterable[Mapping[str, Any]]) -> None:
        """Replace the whole collection.

        Each record is copied field by field, then both indices are rebuilt
        as in the constructor. The initial snapshot is not affected.
        """
        self._items, self._by_id, self._children = load_items(new_items, copy=True)
        LOGGER.debug(
            "Items replaced",
            extra={"op": "update_items", "count": len(self._items)},
        )
