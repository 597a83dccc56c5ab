# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""IndexedTreeStore exceptions."""

from __future__ import annotations

from typing import Any


class TreeStoreError(Exception):
    """Base exception for IndexedTreeStore errors."""

    pass


class DuplicateIdentifierError(TreeStoreError):
    """Raised when an item is added with an id already in the store."""

    def __init__(self, item_id: Any) -> None:
        super().__init__(f"Item with id {item_id!r} already exists")
        self.item_id = item_id


class ItemNotFoundError(TreeStoreError):
    """Raised when an update targets an id that is not in the store."""

    def __init__(self, item_id: Any) -> None:
        super().__init__(f"Item {item_id!r} not found")
        self.item_id = item_id


class CycleError(TreeStoreError):
    """Raised when a traversal revisits an item (detect_cycles=True only)."""

    def __init__(self, item_id: Any) -> None:
        super().__init__(f"Parent cycle detected at item {item_id!r}")
        self.item_id = item_id
