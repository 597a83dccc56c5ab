# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-IndexedTree - Flat collections of tree-structured items.

A lightweight, zero-dependency library keeping items linked by parent ids
with O(1) lookup by id and by parent, for the Genro ecosystem (Genro Kyō).
"""

__version__ = "0.1.0"

from .exceptions import (
    CycleError,
    DuplicateIdentifierError,
    ItemNotFoundError,
    TreeStoreError,
)
from .item import ROOT, TreeItem
from .store import IndexedTreeStore

__all__ = [
    # Core classes
    "IndexedTreeStore",
    "TreeItem",
    "ROOT",
    # Exceptions
    "TreeStoreError",
    "DuplicateIdentifierError",
    "ItemNotFoundError",
    "CycleError",
]
