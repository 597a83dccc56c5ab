# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""IndexedTreeStore package - Flat, indexed collection of tree items.

The package is organized into:
- core: Main IndexedTreeStore class with queries and mutations
- loading: Functions turning input records into TreeItem instances and indices

Example:
    >>> from genro_indexedtree import IndexedTreeStore
    >>> store = IndexedTreeStore([{'id': 1, 'parent': None, 'label': 'Root'}])
    >>> store.get_item(1).label
    'Root'
"""

from .core import IndexedTreeStore

__all__ = ["IndexedTreeStore"]
