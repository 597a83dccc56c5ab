# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeItem record and the root bucket marker."""

from __future__ import annotations

from typing import Any

CORE_FIELDS = frozenset(('id', 'parent', 'label'))


class _RootKey:
    """Bucket key for items without a parent."""

    __slots__ = ()

    def __repr__(self) -> str:
        return 'ROOT'

    def __reduce__(self) -> str:
        return 'ROOT'


ROOT = _RootKey()


def parent_key(parent: Any) -> Any:
    """Return the children-bucket key for a ``parent`` value.

    ``None`` (no parent) maps to ``ROOT``, anything else is used as is.
    """
    return ROOT if parent is None else parent


class TreeItem(dict):
    """A record in an IndexedTreeStore.

    A TreeItem is a plain dict with three well-known keys:
    - id: The item's identifier (int or str), required
    - parent: Identifier of the parent item, or None for a root item
    - label: Display string

    Any other key is an extension attribute, carried as is.

    Example:
        >>> item = TreeItem(id=1, parent=None, label='Root', color='red')
        >>> item.label
        'Root'
        >>> item.attr
        {'color': 'red'}
        >>> item == {'id': 1, 'parent': None, 'label': 'Root', 'color': 'red'}
        True
    """

    __slots__ = ()

    def __init__(self, _source: Any = None, **kwargs: Any) -> None:
        """Initialize a TreeItem.

        Args:
            _source: Optional mapping (or iterable of pairs) with the fields.
            **kwargs: Additional fields as keyword arguments.

        Raises:
            ValueError: If the resulting record has no 'id'.
        """
        if _source is None:
            super().__init__(**kwargs)
        else:
            super().__init__(_source, **kwargs)
        if 'id' not in self:
            raise ValueError("TreeItem requires an 'id'")

    def __repr__(self) -> str:
        return f"TreeItem({dict.__repr__(self)})"

    @property
    def id(self) -> int | str:
        """The item's identifier."""
        return self['id']

    @property
    def parent(self) -> int | str | None:
        """Identifier of the parent item, None for root items."""
        return self.get('parent')

    @property
    def label(self) -> str:
        """Display string, empty when absent."""
        return self.get('label', '')

    @property
    def is_root(self) -> bool:
        """True if the item has no parent."""
        return self.get('parent') is None

    @property
    def attr(self) -> dict[str, Any]:
        """Extension attributes (every key except id, parent and label)."""
        return {k: v for k, v in self.items() if k not in CORE_FIELDS}

    def get_attr(self, attr: str | None = None, default: Any = None) -> Any:
        """Get an extension attribute value or all of them.

        Args:
            attr: Attribute name. If None, returns all extension attributes.
            default: Default value if attribute not found.

        Returns:
            Attribute value, default, or dict of all extension attributes.
        """
        if attr is None:
            return self.attr
        return self.get(attr, default)

    def set_attr(self, _attr: dict[str, Any] | None = None, **kwargs: Any) -> None:
        """Set extension attributes on the item.

        The core fields cannot be changed here: they are indexed by the
        store, use IndexedTreeStore.update_item() instead.

        Args:
            _attr: Dictionary of attributes to set.
            **kwargs: Additional attributes as keyword arguments.

        Raises:
            ValueError: If a core field (id, parent, label) is given.
        """
        values = dict(_attr or {})
        values.update(kwargs)
        core = CORE_FIELDS.intersection(values)
        if core:
            raise ValueError(
                f"Cannot set {', '.join(sorted(core))} with set_attr, use update_item"
            )
        self.update(values)
