# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""OrgChart - Example of an IndexedTreeStore holding a company structure.

A didactic example showing lookups, subtree listing, reparenting
and cascading removal over items linked by parent ids.
"""

from __future__ import annotations

from genro_indexedtree import IndexedTreeStore, ItemNotFoundError

STAFF = [
    {'id': 'ceo', 'parent': None, 'label': 'Chief Executive', 'name': 'Ada'},
    {'id': 'cto', 'parent': 'ceo', 'label': 'Technology', 'name': 'Linus'},
    {'id': 'cfo', 'parent': 'ceo', 'label': 'Finance', 'name': 'Grace'},
    {'id': 'dev1', 'parent': 'cto', 'label': 'Developer', 'name': 'Guido'},
    {'id': 'dev2', 'parent': 'cto', 'label': 'Developer', 'name': 'Barbara'},
    {'id': 'acc1', 'parent': 'cfo', 'label': 'Accountant', 'name': 'Luca'},
]


class OrgChart:
    """A company structure backed by an IndexedTreeStore.

    Example:
        >>> chart = OrgChart(STAFF)
        >>> chart.team('cto')
        ['Guido', 'Barbara']
        >>> chart.chain_of_command('dev1')
        ['Linus', 'Ada']
    """

    def __init__(self, staff):
        self._store = IndexedTreeStore(staff, detect_cycles=True)

    @property
    def store(self):
        """Access the underlying IndexedTreeStore."""
        return self._store

    def team(self, person_id):
        """Names of everybody below person_id, level by level."""
        return [item['name'] for item in self._store.get_all_children(person_id)]

    def chain_of_command(self, person_id):
        """Names of the managers above person_id, nearest first."""
        return [item['name'] for item in self._store.get_all_parents(person_id)]

    def transfer(self, person_id, new_manager_id):
        self._store.update_item({'id': person_id, 'parent': new_manager_id})

    def hire(self, person_id, manager_id, role, name):
        self._store.add_item(
            {'id': person_id, 'parent': manager_id, 'label': role, 'name': name}
        )

    def close_department(self, head_id):
        """Remove head_id and everybody reporting to them."""
        self._store.remove_item(head_id)

    def render(self, person_id=None, indent=0):
        lines = []
        for item in self._store.get_children(person_id):
            lines.append(f"{'  ' * indent}{item['name']} ({item.label})")
            lines.extend(self.render(item.id, indent + 1))
        return lines


if __name__ == '__main__':
    chart = OrgChart(STAFF)
    print('\n'.join(chart.render()))

    chart.hire('dev3', 'cto', 'Developer', 'Margaret')
    chart.transfer('acc1', 'cto')
    print('\nTechnology team:', chart.team('cto'))

    chart.close_department('cfo')
    print('\nAfter closing Finance:')
    print('\n'.join(chart.render()))

    try:
        chart.transfer('cfo', 'ceo')
    except ItemNotFoundError as exc:
        print('\n', exc)

    print('\nInitial structure is still available:', len(chart.store.get_initial_state()))
