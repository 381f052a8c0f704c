"""Canonical ordering of resolved migrations.

Versioned migrations come first in ascending version order; repeatable
migrations follow. Equal versions and all repeatables are ordered by
description and then by script, so the result never depends on the order in
which a scanner returned classes.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import cmp_to_key

from .resolved import ResolvedMigration


def compare_migrations(left: ResolvedMigration, right: ResolvedMigration) -> int:
    """Return a negative, zero or positive number in the usual ``cmp`` sense."""
    if left.version is not None and right.version is None:
        return -1
    if left.version is None and right.version is not None:
        return 1
    if left.version is not None and right.version is not None:
        if left.version < right.version:
            return -1
        if right.version < left.version:
            return 1
    if left.description != right.description:
        return -1 if left.description < right.description else 1
    if left.script != right.script:
        return -1 if left.script < right.script else 1
    return 0


migration_sort_key = cmp_to_key(compare_migrations)


def sort_migrations(
    migrations: Iterable[ResolvedMigration],
) -> tuple[ResolvedMigration, ...]:
    """Return ``migrations`` in canonical order as a new tuple."""
    return tuple(sorted(migrations, key=migration_sort_key))
