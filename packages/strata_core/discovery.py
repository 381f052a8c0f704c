"""Discovery collaborators that enumerate migration classes for a location.

Two scanners satisfy the resolver's ``MigrationScanner`` contract:

- ``RegistryScanner`` reads classes explicitly registered with a
  ``MigrationRegistry`` (usually through the ``@register_migration``
  decorator at import time).
- ``PackageScanner`` imports a package tree and collects the migration classes
  defined in it.

Both return classes sorted by fully-qualified name. The resolver still sorts
its output, so this ordering only makes scanning reproducible.
"""

from __future__ import annotations

import importlib
import inspect
import pkgutil
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from threading import RLock
from types import ModuleType
from typing import TypeVar

from packages.strata_shared.logging import fields, get_logger

from .resolver.errors import MigrationDiscoveryError, MigrationRegistrationError
from .resolver.extractor import migration_script
from .resolver.location import Location

_LOGGER = get_logger(__name__)

TMarker = TypeVar("TMarker")
TClass = TypeVar("TClass", bound=type)


@dataclass(slots=True)
class MigrationRegistry:
    """In-memory registry of migration classes keyed by fully-qualified name."""

    _classes: dict[str, type] = field(default_factory=dict)
    _lock: RLock = field(default_factory=RLock)

    def register(self, migration_class: type) -> None:
        """Register one class; re-registering the same class is a no-op."""
        if not isinstance(migration_class, type):
            raise MigrationRegistrationError(
                f"only classes can be registered as migrations, got {migration_class!r}"
            )
        script = migration_script(migration_class)
        with self._lock:
            existing = self._classes.get(script)
            if existing is not None and existing is not migration_class:
                raise MigrationRegistrationError(
                    f"duplicate migration registration with a different class: {script}"
                )
            self._classes[script] = migration_class

    def unregister(self, migration_class: type) -> None:
        """Remove one class if it is registered."""
        script = migration_script(migration_class)
        with self._lock:
            if self._classes.get(script) is migration_class:
                del self._classes[script]

    def list_classes(self) -> tuple[type, ...]:
        """Return all registered classes sorted by fully-qualified name."""
        with self._lock:
            items = sorted(self._classes.items())
        return tuple(migration_class for _, migration_class in items)

    def clear(self) -> None:
        """Remove every registration."""
        with self._lock:
            self._classes.clear()


_DEFAULT_REGISTRY = MigrationRegistry()


def get_registry() -> MigrationRegistry:
    """Return the process-local default migration registry."""
    return _DEFAULT_REGISTRY


def register_migration(migration_class: TClass) -> TClass:
    """Class decorator registering a migration in the default registry."""
    _DEFAULT_REGISTRY.register(migration_class)
    return migration_class


def _select(
    classes: Iterable[type], location: Location, marker: type[TMarker]
) -> tuple[type[TMarker], ...]:
    """Return concrete ``marker`` subclasses declared under ``location``."""
    selected: dict[str, type[TMarker]] = {}
    for candidate in classes:
        if not issubclass(candidate, marker) or candidate is marker:
            continue
        if inspect.isabstract(candidate):
            continue
        if not location.contains_module(candidate.__module__):
            continue
        selected[migration_script(candidate)] = candidate
    return tuple(selected[key] for key in sorted(selected))


@dataclass(frozen=True, slots=True)
class RegistryScanner:
    """Scanner backed by explicit registrations."""

    registry: MigrationRegistry = field(default_factory=get_registry)

    def scan_for_classes(
        self, location: Location, marker: type[TMarker]
    ) -> tuple[type[TMarker], ...]:
        """Return registered ``marker`` subclasses under a package location."""
        if not location.is_package:
            raise MigrationDiscoveryError(
                f"registry scanner only supports package locations: {location}"
            )
        found = _select(self.registry.list_classes(), location, marker)
        _LOGGER.debug(
            "found %d registered migrations in %s",
            len(found),
            location,
            extra={fields.MIGRATION_COUNT: len(found)},
        )
        return found


@dataclass(frozen=True, slots=True)
class PackageScanner:
    """Scanner that imports a package tree and inspects its classes."""

    def scan_for_classes(
        self, location: Location, marker: type[TMarker]
    ) -> tuple[type[TMarker], ...]:
        """Import ``location`` and every submodule, returning migration classes."""
        if not location.is_package:
            raise MigrationDiscoveryError(
                f"package scanner only supports package locations: {location}"
            )
        modules = _import_package_tree(location.path)
        candidates = (
            member
            for module in modules
            for _, member in inspect.getmembers(module, inspect.isclass)
            if member.__module__ == module.__name__
        )
        found = _select(candidates, location, marker)
        _LOGGER.debug(
            "found %d migrations in %d modules of %s",
            len(found),
            len(modules),
            location,
            extra={fields.MIGRATION_COUNT: len(found)},
        )
        return found


def _import_package_tree(package_name: str) -> tuple[ModuleType, ...]:
    """Import one package and all of its submodules."""
    try:
        package = importlib.import_module(package_name)
    except Exception as exc:
        raise MigrationDiscoveryError(
            f"unable to import migration package '{package_name}': {exc}"
        ) from exc

    modules: list[ModuleType] = [package]
    search_path = getattr(package, "__path__", None)
    if search_path is None:
        return tuple(modules)

    for module_info in sorted(
        pkgutil.walk_packages(
            search_path, prefix=f"{package_name}.", onerror=_raise_subpackage_error
        ),
        key=lambda info: info.name,
    ):
        try:
            modules.append(importlib.import_module(module_info.name))
        except Exception as exc:
            raise MigrationDiscoveryError(
                f"unable to import migration module '{module_info.name}': {exc}"
            ) from exc
    return tuple(modules)


def _raise_subpackage_error(module_name: str) -> None:
    """Fail discovery for a subpackage ``walk_packages`` could not import.

    ``pkgutil`` calls this from inside its ``except`` block, so the active
    exception is the import failure.
    """
    cause = sys.exc_info()[1]
    raise MigrationDiscoveryError(
        f"unable to import migration package '{module_name}': {cause}"
    ) from cause
