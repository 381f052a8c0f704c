"""Tests for the single-location Python migration resolution pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest
from sqlalchemy import Connection

from packages.strata_core.resolver import (
    Location,
    MigrationDiscoveryError,
    MigrationInfoProvider,
    MigrationInstantiationError,
    MigrationResolutionError,
    MigrationType,
    MigrationVersion,
    MissingDescriptionError,
    PythonMigration,
    PythonMigrationResolver,
    SettingsAware,
    UnrecognizedNamingConventionError,
)
from packages.strata_shared.config import StrataSettings
from packages.strata_shared.errors import codes


class _Noop(PythonMigration):
    """Base for fixtures whose ``migrate`` does nothing."""

    def migrate(self, connection: Connection) -> None:
        return None


class V1__InitSchema(_Noop):
    pass


class V1__One(_Noop):
    pass


class V2__Two(_Noop):
    pass


class R__Last(_Noop):
    pass


class R__Reindex(_Noop):
    pass


class BadName(_Noop):
    pass


class V2__BlankDescription(_Noop, MigrationInfoProvider):
    def get_version(self) -> tuple[int, ...]:
        return (2,)

    def get_description(self) -> str:
        return ""


class V7__Exploding(_Noop):
    def __init__(self) -> None:
        raise RuntimeError("constructor failed")


class V8__Configured(_Noop, SettingsAware):
    received: list[StrataSettings] = []

    def set_settings(self, settings: StrataSettings) -> None:
        type(self).received.append(settings)


@dataclass(frozen=True, slots=True)
class _FakeScanner:
    """Scanner returning fixed classes and recording each call."""

    classes: tuple[type, ...] = tuple()
    error: Exception | None = None
    calls: list[tuple[Location, type]] = field(default_factory=list)

    def scan_for_classes(self, location: Location, marker: type) -> tuple[type, ...]:
        """Record the call, then return or raise."""
        self.calls.append((location, marker))
        if self.error is not None:
            raise self.error
        return self.classes


def _resolver(
    scanner: _FakeScanner,
    *,
    location: str = "package:db.migration",
    settings: StrataSettings | None = None,
) -> PythonMigrationResolver:
    """Build a resolver over a fake scanner."""
    return PythonMigrationResolver(
        scanner=scanner,
        location=location,
        settings=settings or StrataSettings(),
    )


def test_resolves_single_versioned_migration() -> None:
    """Scenario: ``V1__InitSchema`` yields one fully described descriptor."""
    scanner = _FakeScanner(classes=(V1__InitSchema,))

    (migration,) = _resolver(scanner).resolve_migrations()

    assert migration.version == MigrationVersion(parts=(1,))
    assert migration.description == "InitSchema"
    assert migration.checksum is None
    assert migration.type is MigrationType.PYTHON
    assert migration.script == f"{__name__}.V1__InitSchema"
    assert migration.physical_location.endswith("test_core_resolver.py")
    assert isinstance(migration.executor.migration, V1__InitSchema)
    assert scanner.calls == [(Location.parse("package:db.migration"), PythonMigration)]


def test_resolves_single_repeatable_migration() -> None:
    """Scenario: ``R__Reindex`` yields a versionless descriptor."""
    (migration,) = _resolver(_FakeScanner(classes=(R__Reindex,))).resolve_migrations()

    assert migration.version is None
    assert migration.is_repeatable is True
    assert migration.description == "Reindex"


def test_returns_canonical_order_regardless_of_scan_order() -> None:
    """Scenario: V2, V1, R arrive in any order and leave as V1, V2, R."""
    orders = [
        (V2__Two, V1__One, R__Last),
        (R__Last, V2__Two, V1__One),
        (V1__One, R__Last, V2__Two),
    ]
    for classes in orders:
        resolved = _resolver(_FakeScanner(classes=classes)).resolve_migrations()
        assert [migration.description for migration in resolved] == [
            "One",
            "Two",
            "Last",
        ]
        assert isinstance(resolved, tuple)


def test_non_package_location_returns_empty_without_scanning() -> None:
    """Scenario: a filesystem location is skipped before discovery."""
    scanner = _FakeScanner(classes=(V1__One,))

    resolved = _resolver(scanner, location="filesystem:/srv/migrations").resolve_migrations()

    assert resolved == tuple()
    assert scanner.calls == []


def test_unrecognized_name_aborts_with_location_and_cause() -> None:
    """Scenario: ``BadName`` fails the whole call, with no partial result."""
    scanner = _FakeScanner(classes=(V1__One, BadName, V2__Two))

    with pytest.raises(MigrationResolutionError) as exc_info:
        _resolver(scanner).resolve_migrations()

    error = exc_info.value
    assert isinstance(error.__cause__, UnrecognizedNamingConventionError)
    assert "BadName" in str(error.__cause__)
    assert error.location == "package:db.migration"
    assert error.script == f"{__name__}.BadName"
    assert "package:db.migration" in str(error)


def test_blank_self_description_aborts_resolution() -> None:
    """Scenario: version 2 with an empty description fails resolution."""
    with pytest.raises(MigrationResolutionError) as exc_info:
        _resolver(_FakeScanner(classes=(V2__BlankDescription,))).resolve_migrations()

    assert isinstance(exc_info.value.__cause__, MissingDescriptionError)
    assert "Missing description for migration 2" in str(exc_info.value.__cause__)


def test_discovery_failure_is_wrapped() -> None:
    """Scanner errors propagate as one resolution error."""
    cause = MigrationDiscoveryError("cannot import db.migration")

    with pytest.raises(MigrationResolutionError) as exc_info:
        _resolver(_FakeScanner(error=cause)).resolve_migrations()

    assert exc_info.value.__cause__ is cause
    assert exc_info.value.script is None


def test_instantiation_failure_is_wrapped() -> None:
    """Constructor failures name the class and abort resolution."""
    with pytest.raises(MigrationResolutionError) as exc_info:
        _resolver(_FakeScanner(classes=(V1__One, V7__Exploding))).resolve_migrations()

    cause = exc_info.value.__cause__
    assert isinstance(cause, MigrationInstantiationError)
    assert "V7__Exploding" in str(cause)
    assert isinstance(cause.__cause__, RuntimeError)


def test_settings_are_shared_by_reference() -> None:
    """Settings-aware migrations receive the very same frozen settings object."""
    V8__Configured.received.clear()
    settings = StrataSettings()

    _resolver(_FakeScanner(classes=(V8__Configured,)), settings=settings).resolve_migrations()

    assert V8__Configured.received == [settings]
    assert V8__Configured.received[0] is settings


def test_resolution_error_converts_to_error_detail() -> None:
    """The aggregate error should expose code and cause metadata."""
    with pytest.raises(MigrationResolutionError) as exc_info:
        _resolver(_FakeScanner(classes=(BadName,))).resolve_migrations()

    detail = exc_info.value.to_error_detail()
    assert detail.code == codes.RESOLUTION_FAILURE
    assert detail.metadata["location"] == "package:db.migration"
    assert detail.metadata["cause_code"] == codes.UNRECOGNIZED_NAMING_CONVENTION
    assert "BadName" in detail.message


def test_descriptors_are_immutable() -> None:
    """Resolved descriptors must reject mutation."""
    (migration,) = _resolver(_FakeScanner(classes=(V1__One,))).resolve_migrations()

    with pytest.raises(AttributeError):
        migration.description = "changed"  # type: ignore[misc]


def test_target_schema_is_bound_to_executors() -> None:
    """The configured target schema travels with every executor."""
    settings = StrataSettings(resolver={"target_schema": "app"})

    (migration,) = _resolver(
        _FakeScanner(classes=(V1__One,)), settings=settings
    ).resolve_migrations()

    assert migration.executor.schema == "app"
