"""Errors raised while resolving migrations.

Every error converts to the shared ``ErrorDetail`` shape so callers can report
resolution failures without knowing the exception hierarchy.
"""

from __future__ import annotations

from packages.strata_shared.errors import (
    ErrorDetail,
    codes,
    conflict_error,
    dependency_error,
    internal_error,
    validation_error,
)


class MigrationError(RuntimeError):
    """Base error for all migration resolution failures."""

    code: str = codes.INTERNAL_ERROR

    def to_error_detail(self) -> ErrorDetail:
        """Return this error as a shared ``ErrorDetail``."""
        return internal_error(str(self), code=self.code, metadata=self._metadata())

    def _metadata(self) -> dict[str, str]:
        """Return error metadata common to all migration errors."""
        return {"exception_type": type(self).__name__}


class UnrecognizedNamingConventionError(MigrationError):
    """Raised when a migration name starts with neither recognized prefix."""

    code = codes.UNRECOGNIZED_NAMING_CONVENTION

    def __init__(self, name: str, *, prefixes: tuple[str, ...]) -> None:
        self.name = name
        self.prefixes = prefixes
        listed = " or ".join(prefixes)
        super().__init__(
            f"Invalid migration class name: {name} => ensure it starts with "
            f"{listed}, or implement MigrationInfoProvider for non-default naming"
        )

    def to_error_detail(self) -> ErrorDetail:
        """Return this error as a validation ``ErrorDetail``."""
        return validation_error(
            str(self),
            code=self.code,
            metadata={**self._metadata(), "migration_script": self.name},
        )


class MissingDescriptionError(MigrationError):
    """Raised when a self-describing migration reports a blank description."""

    code = codes.MISSING_DESCRIPTION

    def __init__(self, version: object) -> None:
        self.version = version
        super().__init__(f"Missing description for migration {version}")

    def to_error_detail(self) -> ErrorDetail:
        """Return this error as a validation ``ErrorDetail``."""
        return validation_error(str(self), code=self.code, metadata=self._metadata())


class MalformedVersionError(MigrationError, ValueError):
    """Raised when version text cannot be parsed into integer parts."""

    code = codes.MALFORMED_VERSION

    def to_error_detail(self) -> ErrorDetail:
        """Return this error as a validation ``ErrorDetail``."""
        return validation_error(str(self), code=self.code, metadata=self._metadata())


class MigrationDiscoveryError(MigrationError):
    """Raised when a scanner cannot enumerate migrations for a location."""

    code = codes.DISCOVERY_FAILURE

    def to_error_detail(self) -> ErrorDetail:
        """Return this error as a dependency ``ErrorDetail``."""
        return dependency_error(str(self), code=self.code, metadata=self._metadata())


class MigrationInstantiationError(MigrationError):
    """Raised when a discovered migration class cannot be constructed."""

    code = codes.INSTANTIATION_FAILURE

    def to_error_detail(self) -> ErrorDetail:
        """Return this error as a dependency ``ErrorDetail``."""
        return dependency_error(str(self), code=self.code, metadata=self._metadata())


class MigrationRegistrationError(MigrationError):
    """Raised when two different classes register under one identity."""

    code = codes.CONFLICT

    def to_error_detail(self) -> ErrorDetail:
        """Return this error as a conflict ``ErrorDetail``."""
        return conflict_error(str(self), code=self.code, metadata=self._metadata())


class DuplicateMigrationError(MigrationError):
    """Raised when two migrations from one resolution share an identity slot."""

    code = codes.CONFLICT

    def __init__(self, message: str, *, scripts: tuple[str, ...]) -> None:
        self.scripts = scripts
        super().__init__(message)

    def to_error_detail(self) -> ErrorDetail:
        """Return this error as a conflict ``ErrorDetail``."""
        return conflict_error(
            str(self),
            code=self.code,
            metadata={**self._metadata(), "migration_scripts": ",".join(self.scripts)},
        )


class MigrationResolutionError(MigrationError):
    """Single aggregate error raised when resolving a location fails.

    The first underlying failure is chained as ``__cause__``.
    """

    code = codes.RESOLUTION_FAILURE

    def __init__(self, location: object, *, script: str | None = None) -> None:
        self.location = str(location)
        self.script = script
        message = f"Unable to resolve Python migrations in location: {self.location}"
        if script is not None:
            message = f"{message} (migration: {script})"
        super().__init__(message)

    def to_error_detail(self) -> ErrorDetail:
        """Return this error, including its cause, as an ``ErrorDetail``."""
        metadata = {**self._metadata(), "location": self.location}
        if self.script is not None:
            metadata["migration_script"] = self.script
        message = str(self)
        cause = self.__cause__
        if cause is not None:
            metadata["cause_type"] = type(cause).__name__
            cause_code = getattr(cause, "code", None)
            if isinstance(cause_code, str):
                metadata["cause_code"] = cause_code
            message = f"{message}: {cause}"
        return internal_error(message, code=self.code, metadata=metadata)
