"""Shared error code constants.

Codes are stable machine-readable identifiers. Resolution failures use the
migration-specific block; everything else falls back to the generic codes.
"""

# Validation
VALIDATION_ERROR = "VALIDATION_ERROR"
INVALID_ARGUMENT = "INVALID_ARGUMENT"

# Conflict
CONFLICT = "CONFLICT"

# Not found
NOT_FOUND = "NOT_FOUND"

# Dependency / external collaborator
DEPENDENCY_FAILURE = "DEPENDENCY_FAILURE"

# Migration resolution
UNRECOGNIZED_NAMING_CONVENTION = "UNRECOGNIZED_NAMING_CONVENTION"
MISSING_DESCRIPTION = "MISSING_DESCRIPTION"
MALFORMED_VERSION = "MALFORMED_VERSION"
DISCOVERY_FAILURE = "DISCOVERY_FAILURE"
INSTANTIATION_FAILURE = "INSTANTIATION_FAILURE"
RESOLUTION_FAILURE = "RESOLUTION_FAILURE"

# Internal
INTERNAL_ERROR = "INTERNAL_ERROR"
UNEXPECTED_EXCEPTION = "UNEXPECTED_EXCEPTION"
