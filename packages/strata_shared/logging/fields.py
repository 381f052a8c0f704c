"""Canonical logging field names for Strata log records.

Resolver, discovery, and CLI code bind these keys into the logging context so
every structured line carries the same vocabulary.
"""

TIMESTAMP = "timestamp"
LEVEL = "level"
LOGGER = "logger"
MESSAGE = "message"
EVENT = "event"
EXCEPTION = "exception"

# Resolution fields.
LOCATION = "location"
SCANNER = "scanner"
MIGRATION_SCRIPT = "migration_script"
MIGRATION_VERSION = "migration_version"
MIGRATION_COUNT = "migration_count"
ERROR_CODE = "error_code"

# Events.
MIGRATION_RESOLVED_EVENT = "migration_resolved"
RESOLUTION_COMPLETED_EVENT = "resolution_completed"
RESOLUTION_FAILED_EVENT = "resolution_failed"
LOCATION_SKIPPED_EVENT = "location_skipped"

# Common process-level fields.
SERVICE = "service"
ENVIRONMENT = "environment"
