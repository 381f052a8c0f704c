"""Source-based checksums for Python migrations."""

from __future__ import annotations

import inspect
import zlib

from .contracts import MigrationChecksumProvider


def source_checksum(obj: object) -> int | None:
    """Return an unsigned CRC32 of ``obj``'s source, or None when unavailable."""
    try:
        source = inspect.getsource(obj)  # type: ignore[arg-type]
    except (OSError, TypeError):
        return None
    return zlib.crc32(source.encode("utf-8")) & 0xFFFFFFFF


class SourceChecksumMixin(MigrationChecksumProvider):
    """Checksum capability derived from the migration class source.

    Editing the class body of an applied migration changes its checksum,
    which lets an execution engine detect drift.
    """

    def get_checksum(self) -> int | None:
        """Return the CRC32 of this migration's class source."""
        return source_checksum(type(self))
