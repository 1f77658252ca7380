"""
Storage module - File system export of finished sessions.
"""

from lessonscribe.services.storage.export import (
    build_document,
    export_filename,
    write_document,
)

__all__ = [
    "build_document",
    "export_filename",
    "write_document",
]
