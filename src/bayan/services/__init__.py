"""File operations and duplicate group management services."""

from .file_service import FileService, TrashReport
from .duplicate_service import DuplicateService

__all__ = ["FileService", "TrashReport", "DuplicateService"]
