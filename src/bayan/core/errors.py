"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception types raised by the duplicate detection engine.
"""
from __future__ import annotations


class BayanError(Exception):
    """Base class for all errors raised by bayan."""


class ConfigurationError(BayanError, ValueError):
    """Invalid search parameters. Raised before any scanning starts."""


class UnreadableFileError(BayanError):
    """A candidate could not be opened or read during comparison."""

    def __init__(self, path: str, reason: str = "") -> None:
        message = f"Cannot read {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path
        self.reason = reason
