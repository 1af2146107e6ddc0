"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Moves files to the system trash instead of deleting them permanently.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from send2trash import send2trash


@dataclass
class TrashReport:
    """Outcome of a batch trash operation."""
    moved: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def failure_summary(self, limit: int = 5) -> str:
        lines = [
            f"  • {Path(path).name}: {reason.split(':')[-1].strip()}"
            for path, reason in self.failed[:limit]
        ]
        if len(self.failed) > limit:
            lines.append(f"  • ...and {len(self.failed) - limit} more files")
        return "\n".join(lines)


class FileService:
    """Trash operations used by the keep-one action."""

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """
        Moves one file to the system trash.
        Raises:
            FileNotFoundError: the file is already gone
            RuntimeError: the trash refused the file
        """
        path = Path(file_path).resolve()
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except OSError as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @classmethod
    def trash_files(
        cls,
        file_paths: List[str],
        on_file: Optional[Callable[[int, int, str], None]] = None
    ) -> TrashReport:
        """Trashes every path, carrying on past individual failures."""
        report = TrashReport()
        total = len(file_paths)
        for index, path in enumerate(file_paths, 1):
            if on_file:
                on_file(index, total, path)
            try:
                cls.move_to_trash(path)
            except (OSError, RuntimeError) as e:
                report.failed.append((path, str(e)))
            else:
                report.moved.append(path)
        return report

