"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/duplicate_service.py
Selection logic for the keep-one action.
"""
from typing import Dict, Iterable, List, Tuple

from bayan.core.models import DuplicateGroup


class DuplicateService:
    """Decides which files of a duplicate group survive and what is freed."""

    @staticmethod
    def remove_files_from_groups(groups: List[DuplicateGroup], file_paths: Iterable[str]) -> List[DuplicateGroup]:
        """
        Returns new groups without the given paths.
        A group left with fewer than two files is no longer a duplicate group and is dropped.
        """
        removed = set(file_paths)
        updated_groups = []
        for group in groups:
            survivors = [f for f in group.files if f.path not in removed]
            if len(survivors) >= 2:
                updated_groups.append(DuplicateGroup(size=group.size, files=survivors))
        return updated_groups

    @staticmethod
    def keep_only_one_file_per_group(groups: List[DuplicateGroup]) -> Tuple[List[str], List[DuplicateGroup]]:
        """
        The first discovered file of each group is kept.
        Returns:
            - paths to move to trash, group by group
            - the groups that would remain afterwards
        """
        files_to_delete = [f.path for group in groups for f in group.files[1:]]
        return files_to_delete, DuplicateService.remove_files_from_groups(groups, files_to_delete)

    @staticmethod
    def calculate_space_savings(groups: List[DuplicateGroup], files_to_delete: Iterable[str]) -> int:
        sizes: Dict[str, int] = {f.path: f.size for group in groups for f in group.files}
        return sum(sizes.get(path, 0) for path in set(files_to_delete))
