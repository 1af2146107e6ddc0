"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Partition of candidates into equivalence classes of identical files.

Implemented as a disjoint-set forest (union by size, path compression).
Every candidate starts as a class of one; each duplicate fact unions two
classes, so a fact linking two existing groups merges them as a whole.
"""

from typing import Dict, Iterable, List

from bayan.core.interfaces import EquivalenceClassBuilder
from bayan.core.models import DuplicateGroup, FileCandidate


class EquivalenceClassBuilderImpl(EquivalenceClassBuilder):
    """
    Union-find over FileCandidate objects.

    Candidates keep the index they were added with, which fixes the order of
    files inside a group and the order of the groups themselves. Excluded
    candidates stay in the forest (facts proven through them remain true for
    the other members) but are never emitted.
    """

    def __init__(self):
        self._parent: Dict[FileCandidate, FileCandidate] = {}
        self._size: Dict[FileCandidate, int] = {}
        self._order: Dict[FileCandidate, int] = {}
        self._by_size: Dict[int, List[FileCandidate]] = {}
        self._excluded = set()

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, candidate: FileCandidate) -> bool:
        return candidate in self._order

    def add(self, candidate: FileCandidate) -> None:
        """Registers a candidate as its own singleton class."""
        if candidate in self._order:
            return
        self._order[candidate] = len(self._order)
        self._parent[candidate] = candidate
        self._size[candidate] = 1
        self._by_size.setdefault(candidate.size, []).append(candidate)

    def find(self, candidate: FileCandidate) -> FileCandidate:
        """Returns the root of the candidate's class."""
        root = candidate
        while self._parent[root] != root:
            root = self._parent[root]

        # Path compression
        while self._parent[candidate] != root:
            self._parent[candidate], candidate = root, self._parent[candidate]
        return root

    def merge(self, a: FileCandidate, b: FileCandidate) -> None:
        """Records that `a` and `b` have identical content."""
        self.add(a)
        self.add(b)
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return
        if self._size[root_a] < self._size[root_b]:
            root_a, root_b = root_b, root_a
        self._parent[root_b] = root_a
        self._size[root_a] += self._size[root_b]

    def same_class(self, a: FileCandidate, b: FileCandidate) -> bool:
        return self.find(a) == self.find(b)

    def exclude(self, candidate: FileCandidate) -> None:
        """Marks an unreadable candidate; it will never appear in the output."""
        self.add(candidate)
        self._excluded.add(candidate)

    def is_excluded(self, candidate: FileCandidate) -> bool:
        return candidate in self._excluded

    def classes(self) -> List[List[FileCandidate]]:
        """
        Live members of every class that still has one, in discovery order.
        The first member of each list is the class representative.
        """
        return self._collect(self._order)  # dicts keep insertion order

    def classes_of_size(self, size: int) -> List[List[FileCandidate]]:
        """
        Same as classes(), restricted to candidates of the given size.
        Only that size bucket is walked, not the whole partition.
        """
        return self._collect(self._by_size.get(size, ()))

    def _collect(self, candidates: Iterable[FileCandidate]) -> List[List[FileCandidate]]:
        members: Dict[FileCandidate, List[FileCandidate]] = {}
        for candidate in candidates:
            if candidate in self._excluded:
                continue
            members.setdefault(self.find(candidate), []).append(candidate)
        return list(members.values())

    def representatives(self) -> List[FileCandidate]:
        """Earliest live member of every class."""
        return [members[0] for members in self.classes()]

    def groups(self, min_members: int = 2) -> List[DuplicateGroup]:
        """Classes with at least `min_members` live files, as DuplicateGroups."""
        return [
            DuplicateGroup(size=files[0].size, files=files)
            for files in self.classes()
            if len(files) >= min_members
        ]
