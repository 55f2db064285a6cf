"""
Disjoint-class container used to glue raw edges and raw corners.

A union-find over hashable atoms with path compression and union by size.
Each root also owns the member set of its class so that class lookups do
not have to scan every atom.
"""

from __future__ import annotations

from typing import Generic, Hashable, Iterable, Iterator, TypeVar

T = TypeVar("T", bound=Hashable)


class Partition(Generic[T]):
    """
    Equivalence classes over atoms of type T.

    Usage:
        partition = Partition(["a", "b", "c"])
        partition.merge("a", "b")
        partition.class_of("b")  # frozenset({"a", "b"})
    """

    def __init__(self, atoms: Iterable[T] = ()) -> None:
        self._parent: dict[T, T] = {}
        self._members: dict[T, set[T]] = {}
        for atom in atoms:
            self.insert(atom)

    def insert(self, atom: T) -> None:
        """Add `atom` as a singleton class."""
        if atom in self._parent:
            raise ValueError(f"Atom already present in partition: {atom!r}")
        self._parent[atom] = atom
        self._members[atom] = {atom}

    def find(self, atom: T) -> T:
        """Return the representative of the class containing `atom`."""
        root = atom
        while self._parent[root] != root:
            root = self._parent[root]

        # Path compression
        while atom != root:
            parent = self._parent[atom]
            self._parent[atom] = root
            atom = parent

        return root

    def class_of(self, atom: T) -> frozenset[T]:
        return frozenset(self._members[self.find(atom)])

    def same_class(self, a: T, b: T) -> bool:
        return self.find(a) == self.find(b)

    def merge(self, a: T, b: T) -> bool:
        """
        Union the classes containing `a` and `b`.

        Returns:
            True if two distinct classes were joined, False if they were
            already the same class.
        """
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False

        if len(self._members[root_a]) < len(self._members[root_b]):
            root_a, root_b = root_b, root_a

        self._parent[root_b] = root_a
        self._members[root_a] |= self._members.pop(root_b)
        return True

    def classes(self) -> Iterator[frozenset[T]]:
        for members in self._members.values():
            yield frozenset(members)

    def __contains__(self, atom: object) -> bool:
        return atom in self._parent

    def __len__(self) -> int:
        """Number of distinct classes."""
        return len(self._members)
