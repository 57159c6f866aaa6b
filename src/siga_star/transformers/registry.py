"""
Ordered dedup registries mapping composite keys to surrogate ids.

A registry is filled during the dimension pass, frozen, and then only
read by the fact pass. Ids are dense, start at 1 and follow first-seen
order.
"""

from typing import Dict, Iterator, List, Tuple

from ..config import UNRESOLVED_KEY


class RegistryFrozenError(RuntimeError):
    """Raised when a frozen registry is asked to assign a new id."""


class DimensionRegistry:
    """Insertion-ordered ``key -> surrogate id`` map for one dimension."""

    def __init__(self, name: str):
        self.name = name
        self._ids: Dict[str, int] = {}
        self._frozen = False

    def __contains__(self, key: str) -> bool:
        return key in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(self._ids.items())

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, key: str) -> Tuple[int, bool]:
        """
        Return ``(id, is_new)`` for a key, assigning the next id on first sight.

        Raises:
            RegistryFrozenError: If the key is new and the registry is frozen.
        """
        existing = self._ids.get(key)
        if existing is not None:
            return existing, False
        if self._frozen:
            raise RegistryFrozenError(f"Registry '{self.name}' is frozen; cannot add {key!r}")
        new_id = len(self._ids) + 1
        self._ids[key] = new_id
        return new_id, True

    def lookup(self, key: str) -> int:
        """Surrogate id for a key, or the unresolved sentinel (-1)."""
        return self._ids.get(key, UNRESOLVED_KEY)

    def freeze(self) -> None:
        self._frozen = True


class DimensionRegistries:
    """The per-run bundle of registries, one per discovered dimension."""

    def __init__(self):
        self.generation = DimensionRegistry('generation')
        self.status = DimensionRegistry('status')
        self.location = DimensionRegistry('location')
        self.facility = DimensionRegistry('facility')

    def all(self) -> List[DimensionRegistry]:
        return [self.generation, self.status, self.location, self.facility]

    def freeze(self) -> None:
        for registry in self.all():
            registry.freeze()

    @property
    def frozen(self) -> bool:
        return all(r.frozen for r in self.all())

    def sizes(self) -> Dict[str, int]:
        return {r.name: len(r) for r in self.all()}
