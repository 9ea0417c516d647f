"""Location registry and tracked-people set.

Both are built once from configuration and never change afterwards.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

LOST = "Lost"
TRAVELING = "Traveling"

MANDATORY_LOCATIONS: tuple[str, ...] = (LOST, TRAVELING)


def unique_in_order(values: Iterable[str]) -> tuple[str, ...]:
    """Drop duplicates, keeping the first occurrence of each value."""
    return tuple(dict.fromkeys(values))


@dataclass(frozen=True)
class _OrderedNames:
    names: tuple[str, ...] = ()
    _members: frozenset[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "names", unique_in_order(self.names))
        object.__setattr__(self, "_members", frozenset(self.names))

    def __contains__(self, name: object) -> bool:
        return name in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)


@dataclass(frozen=True)
class LocationRegistry(_OrderedNames):
    """Ordered, duplicate-free set of valid location names.

    Always contains :data:`LOST` and :data:`TRAVELING`, appended in that
    order when configuration leaves them out.
    """

    @classmethod
    def from_config(cls, locations: Iterable[str]) -> LocationRegistry:
        names = list(unique_in_order(locations))
        for mandatory in MANDATORY_LOCATIONS:
            if mandatory not in names:
                names.append(mandatory)
        return cls(names=tuple(names))


@dataclass(frozen=True)
class TrackedPeople(_OrderedNames):
    """Ordered, duplicate-free set of the people being tracked."""

    @classmethod
    def from_config(cls, people: Iterable[str]) -> TrackedPeople:
        return cls(names=unique_in_order(people))
