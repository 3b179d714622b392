from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class KeyedDiff(Generic[T]):
    """Three-way partition of keys between two keyed element sets.

    ``entered`` and ``retained`` follow the target order; ``exited`` follows
    the previous order.
    """

    entered: tuple[str, ...]
    retained: tuple[str, ...]
    exited: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not (self.entered or self.retained or self.exited)


def diff_keyed(previous: Mapping[str, T], target: Mapping[str, T]) -> KeyedDiff[T]:
    entered = tuple(key for key in target if key not in previous)
    retained = tuple(key for key in target if key in previous)
    exited = tuple(key for key in previous if key not in target)
    return KeyedDiff(entered=entered, retained=retained, exited=exited)
