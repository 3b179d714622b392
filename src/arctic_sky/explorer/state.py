from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from arctic_sky.explorer.metrics import DEFAULT_METRIC, get_metric
from arctic_sky.explorer.seasons import ALL_SEASONS, validate_season

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterSnapshot:
    """Immutable view of the filter tuple handed to the recompute functions."""

    season: str
    metric: str
    active_sites: tuple[str, ...]
    all_sites: tuple[str, ...]

    def is_active(self, site: str) -> bool:
        return site in self.active_sites


Listener = Callable[[FilterSnapshot], None]


class FilterState:
    """Single authoritative selection of season, metric and active sites.

    ``active_sites`` is never empty: toggling off the last active site is
    ignored. Every effective mutation notifies listeners synchronously, in
    subscription order, before the mutator returns.
    """

    def __init__(self, sites: Iterable[str], default_metric: str = DEFAULT_METRIC) -> None:
        self._all_sites = tuple(dict.fromkeys(str(site) for site in sites))
        if not self._all_sites:
            raise ValueError("FilterState requires at least one site")
        self._default_metric = get_metric(default_metric).key
        self._listeners: list[Listener] = []
        self.season = ALL_SEASONS
        self.metric = self._default_metric
        self._active: set[str] = set(self._all_sites)

    @property
    def all_sites(self) -> tuple[str, ...]:
        return self._all_sites

    @property
    def active_sites(self) -> tuple[str, ...]:
        """Active sites in discovery order."""
        return tuple(site for site in self._all_sites if site in self._active)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def snapshot(self) -> FilterSnapshot:
        return FilterSnapshot(
            season=self.season,
            metric=self.metric,
            active_sites=self.active_sites,
            all_sites=self._all_sites,
        )

    def _notify(self) -> None:
        snapshot = self.snapshot()
        LOGGER.debug(
            "Filter changed: season=%s metric=%s active=%d/%d",
            snapshot.season,
            snapshot.metric,
            len(snapshot.active_sites),
            len(snapshot.all_sites),
        )
        for listener in list(self._listeners):
            listener(snapshot)

    def set_season(self, season: str) -> None:
        self.season = validate_season(season)
        self._notify()

    def set_metric(self, metric: str) -> None:
        self.metric = get_metric(metric).key
        self._notify()

    def toggle_site(self, site: str) -> bool:
        """Flip one site's membership. Returns False when the toggle was refused."""
        if site not in self._all_sites:
            raise ValueError(f"Unknown site {site!r}")
        if site in self._active:
            if len(self._active) == 1:
                return False
            self._active.remove(site)
        else:
            self._active.add(site)
        self._notify()
        return True

    def reset(self) -> None:
        self.season = ALL_SEASONS
        self.metric = self._default_metric
        self._active = set(self._all_sites)
        self._notify()
