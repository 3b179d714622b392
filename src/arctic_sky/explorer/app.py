from __future__ import annotations

import logging

import pandas as pd

from arctic_sky.config import AppConfig
from arctic_sky.explorer.frame import ChartFrame, build_frame, site_colors
from arctic_sky.explorer.render import ChartRenderer, RenderResult
from arctic_sky.explorer.scene import Surface, Transition
from arctic_sky.explorer.state import FilterSnapshot, FilterState
from arctic_sky.io.read import discover_sites, load_records

LOGGER = logging.getLogger(__name__)


class Explorer:
    """Owns the dataset, the filter state and the surface of one chart.

    Filter mutations redraw synchronously through the state listener, so every
    mutator returns only after the surface reflects the new selection.
    """

    def __init__(self, records: pd.DataFrame, config: AppConfig) -> None:
        self.records = records
        self.config = config
        self.sites = discover_sites(records)
        self.colors = site_colors(self.sites, config.chart.palette)
        self.state = FilterState(self.sites, default_metric=config.chart.default_metric)
        self.surface = Surface(layout=config.layout)
        self.renderer = ChartRenderer(self.surface, config)
        self.last_result: RenderResult | None = None
        self._unsubscribe = None

    @classmethod
    def load(cls, config: AppConfig, source: str | None = None) -> Explorer:
        records = load_records(config, source=source)
        explorer = cls(records, config)
        explorer.start()
        return explorer

    def start(self) -> RenderResult:
        """Wire the filter listener and perform the first draw."""
        if self._unsubscribe is None:
            self._unsubscribe = self.state.subscribe(self._on_filter_change)
        LOGGER.info("Explorer ready with %d sites", len(self.sites))
        return self.redraw()

    def _on_filter_change(self, snapshot: FilterSnapshot) -> None:
        self.redraw(snapshot)

    def compute_frame(self, snapshot: FilterSnapshot | None = None) -> ChartFrame:
        return build_frame(
            self.records,
            snapshot or self.state.snapshot(),
            self.config,
            colors=self.colors,
        )

    def redraw(self, snapshot: FilterSnapshot | None = None) -> RenderResult:
        self.last_result = self.renderer.render(self.compute_frame(snapshot))
        return self.last_result

    @property
    def frame(self) -> ChartFrame | None:
        return self.last_result.frame if self.last_result else None

    def set_season(self, season: str) -> RenderResult | None:
        self.state.set_season(season)
        return self.last_result

    def set_metric(self, metric: str) -> RenderResult | None:
        self.state.set_metric(metric)
        return self.last_result

    def toggle_site(self, site: str) -> bool:
        return self.state.toggle_site(site)

    def reset(self) -> RenderResult | None:
        self.state.reset()
        return self.last_result

    def pointer_enter(self, key: str, x: float, y: float) -> list[Transition]:
        return self.renderer.hover(key, x, y)

    def pointer_move(self, x: float, y: float) -> None:
        self.renderer.move_pointer(x, y)

    def pointer_leave(self, key: str) -> list[Transition]:
        return self.renderer.leave(key)
