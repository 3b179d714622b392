from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pandas as pd
from jinja2 import Environment, FileSystemLoader, select_autoescape

from arctic_sky.config import AppConfig
from arctic_sky.explorer.app import Explorer
from arctic_sky.explorer.curves import format_number
from arctic_sky.explorer.scene import LAYER_ORDER, Element, Surface

LOGGER = logging.getLogger(__name__)

# Points may overhang the plot edge by up to this many pixels.
POINT_CLIP_PADDING = 10


def _template_env() -> Environment:
    templates_path = Path(__file__).resolve().parent / "templates"
    env = Environment(
        loader=FileSystemLoader(str(templates_path)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml", "html.j2", "svg.j2")),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["num"] = _format_attr
    return env


def _format_attr(value: Any) -> Any:
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return format_number(float(value))
    return value


def _json_safe(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(key): _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if hasattr(value, "item"):
        try:
            value = value.item()
        except (TypeError, ValueError):
            pass
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, (int, str, bool)) or value is None:
        return value
    if pd.isna(value):
        return None
    return str(value)


def surface_layers(surface: Surface) -> dict[str, list[Element]]:
    return {name: list(surface.layers[name].values()) for name in LAYER_ORDER}


def render_chart_svg(
    surface: Surface,
    layers: Mapping[str, Sequence[Element]] | None = None,
) -> str:
    """Serialize the surface as standalone SVG.

    ``layers`` overrides the settled scene, e.g. with a mid-transition
    snapshot from :func:`arctic_sky.explorer.scene.tween_layers`.
    """
    drawn = surface_layers(surface) if layers is None else layers
    template = _template_env().get_template("chart.svg.j2")
    return template.render(
        layout=surface.layout,
        layers={name: list(drawn.get(name, ())) for name in LAYER_ORDER},
        y_label=surface.y_label,
        tooltip=surface.tooltip,
        error=surface.error,
        point_padding=POINT_CLIP_PADDING,
    )


def explorer_payload(explorer: Explorer) -> dict[str, Any]:
    """JSON-friendly description of the current filters, series and caption."""
    frame = explorer.frame
    if frame is None:
        return {"filters": None, "series": [], "summary": explorer.surface.summary}
    filters = frame.filters
    return _json_safe(
        {
            "filters": {
                "season": filters.season,
                "metric": filters.metric,
                "active_sites": list(filters.active_sites),
                "all_sites": list(filters.all_sites),
            },
            "metric": {
                "key": frame.metric.key,
                "label": frame.metric.label,
                "y_label": frame.metric.y_label,
            },
            "y_domain": list(frame.scales.y.domain) if frame.scales else None,
            "x_domain": list(frame.scales.x.domain) if frame.scales else [],
            "series": [
                {
                    "site": series.site,
                    "color": frame.colors[series.site],
                    "values": [
                        {"month": point.month_name, "value": point.value}
                        for point in series.values
                    ],
                }
                for series in frame.series
            ],
            "summary": frame.summary,
        }
    )


def _page_html(
    *,
    surface: Surface,
    payload: dict[str, Any],
    filters: Any = None,
    metric_label: str = "",
    legend: Sequence[dict[str, Any]] = (),
) -> str:
    payload_json = json.dumps(payload, indent=2, ensure_ascii=False).replace("</", "<\\/")
    template = _template_env().get_template("explorer.html.j2")
    return template.render(
        generated_at=datetime.now(timezone.utc).isoformat(),
        error=surface.error,
        filters=filters,
        metric_label=metric_label,
        chart_svg=render_chart_svg(surface),
        legend=list(legend),
        summary=surface.summary,
        payload_json=payload_json,
    )


def render_explorer_page(explorer: Explorer, out_path: Path) -> Path:
    frame = explorer.frame
    legend: list[dict[str, Any]] = []
    if frame is not None:
        chart = explorer.config.chart
        for site in frame.filters.all_sites:
            active = frame.filters.is_active(site)
            legend.append(
                {
                    "site": site,
                    "color": frame.colors[site],
                    "opacity": 1.0 if active else chart.inactive_legend_opacity,
                }
            )
    html = _page_html(
        surface=explorer.surface,
        payload=explorer_payload(explorer),
        filters=frame.filters if frame else None,
        metric_label=frame.metric.label if frame else "",
        legend=legend,
    )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html, encoding="utf-8")
    LOGGER.info("Wrote explorer page to %s", out_path)
    return out_path


def render_error_page(message: str, config: AppConfig, out_path: Path) -> Path:
    """Write an explorer page that shows ``message`` in place of the chart."""
    surface = Surface(layout=config.layout)
    surface.show_error(message)
    html = _page_html(
        surface=surface,
        payload={"filters": None, "series": [], "error": message},
    )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html, encoding="utf-8")
    LOGGER.error("Wrote error page to %s: %s", out_path, message)
    return out_path
