from __future__ import annotations

import logging
from pathlib import Path

import typer

from arctic_sky.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from arctic_sky.explorer.app import Explorer
from arctic_sky.explorer.events import load_events
from arctic_sky.io.read import DatasetError, load_records
from arctic_sky.logging import configure_logging
from arctic_sky.paths import build_output_paths
from arctic_sky.pipeline.exploratory import render_exploratory_figures
from arctic_sky.pipeline.explorer import (
    build_explorer,
    replay_events,
    write_error_outputs,
    write_explorer_outputs,
)
from arctic_sky.pipeline.run_all import run_all

LOGGER = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True, add_completion=False)

DATA_HELP = "Dataset path or http(s) URL; overrides data.source from the config."
SEASON_HELP = "Season filter: All, Winter, Spring, Summer or Fall."
METRIC_HELP = "Metric key: brightness_index, daylight_hours or cloud_cover."
EXCLUDE_HELP = "Site to deactivate; repeat for several sites."


def _load_app_config(config_path: Path) -> AppConfig:
    return load_config(config_path)


def _fail_dataset(exc: DatasetError, cfg: AppConfig, out: Path | None) -> typer.Exit:
    LOGGER.error("Dataset load failed: %s", exc)
    if out is not None:
        page = write_error_outputs(str(exc), out, cfg)
        typer.echo(f"Dataset load failed. Error page: {page}", err=True)
    else:
        typer.echo(f"Dataset load failed: {exc}", err=True)
    return typer.Exit(code=1)


def _build_explorer(
    cfg: AppConfig,
    *,
    out: Path | None,
    data: str | None,
    season: str | None,
    metric: str | None,
    exclude_site: list[str] | None,
) -> Explorer:
    try:
        return build_explorer(
            cfg,
            source=data,
            season=season,
            metric=metric,
            exclude_sites=exclude_site or (),
        )
    except DatasetError as exc:
        raise _fail_dataset(exc, cfg, out) from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def render(
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    data: str | None = typer.Option(None, help=DATA_HELP),
    season: str | None = typer.Option(None, help=SEASON_HELP),
    metric: str | None = typer.Option(None, help=METRIC_HELP),
    exclude_site: list[str] | None = typer.Option(None, help=EXCLUDE_HELP),
) -> None:
    """Render the seasonal dynamics explorer page, SVG chart and summary."""
    configure_logging()
    cfg = _load_app_config(config)
    paths = build_output_paths(out)
    explorer = _build_explorer(
        cfg,
        out=paths.root,
        data=data,
        season=season,
        metric=metric,
        exclude_site=exclude_site,
    )
    outputs = write_explorer_outputs(explorer, paths.root)
    typer.echo(explorer.surface.summary)
    typer.echo(f"Explorer written to: {outputs['page']}")


@app.command()
def summary(
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    data: str | None = typer.Option(None, help=DATA_HELP),
    season: str | None = typer.Option(None, help=SEASON_HELP),
    metric: str | None = typer.Option(None, help=METRIC_HELP),
    exclude_site: list[str] | None = typer.Option(None, help=EXCLUDE_HELP),
) -> None:
    """Print the caption for the selected filters."""
    configure_logging()
    cfg = _load_app_config(config)
    explorer = _build_explorer(
        cfg,
        out=None,
        data=data,
        season=season,
        metric=metric,
        exclude_site=exclude_site,
    )
    typer.echo(explorer.surface.summary)


@app.command()
def replay(
    events: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    data: str | None = typer.Option(None, help=DATA_HELP),
    tween_steps: int = typer.Option(
        0,
        min=0,
        max=30,
        help="Intermediate frames to sample from each step's transitions.",
    ),
) -> None:
    """Apply a YAML list of interactions and write one SVG frame per step."""
    configure_logging()
    cfg = _load_app_config(config)
    try:
        script = load_events(events)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--events") from exc
    paths = build_output_paths(out)
    explorer = _build_explorer(
        cfg,
        out=paths.root,
        data=data,
        season=None,
        metric=None,
        exclude_site=None,
    )
    try:
        rows = replay_events(explorer, script, paths.root, tween_steps=tween_steps)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--events") from exc
    write_explorer_outputs(explorer, paths.root)
    typer.echo(f"Replayed {len(rows) - 1} events. Frames: {paths.frames}")


@app.command()
def exploratory(
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    data: str | None = typer.Option(None, help=DATA_HELP),
) -> None:
    """Write the exploratory matplotlib figures."""
    configure_logging()
    cfg = _load_app_config(config)
    paths = build_output_paths(out)
    try:
        records = load_records(cfg, source=data)
    except DatasetError as exc:
        raise _fail_dataset(exc, cfg, None) from exc
    figures = render_exploratory_figures(records, paths.root, cfg)
    typer.echo(f"Exploratory figures: {', '.join(sorted(figures)) or 'none'}")


@app.command("run-all")
def run_all_command(
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, exists=True, readable=True, resolve_path=True),
    data: str | None = typer.Option(None, help=DATA_HELP),
    season: str | None = typer.Option(None, help=SEASON_HELP),
    metric: str | None = typer.Option(None, help=METRIC_HELP),
    exclude_site: list[str] | None = typer.Option(None, help=EXCLUDE_HELP),
) -> None:
    """Render the explorer and the exploratory figures in one command."""
    configure_logging()
    cfg = _load_app_config(config)
    paths = build_output_paths(out)
    try:
        outputs = run_all(
            paths.root,
            cfg,
            source=data,
            season=season,
            metric=metric,
            exclude_sites=exclude_site or (),
        )
    except DatasetError as exc:
        raise _fail_dataset(exc, cfg, paths.root) from exc
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(f"Run complete. Explorer: {outputs['page']}")


if __name__ == "__main__":
    app()
