from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class OutputPaths:
    root: Path
    charts: Path
    frames: Path
    figures: Path
    summary: Path


def build_output_paths(out_dir: Path) -> OutputPaths:
    paths = OutputPaths(
        root=out_dir,
        charts=out_dir / "charts",
        frames=out_dir / "frames",
        figures=out_dir / "figures",
        summary=out_dir / "summary",
    )
    for path in (paths.root, paths.charts, paths.frames, paths.figures, paths.summary):
        path.mkdir(parents=True, exist_ok=True)
    return paths
