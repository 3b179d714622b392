from __future__ import annotations

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

ALL_SEASONS = "All"

# Canonical month order per season. Winter wraps the year boundary.
SEASON_MONTH_INDICES: dict[str, tuple[int, ...]] = {
    ALL_SEASONS: tuple(range(12)),
    "Winter": (11, 0, 1),
    "Spring": (2, 3, 4),
    "Summer": (5, 6, 7),
    "Fall": (8, 9, 10),
}

SEASONS = list(SEASON_MONTH_INDICES)


def validate_season(season: str) -> str:
    if season not in SEASON_MONTH_INDICES:
        allowed = ", ".join(SEASONS)
        raise ValueError(f"Unknown season {season!r}; expected one of: {allowed}")
    return season


def season_month_indices(season: str) -> tuple[int, ...]:
    return SEASON_MONTH_INDICES[validate_season(season)]


def season_month_names(season: str) -> list[str]:
    return [MONTH_NAMES[index] for index in season_month_indices(season)]


def season_month_order(season: str) -> dict[str, int]:
    """Month name -> position within the season's canonical sequence."""
    return {name: position for position, name in enumerate(season_month_names(season))}


def season_for_month(month: int) -> str:
    """Named season (never ``All``) covering a 1-based month."""
    for season, indices in SEASON_MONTH_INDICES.items():
        if season != ALL_SEASONS and (int(month) - 1) in indices:
            return season
    raise ValueError(f"Month out of range: {month}")
