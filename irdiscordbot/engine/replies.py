"""
Reply builders, one per command.

Builders are generators: each reply (and the cache-busting timestamp in its
image URL) is produced only when the caller asks for it, so a failed send
stops the rest from ever being built.

Image URLs point at the visualizer, which renders the PNGs on request:

    {base}/season/{season_id}/summary.png
    {base}/season/{season_id}/week/{week}/summary.png
    {base}/season/{season_id}/standings.png
    {base}/season/{season_id}/week/{week}/top/{scores,racers,safety,laps}.png

every one with ?team={team}&cb={unix seconds}.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Iterator

from irdiscordbot.engine.models import CommandKind, ResolvedParameters, Reply, Series

Clock = Callable[[], float]

JOKE_TITLE = "Let's hear a random dutch joke"

# Statistics images after the first (titled) one, in send order
STATISTICS_EXTRA_IMAGES = ("racers", "safety", "laps")


class ImageURLs:
    """Builds visualizer image URLs with a fresh cache-bust parameter each time."""

    def __init__(self, base_url: str, clock: Clock = time.time):
        self.base_url = base_url.rstrip("/")
        self._clock = clock

    def build(self, path: str, team: str) -> str:
        cache_bust = int(self._clock())
        return f"{self.base_url}{path}?team={team}&cb={cache_bust}"

    def summary(self, season_id: int, team: str, week: str = "") -> str:
        if week:
            return self.build(f"/season/{season_id}/week/{week}/summary.png", team)
        return self.build(f"/season/{season_id}/summary.png", team)

    def standings(self, season_id: int, team: str) -> str:
        return self.build(f"/season/{season_id}/standings.png", team)

    def top(self, season_id: int, week: str, board: str, team: str) -> str:
        return self.build(f"/season/{season_id}/week/{week}/top/{board}.png", team)


def _matching(catalog: Iterable[Series], series_filter: str) -> Iterator[Series]:
    return (series for series in catalog if series.matches(series_filter))


def build_summary(
    params: ResolvedParameters, catalog: Iterable[Series], urls: ImageURLs
) -> Iterator[Reply]:
    """Driver summary per matching series, for the whole season or one week."""
    week = params.week_filter
    for series in _matching(catalog, params.series_filter):
        if week:
            yield Reply(
                title=f"{series.current_season_name} - Driver Summary - Week {week}",
                description=f"Shows driver summary data for week {week} of the {series.name} season",
                image_url=urls.summary(series.current_season_id, params.team_filter, week),
            )
        else:
            yield Reply(
                title=f"{series.current_season_name} - Driver Summary",
                description=f"Shows driver summary data for the whole {series.name} season",
                image_url=urls.summary(series.current_season_id, params.team_filter),
            )


def build_standings(
    params: ResolvedParameters, catalog: Iterable[Series], urls: ImageURLs
) -> Iterator[Reply]:
    """Current standings per matching series. The week filter plays no part."""
    for series in _matching(catalog, params.series_filter):
        yield Reply(
            title=f"{series.name} - Standings",
            description=f"Shows current standings for the {series.current_season_name}",
            image_url=urls.standings(series.current_season_id, params.team_filter),
        )


def build_statistics(
    params: ResolvedParameters, catalog: Iterable[Series], urls: ImageURLs
) -> Iterator[Reply]:
    """
    Four top-lists per matching series: scores, racers, safety, laps.

    Without an explicit week each series uses its own current week.
    """
    for series in _matching(catalog, params.series_filter):
        week = params.week_filter or str(series.current_week)
        season_id = series.current_season_id
        yield Reply(
            title=f"{series.current_season_name} - Statistics - Week {week}",
            description=f"Shows statistics for week {week} of the {series.name} season",
            image_url=urls.top(season_id, week, "scores", params.team_filter),
        )
        for board in STATISTICS_EXTRA_IMAGES:
            yield Reply(image_url=urls.top(season_id, week, board, params.team_filter))


def build_joke(joke: str) -> Reply:
    return Reply(title=JOKE_TITLE, description=joke)


ReplyBuilder = Callable[[ResolvedParameters, Iterable[Series], ImageURLs], Iterator[Reply]]

BUILDERS: dict[CommandKind, ReplyBuilder] = {
    CommandKind.SUMMARY: build_summary,
    CommandKind.STANDINGS: build_standings,
    CommandKind.STATISTICS: build_statistics,
}
