"""
Tests for the reply builders.

A fixed clock makes the cache-bust parameter predictable.
"""

from irdiscordbot.engine import ResolvedParameters, Series
from irdiscordbot.engine.models import Reply
from irdiscordbot.engine.replies import (
    JOKE_TITLE,
    ImageURLs,
    build_joke,
    build_standings,
    build_statistics,
    build_summary,
)

BASE = "https://irvisualizer.example"


def _make_series(**kwargs) -> Series:
    defaults = dict(
        series_id=1,
        name="Radical Esports Cup",
        current_season="2024 Season 1",
        current_season_id=4000,
        current_week=6,
    )
    defaults.update(kwargs)
    return Series.model_validate(defaults)


CATALOG = [
    _make_series(),
    _make_series(
        series_id=2,
        name="Indy Pro 2000 Championship",
        current_season="2024 Indy S1",
        current_season_id=4100,
        current_week=3,
    ),
]


def _urls(now: float = 1700000000.9) -> ImageURLs:
    return ImageURLs(BASE + "/", clock=lambda: now)


class TestSeriesMatching:
    def test_filter_is_case_insensitive_substring(self):
        series = _make_series(name="Indy Pro 2000")
        assert series.matches("indy")
        assert series.matches("PRO 20")
        assert not series.matches("radical")

    def test_empty_filter_matches_everything(self):
        assert _make_series().matches("")


class TestImageURLs:
    def test_cache_bust_is_whole_seconds(self):
        url = _urls(1700000000.9).standings(4000, "Team")
        assert url == f"{BASE}/season/4000/standings.png?team=Team&cb=1700000000"

    def test_clock_is_read_per_url(self):
        ticks = iter([100.0, 101.0])
        urls = ImageURLs(BASE, clock=lambda: next(ticks))
        assert urls.standings(1, "").endswith("cb=100")
        assert urls.standings(1, "").endswith("cb=101")


class TestSummary:
    def test_whole_season(self):
        params = ResolvedParameters(team_filter="Team+Orange", series_filter="radical")
        replies = list(build_summary(params, CATALOG, _urls()))
        assert len(replies) == 1
        reply = replies[0]
        assert reply.title == "2024 Season 1 - Driver Summary"
        assert reply.description == "Shows driver summary data for the whole Radical Esports Cup season"
        assert reply.image_url == f"{BASE}/season/4000/summary.png?team=Team+Orange&cb=1700000000"

    def test_single_week(self):
        params = ResolvedParameters(team_filter="T", week_filter="4", series_filter="radical")
        reply = next(build_summary(params, CATALOG, _urls()))
        assert reply.title == "2024 Season 1 - Driver Summary - Week 4"
        assert "/season/4000/week/4/summary.png?team=T&cb=" in reply.image_url

    def test_empty_filter_replies_for_every_series(self):
        replies = list(build_summary(ResolvedParameters(), CATALOG, _urls()))
        assert [r.title for r in replies] == [
            "2024 Season 1 - Driver Summary",
            "2024 Indy S1 - Driver Summary",
        ]

    def test_unknown_series_gives_no_replies(self):
        params = ResolvedParameters(series_filter="nascar")
        assert list(build_summary(params, CATALOG, _urls())) == []


class TestStandings:
    def test_one_embed_per_matching_series(self):
        params = ResolvedParameters(team_filter="T", series_filter="indy")
        replies = list(build_standings(params, CATALOG, _urls()))
        assert len(replies) == 1
        assert replies[0].title == "Indy Pro 2000 Championship - Standings"
        assert replies[0].description == "Shows current standings for the 2024 Indy S1"
        assert replies[0].image_url == f"{BASE}/season/4100/standings.png?team=T&cb=1700000000"

    def test_week_filter_is_not_used(self):
        params = ResolvedParameters(week_filter="4", series_filter="indy")
        reply = next(build_standings(params, CATALOG, _urls()))
        assert "/week/" not in reply.image_url

    def test_duplicates_are_not_collapsed(self):
        catalog = [_make_series(), _make_series()]
        assert len(list(build_standings(ResolvedParameters(), catalog, _urls()))) == 2


class TestStatistics:
    def test_defaults_to_current_week_of_each_series(self):
        params = ResolvedParameters(team_filter="T")
        replies = list(build_statistics(params, CATALOG, _urls()))
        assert len(replies) == 8
        assert all("/season/4000/week/6/" in r.image_url for r in replies[:4])
        assert all("/season/4100/week/3/" in r.image_url for r in replies[4:])

    def test_four_embeds_in_fixed_order(self):
        params = ResolvedParameters(series_filter="radical")
        replies = list(build_statistics(params, CATALOG, _urls()))
        boards = [r.image_url.split("/top/")[1].split(".png")[0] for r in replies]
        assert boards == ["scores", "racers", "safety", "laps"]

    def test_only_first_embed_is_titled(self):
        params = ResolvedParameters(series_filter="radical")
        first, *rest = build_statistics(params, CATALOG, _urls())
        assert first.title == "2024 Season 1 - Statistics - Week 6"
        assert first.description == "Shows statistics for week 6 of the Radical Esports Cup season"
        assert all(r.title is None and r.description is None for r in rest)

    def test_explicit_week_wins(self):
        params = ResolvedParameters(team_filter="T", week_filter="2", series_filter="radical")
        replies = list(build_statistics(params, CATALOG, _urls()))
        assert replies[0].image_url == f"{BASE}/season/4000/week/2/top/scores.png?team=T&cb=1700000000"
        assert replies[0].title.endswith("Week 2")

    def test_replies_are_built_lazily(self):
        calls = []

        def clock():
            calls.append(1)
            return 0.0

        replies = build_statistics(ResolvedParameters(), CATALOG, ImageURLs(BASE, clock=clock))
        next(replies)
        assert len(calls) == 1


class TestJoke:
    def test_joke_embed(self):
        reply = build_joke("Waarom...?")
        assert reply == Reply(title=JOKE_TITLE, description="Waarom...?")
        assert reply.is_embed
