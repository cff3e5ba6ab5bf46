import pytest

from recomenda.services.base import StaticCatalogAdapter
from recomenda.services.factory import create_adapter
from recomenda.services.games import GameAdapter
from recomenda.services.movies import MovieAdapter
from recomenda.services.series import SeriesAdapter

STATIC = [("movies", 5), ("series", 5), ("games", 8)]


def test_movie_search_finds_the_batman():
    results = create_adapter("movies").search_by_keyword("batman", 10)
    assert [r.title for r in results] == ["The Batman"]
    assert results[0].category == "movies"


def test_games_recommendations_carry_platform():
    results = create_adapter("games").fetch_recommendations([], 3)
    assert len(results) == 3
    assert all(r.additional_info["platform"] == "PC / Consolas" for r in results)


@pytest.mark.parametrize("category,size", STATIC)
@pytest.mark.parametrize("limit", [0, 1, 3, 10])
def test_fetch_respects_limit(category, size, limit):
    results = create_adapter(category).fetch_recommendations(["Drama"], limit)
    assert len(results) == min(limit, size)
    assert all(r.category == category for r in results)


@pytest.mark.parametrize("category,size", STATIC)
def test_negative_limit_returns_nothing(category, size):
    assert create_adapter(category).fetch_recommendations([], -1) == []


@pytest.mark.parametrize(
    "adapter,keyword,expected",
    [
        (MovieAdapter(), "SPIDER", ["Spider-Man: No Way Home"]),
        (SeriesAdapter(), "the", ["The Last of Us", "The Mandalorian"]),
        (GameAdapter(), "le", ["League of Legends", "Apex Legends", "Rocket League"]),
        (GameAdapter(), "zelda", []),
    ],
)
def test_search_is_case_insensitive_title_match(adapter, keyword, expected):
    results = adapter.search_by_keyword(keyword)
    assert [r.title for r in results] == expected
    assert all(keyword.lower() in r.title.lower() for r in results)


def test_search_ignores_descriptions():
    # "Chani" only appears in the Dune description.
    assert MovieAdapter().search_by_keyword("chani") == []


def test_search_respects_limit():
    assert len(GameAdapter().search_by_keyword("e", limit=2)) == 2


def test_get_details():
    series = SeriesAdapter().get_details("5")
    assert series.title == "Breaking Bad"
    assert series.rating == 4.6
    assert series.additional_info["episodes"] == 8
    movie = MovieAdapter().get_details("1")
    assert movie.additional_info["director"] == "Director destacado"


@pytest.mark.parametrize("category,size", STATIC)
def test_get_details_missing_id_returns_none(category, size):
    assert create_adapter(category).get_details("999") is None


def test_sample_records_are_built_fresh_each_call():
    adapter = MovieAdapter()
    first = adapter.fetch_recommendations([])
    second = adapter.fetch_recommendations([])
    assert first == second
    assert first[0] is not second[0]


@pytest.mark.parametrize("adapter_cls", [StaticCatalogAdapter, MovieAdapter, SeriesAdapter, GameAdapter])
def test_shared_additional_info_is_read_only(adapter_cls):
    with pytest.raises(TypeError):
        adapter_cls.additional_info["platform"] = "Switch"
    assert GameAdapter().get_details("1").additional_info == {"platform": "PC / Consolas"}
