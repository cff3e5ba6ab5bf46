import pytest

from recomenda.exceptions import UnknownCategoryError
from recomenda.services.games import GameAdapter
from recomenda.services.movies import MovieAdapter
from recomenda.services.session import RecommendationSession


def test_forwards_to_active_adapter():
    session = RecommendationSession(MovieAdapter())
    assert session.category == "movies"
    assert len(session.fetch_recommendations([], 2)) == 2
    assert session.search_by_keyword("barbie")[0].title == "Barbie"
    assert session.get_details("3").title == "Dune: Part Two"


def test_set_active_switches_category():
    session = RecommendationSession(MovieAdapter())
    games = GameAdapter()
    session.set_active(games)
    assert session.active is games
    assert session.category == "games"
    assert {r.category for r in session.fetch_recommendations([])} == {"games"}
    assert session.get_details("8").title == "Warzone"


def test_default_limit_is_ten():
    assert len(RecommendationSession(GameAdapter()).fetch_recommendations([])) == 8


def test_for_category_builds_adapter():
    assert RecommendationSession.for_category("series").category == "series"
    with pytest.raises(UnknownCategoryError):
        RecommendationSession.for_category("podcasts")
