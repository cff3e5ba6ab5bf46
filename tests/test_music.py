import requests

from recomenda.services.music import MusicAdapter, artwork_url


def album(**overrides):
    item = {
        "wrapperType": "collection",
        "collectionId": 1440935467,
        "collectionName": "Future Nostalgia",
        "artistName": "Dua Lipa",
        "primaryGenreName": "Pop",
        "releaseDate": "2020-03-27T07:00:00Z",
        "artworkUrl100": "https://is1-ssl.mzstatic.com/image/thumb/Music/100x100bb.jpg",
    }
    item.update(overrides)
    return item


def test_artwork_url_is_upsized():
    assert artwork_url("https://x/100x100bb.jpg") == "https://x/600x600bb.jpg"
    assert artwork_url(None) == ""


def test_recommendations_search_pop_albums(http):
    http.add("/search", {"resultCount": 1, "results": [album()]})
    (rec,) = MusicAdapter().fetch_recommendations(["Drama"], limit=4)
    assert http.last["params"] == {"term": "pop", "entity": "album", "limit": 4}
    assert rec.id == "1440935467"
    assert rec.category == "music"
    assert rec.genre == "Pop"
    assert rec.description == "Álbum de Dua Lipa"
    assert rec.year == 2020
    assert rec.image.endswith("600x600bb.jpg")
    assert rec.additional_info["artist"] == "Dua Lipa"


def test_search_uses_keyword(http):
    http.add("/search", {"results": [album(), album(collectionId=2, collectionName="Dua Lipa")]})
    results = MusicAdapter().search_by_keyword("dua lipa", limit=1)
    assert http.last["params"]["term"] == "dua lipa"
    assert len(results) == 1


def test_missing_genre_and_date_use_placeholders(http):
    http.add("/search", {"results": [album(primaryGenreName=None, releaseDate=None, artworkUrl100=None)]})
    (rec,) = MusicAdapter().search_by_keyword("x")
    assert rec.genre == "Música"
    assert rec.year == 2024
    assert rec.image == ""


def test_get_details_uses_lookup(http):
    http.add("/lookup", {"resultCount": 1, "results": [album()]})
    rec = MusicAdapter().get_details("1440935467")
    assert http.last["params"] == {"id": "1440935467", "entity": "album"}
    assert rec.title == "Future Nostalgia"


def test_get_details_empty_lookup_is_not_found(http):
    http.add("/lookup", {"resultCount": 0, "results": []})
    assert MusicAdapter().get_details("1") is None


def test_get_details_ignores_other_collections(http):
    artist = {"wrapperType": "artist", "artistId": 1031397873, "artistName": "Dua Lipa"}
    http.add("/lookup", {"results": [artist, album()]})
    assert MusicAdapter().get_details("1031397873") is None


def test_connection_error_returns_none(http):
    http.add("/lookup", error=requests.ConnectionError("dns failure"))
    assert MusicAdapter().get_details("1") is None
