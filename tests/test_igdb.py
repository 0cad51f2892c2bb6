from datetime import datetime, timezone
from unittest import mock

import pytest
import requests

from game_reviews.error_handling import IGDBError
from game_reviews.igdb import IGDB, Cover, IGDBGame, NoOpCache, SqliteCache

CELESTE = {
    "id": 26226,
    "name": "Celeste",
    "slug": "celeste",
    "url": "https://www.igdb.com/games/celeste",
    "first_release_date": 1516838400,
    "genres": [8, 32],
    "cover": 90,
}


def make_response(status=200, payload=None, text=""):
    response = mock.Mock()
    response.status_code = status
    response.ok = 200 <= status < 300
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


def make_client(*responses, cache=None):
    session = mock.Mock()
    session.post.side_effect = list(responses)
    client = IGDB(cache=cache, client_id="client", access_token="token",
                  session=session, requests_per_second=1000)
    return client, session


def test_game_from_api():
    game = IGDBGame.from_api(CELESTE)
    assert game.name == "Celeste"
    assert game.first_release_date == datetime(2018, 1, 25, tzinfo=timezone.utc)
    assert game.genres == [8, 32]
    assert game.cover_id == 90


def test_game_without_optional_fields():
    game = IGDBGame.from_api({"id": 1, "name": "X", "url": "https://u"})
    assert game.first_release_date is None
    assert game.genres == []
    assert game.cover_id is None


def test_cover_https_url():
    assert Cover(1, "//images.igdb.com/a.jpg").https_url == "https://images.igdb.com/a.jpg"
    assert Cover(1, "https://images.igdb.com/a.jpg").https_url == "https://images.igdb.com/a.jpg"


def test_missing_client_id():
    with pytest.raises(IGDBError, match="IGDB_TWITCH_CLIENT_ID"):
        IGDB(client_id=None, access_token="token", session=mock.Mock())


def test_missing_secret_without_token():
    with pytest.raises(IGDBError, match="IGDB_TWITCH_CLIENT_SECRET"):
        IGDB(client_id="client", client_secret=None, access_token=None, session=mock.Mock())


def test_access_token_is_fetched_from_twitch():
    session = mock.Mock()
    session.post.return_value = make_response(payload={"access_token": "abc"})

    client = IGDB(client_id="client", client_secret="secret", access_token=None, session=session)

    assert client.access_token == "abc"
    _, kwargs = session.post.call_args
    assert kwargs["params"]["grant_type"] == "client_credentials"


def test_twitch_error():
    session = mock.Mock()
    session.post.side_effect = requests.ConnectionError("down")
    with pytest.raises(IGDBError, match="access token"):
        IGDB(client_id="client", client_secret="secret", access_token=None, session=session)


def test_request_headers_and_body():
    client, session = make_client(make_response(payload=[CELESTE]))

    games = client.get_games([26226])

    assert [g.name for g in games] == ["Celeste"]
    args, kwargs = session.post.call_args
    assert args[0] == "https://api.igdb.com/v4/games"
    assert kwargs["data"] == b"fields *; where id=(26226);"
    assert kwargs["headers"]["Client-ID"] == "client"
    assert kwargs["headers"]["Authorization"] == "Bearer token"


def test_results_follow_requested_order():
    payload = [{"id": 2, "name": "Two"}, {"id": 1, "name": "One"}]
    client, _ = make_client(make_response(payload=payload))
    assert [g.name for g in client.get_genres([1, 2, 3, 1])] == ["One", "Two"]


def test_empty_ids_do_not_hit_the_api():
    client, session = make_client()
    assert client.get_covers([]) == []
    session.post.assert_not_called()


def test_http_error():
    client, _ = make_client(make_response(status=401, text="unauthorized"))
    with pytest.raises(IGDBError, match="unauthorized"):
        client.get_games([1])


def test_invalid_json():
    client, _ = make_client(make_response(payload=ValueError("bad json"), text="<html>"))
    with pytest.raises(IGDBError, match="invalid json"):
        client.get_games([1])


def test_search_game_escapes_quotes():
    client, session = make_client(make_response(payload=[CELESTE]))
    results = client.search_game('Say "hi"')
    assert results[0].id == 26226
    _, kwargs = session.post.call_args
    assert kwargs["data"].startswith(b'search "Say \\"hi\\"";')


def test_noop_cache():
    cache = NoOpCache()
    cache.set(1, "games", {"id": 1})
    assert cache.get(1, "games") is None
    assert cache.get_many("games", [1]) == {}


def test_sqlite_cache_round_trip(tmp_path):
    cache = SqliteCache(tmp_path / "cache.sqlite3")
    cache.set_many("games", [(1, {"id": 1, "name": "A"}), (2, {"id": 2, "name": "B"})])
    cache.set(1, "games", {"id": 1, "name": "A2"})

    assert cache.get(1, "games") == {"id": 1, "name": "A2"}
    assert cache.get(1, "genres") is None
    assert cache.get_many("games", [1, 2, 3]) == {
        1: {"id": 1, "name": "A2"},
        2: {"id": 2, "name": "B"},
    }


def test_sqlite_cache_write_failure_is_logged(tmp_path, caplog):
    cache = SqliteCache(tmp_path / "cache.sqlite3")
    cache.set(1, "games", {"not": {"serializable"}})
    assert cache.get(1, "games") is None
    assert "Error in set" in caplog.text


def test_cached_items_are_not_fetched_again(tmp_path):
    cache = SqliteCache(tmp_path / "cache.sqlite3")
    client, session = make_client(make_response(payload=[CELESTE]), cache=cache)

    client.get_games([26226])
    games = client.get_games([26226])

    assert games[0].name == "Celeste"
    assert session.post.call_count == 1


def test_only_missing_ids_are_fetched(tmp_path):
    cache = SqliteCache(tmp_path / "cache.sqlite3")
    cache.set(1, "genres", {"id": 1, "name": "Cached"})
    client, session = make_client(make_response(payload=[{"id": 2, "name": "Fetched"}]), cache=cache)

    genres = client.get_genres([1, 2])

    assert [g.name for g in genres] == ["Cached", "Fetched"]
    _, kwargs = session.post.call_args
    assert kwargs["data"] == b"fields *; where id=(2);"
