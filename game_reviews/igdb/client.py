"""
Client for the IGDB v4 API.

IGDB authenticates through Twitch: a client id and secret are exchanged for
an app access token, then every request is a POST carrying an Apicalypse
query (``fields *; where id=(1,2);``) as its body.
"""

import logging
import time
from typing import Callable, List, Optional, Sequence, TypeVar

import requests

from ..config import (
    IGDB_API_URL,
    IGDB_CLIENT_ID,
    IGDB_CLIENT_SECRET,
    IGDB_REQUESTS_PER_SECOND,
    IGDB_TIMEOUT,
    TWITCH_ACCESS_TOKEN,
    TWITCH_TOKEN_URL,
)
from ..error_handling import IGDBError
from .cache import NoOpCache
from .models import Cover, Genre, IGDBGame

logger = logging.getLogger(__name__)

T = TypeVar("T")


class IGDB:
    """
    Rate limited, cached access to the IGDB endpoints used by the page.
    """

    def __init__(self, cache=None, client_id: Optional[str] = IGDB_CLIENT_ID,
                 client_secret: Optional[str] = IGDB_CLIENT_SECRET,
                 access_token: Optional[str] = TWITCH_ACCESS_TOKEN,
                 session: Optional[requests.Session] = None,
                 requests_per_second: float = IGDB_REQUESTS_PER_SECOND):
        """
        Initialize the client and obtain an access token when none is given.

        Args:
            cache: NoOpCache, SqliteCache or anything with the same methods
            client_id: Twitch application client id
            client_secret: Twitch application secret, only needed without access_token
            access_token: Existing app access token
            session: requests session to use
            requests_per_second: Maximum request rate against IGDB

        Raises:
            IGDBError: if credentials are missing or the token request fails
        """
        if not client_id:
            raise IGDBError("env var IGDB_TWITCH_CLIENT_ID not found")

        self.cache = cache if cache is not None else NoOpCache()
        self.client_id = client_id
        self.session = session or requests.Session()
        self.min_interval = 1.0 / requests_per_second
        self._last_request = 0.0

        if access_token:
            logger.info("Found an access token in environment")
            self.access_token = access_token
        else:
            if not client_secret:
                raise IGDBError("env var IGDB_TWITCH_CLIENT_SECRET not found")
            self.access_token = self._fetch_access_token(client_secret)

    def _fetch_access_token(self, client_secret: str) -> str:
        # The token expiration is ignored: a run lasts far less than its lifetime.
        try:
            response = self.session.post(
                TWITCH_TOKEN_URL,
                params={
                    'client_id': self.client_id,
                    'client_secret': client_secret,
                    'grant_type': 'client_credentials',
                },
                timeout=IGDB_TIMEOUT,
            )
            response.raise_for_status()
            return response.json()['access_token']
        except requests.RequestException as e:
            raise IGDBError(f"cannot get twitch access token: {e}") from e
        except (ValueError, KeyError) as e:
            raise IGDBError(f"invalid response from twitch: {response.text!r}") from e

    def _wait_for_slot(self) -> None:
        elapsed = time.monotonic() - self._last_request
        if elapsed < self.min_interval:
            time.sleep(self.min_interval - elapsed)
        self._last_request = time.monotonic()

    def request(self, endpoint: str, body: str) -> list:
        """
        Send an Apicalypse query to an endpoint.

        Args:
            endpoint: IGDB endpoint name, e.g. "games"
            body: Apicalypse query

        Returns:
            Decoded JSON list

        Raises:
            IGDBError: on transport errors, non-2xx statuses or invalid JSON
        """
        self._wait_for_slot()
        try:
            response = self.session.post(
                f"{IGDB_API_URL}/{endpoint}",
                data=body.encode("utf-8"),
                headers={
                    'Client-ID': self.client_id,
                    'Authorization': f"Bearer {self.access_token}",
                    'Accept': 'application/json',
                },
                timeout=IGDB_TIMEOUT,
            )
        except requests.RequestException as e:
            raise IGDBError(f"request to endpoint {endpoint} failed: {e}") from e

        logger.info(f"got status code {response.status_code} for endpoint {endpoint}")
        if not response.ok:
            raise IGDBError(
                f"invalid request for endpoint {endpoint} with body {body}: {response.text}"
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid json when fetching {endpoint} with body {body}. Got response: {response.text}")
            raise IGDBError(f"invalid json from endpoint {endpoint}") from e

    def get_ids(self, endpoint: str, ids: Sequence[int], factory: Callable[[dict], T]) -> List[T]:
        """
        Get items by id, from the cache when possible.

        Args:
            endpoint: IGDB endpoint name
            ids: Ids to look up; duplicates are fetched once
            factory: Builds a model from a JSON object

        Returns:
            Items in the order of ``ids``; unknown ids are skipped
        """
        unique_ids = list(dict.fromkeys(ids))
        items = self.cache.get_many(endpoint, unique_ids)

        missing = [i for i in unique_ids if i not in items]
        if missing:
            body = f"fields *; where id=({','.join(str(i) for i in missing)});"
            fetched = self.request(endpoint, body)
            self.cache.set_many(endpoint, [(item['id'], item) for item in fetched])
            items.update((item['id'], item) for item in fetched)

        logger.debug(f"{endpoint}: {len(unique_ids) - len(missing)} cached, {len(missing)} fetched")
        return [factory(items[i]) for i in unique_ids if i in items]

    def get_games(self, ids: Sequence[int]) -> List[IGDBGame]:
        return self.get_ids("games", ids, IGDBGame.from_api)

    def get_genres(self, ids: Sequence[int]) -> List[Genre]:
        return self.get_ids("genres", ids, Genre.from_api)

    def get_covers(self, ids: Sequence[int]) -> List[Cover]:
        return self.get_ids("covers", ids, Cover.from_api)

    def search_game(self, title: str) -> List[IGDBGame]:
        """
        Search games by title, used when filling the igdb_id of new reviews.

        Args:
            title: Title to search for

        Returns:
            Matching games, cached for later lookups
        """
        escaped = title.replace('\\', '\\\\').replace('"', '\\"')
        body = f'search "{escaped}"; fields id,name,first_release_date,slug,genres,cover,url;'
        results = self.request("games", body)
        self.cache.set_many("games", [(item['id'], item) for item in results])
        return [IGDBGame.from_api(item) for item in results]
