"""
Catalog search client for chart-resolver.

The matching engine only needs one operation from the music catalog:
search a free-text query and get back candidate tracks. This module defines
that contract and implements it on top of spotipy.

Search Outcomes:
    A search never raises for backend outcomes. It returns a SearchOutcome:
        FOUND      - the backend answered, tracks may still be an empty list
        NOT_FOUND  - the backend answered 404, treated as "no tracks"
        FAILED     - transport or protocol failure, carries a CatalogError

    Keeping "nothing found" and "backend broken" in distinct statuses means
    a caller cannot mistake one for the other.

Authentication:
    Searching the catalog only needs the client credentials flow. The user
    OAuth flow belongs to the playlist side and is not handled here.

Usage:
    from chart_resolver.catalog.client import SpotifyCatalogClient

    client = SpotifyCatalogClient.from_config(config.spotify)
    outcome = client.search('track:"Lady" artist:"Modjo" year:2000-2001')
    if outcome.status is SearchStatus.FAILED:
        raise outcome.error
"""

import enum
from dataclasses import dataclass
from typing import Any, Protocol

import requests
import spotipy
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOauthError

from chart_resolver.catalog.models import CandidateTrack
from chart_resolver.core.config import SpotifyConfig
from chart_resolver.core.exceptions import CatalogError
from chart_resolver.core.logger import get_logger


logger = get_logger(__name__)


class SearchStatus(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class SearchOutcome:
    """
    Typed result of one catalog search call.

    Attributes:
        status: FOUND, NOT_FOUND or FAILED.
        tracks: Candidate tracks in catalog order (empty unless FOUND).
        error: The CatalogError describing the failure (FAILED only).
    """

    status: SearchStatus
    tracks: tuple[CandidateTrack, ...] = ()
    error: CatalogError | None = None

    @classmethod
    def found(cls, tracks: list[CandidateTrack]) -> "SearchOutcome":
        return cls(status=SearchStatus.FOUND, tracks=tuple(tracks))

    @classmethod
    def not_found(cls) -> "SearchOutcome":
        return cls(status=SearchStatus.NOT_FOUND)

    @classmethod
    def failed(cls, error: CatalogError) -> "SearchOutcome":
        return cls(status=SearchStatus.FAILED, error=error)


class CatalogSearchClient(Protocol):
    """Anything that can run a catalog search query."""

    def search(self, query: str) -> SearchOutcome:
        ...


class SpotifyCatalogClient:
    """
    Catalog search backed by the Spotify Web API.

    Unlike a process-wide singleton, every instance is built from an explicit
    SpotifyConfig and can be shared by reference with whoever needs it.

    Attributes:
        _spotify: The underlying spotipy.Spotify instance.
        _market: Market passed to every search.
        _limit: Result limit passed to every search.

    Thread Safety:
        spotipy keeps a requests session per client; concurrent read-only
        searches from a few worker threads are fine.
    """

    def __init__(
        self,
        spotify_instance: spotipy.Spotify,
        market: str = "CH",
        limit: int = 20
    ) -> None:
        self._spotify = spotify_instance
        self._market = market
        self._limit = limit

    @classmethod
    def from_config(cls, config: SpotifyConfig) -> "SpotifyCatalogClient":
        """
        Build a client using the client credentials flow.

        Args:
            config: Spotify section of the application configuration.

        Returns:
            A ready SpotifyCatalogClient. No request is made yet; credential
            problems surface as FAILED outcomes with is_auth_error set.
        """
        auth_manager = SpotifyClientCredentials(
            client_id=config.client_id,
            client_secret=config.client_secret
        )
        spotify_instance = spotipy.Spotify(
            auth_manager=auth_manager,
            requests_timeout=config.requests_timeout,
            retries=config.retries
        )
        return cls(spotify_instance, market=config.market, limit=config.search_limit)

    def search(self, query: str) -> SearchOutcome:
        """
        Search tracks matching a query.

        Args:
            query: Catalog query string, possibly using track:/artist:/year: tags.

        Returns:
            SearchOutcome with the parsed tracks, NOT_FOUND on 404, or FAILED
            carrying a CatalogError for any other backend problem.
        """
        try:
            response = self._spotify.search(
                q=query, type="track", market=self._market, limit=self._limit
            )
        except spotipy.SpotifyException as e:
            if e.http_status == 404:
                logger.debug(f"Catalog reported not found for: {query}")
                return SearchOutcome.not_found()
            return SearchOutcome.failed(CatalogError(
                f"Catalog search failed: {e}",
                details={"query": query, "http_status": e.http_status, "original_error": str(e)},
                is_auth_error=e.http_status in (401, 403),
                is_rate_limit=e.http_status == 429
            ))
        except SpotifyOauthError as e:
            return SearchOutcome.failed(CatalogError(
                f"Catalog authentication failed: {e}",
                details={"query": query, "original_error": str(e)},
                is_auth_error=True
            ))
        except requests.exceptions.RequestException as e:
            return SearchOutcome.failed(CatalogError(
                f"Catalog unreachable: {e}",
                details={"query": query, "original_error": str(e)}
            ))

        try:
            tracks = self._parse_tracks(response)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            return SearchOutcome.failed(CatalogError(
                f"Malformed catalog response: {e}",
                details={"query": query, "original_error": str(e)}
            ))
        return SearchOutcome.found(tracks)

    @staticmethod
    def _parse_tracks(response: dict[str, Any]) -> list[CandidateTrack]:
        items = response["tracks"]["items"]
        # Spotify occasionally returns null placeholders in items
        return [CandidateTrack.from_spotify_api(item) for item in items if item]
