"""Test configuration and fixtures"""

import threading
import time

import pytest

from chart_resolver.catalog.client import SearchOutcome
from chart_resolver.catalog.models import CandidateTrack, SourceEntry


class FakeCatalogClient:
    """
    Catalog client answering from a query -> SearchOutcome table.

    Every search is recorded in `calls`. Queries missing from the table get
    `default`. `delays` (query -> seconds) slows selected searches down to
    force a completion order in concurrency tests.
    """

    def __init__(self, responses=None, default=None, delays=None):
        self.responses = responses or {}
        self.default = default if default is not None else SearchOutcome.not_found()
        self.delays = delays or {}
        self.calls = []
        self._lock = threading.Lock()

    def search(self, query):
        with self._lock:
            self.calls.append(query)
        delay = self.delays.get(query)
        if delay:
            time.sleep(delay)
        return self.responses.get(query, self.default)


@pytest.fixture
def make_entry():
    """Factory for chart entries"""
    def _make_entry(
        title="Lady",
        artists=("Modjo",),
        year=2001,
        position=1,
        is_local_act=False
    ):
        return SourceEntry(
            year=year,
            position=position,
            title=title,
            artists=tuple(artists),
            is_local_act=is_local_act,
        )
    return _make_entry


@pytest.fixture
def make_candidate():
    """Factory for catalog tracks"""
    def _make_candidate(
        id="track_1",
        title="Lady",
        artists=("Modjo",),
        album="Lady",
        release_date="2001-01-01",
        popularity=70,
        duration_ms=210000,
        track_number=1
    ):
        return CandidateTrack(
            id=id,
            title=title,
            artist_names=tuple(artists),
            album_title=album,
            release_date=release_date,
            popularity=popularity,
            duration_ms=duration_ms,
            track_number=track_number,
        )
    return _make_candidate


@pytest.fixture
def fake_client():
    """Factory for fake catalog clients"""
    return FakeCatalogClient


@pytest.fixture
def sample_search_response():
    """Spotify search response with one complete and one null item"""
    return {
        "tracks": {
            "items": [
                {
                    "id": "4Zc7TCHzuNwL0AFBlyLdyr",
                    "name": "Lady (Hear Me Tonight)",
                    "artists": [{"id": "artist_1", "name": "Modjo"}],
                    "album": {
                        "id": "album_1",
                        "name": "Modjo",
                        "release_date": "2001-06-18",
                        "release_date_precision": "day",
                    },
                    "duration_ms": 307000,
                    "popularity": 72,
                    "track_number": 2,
                },
                None,
            ]
        }
    }
