"""
Catalog module for chart-resolver.

Components:
    - SourceEntry: A chart position to resolve
    - CandidateTrack: A track returned by a catalog search
    - SearchOutcome / SearchStatus: Typed result of one search call
    - CatalogSearchClient: The search contract the matching engine depends on
    - SpotifyCatalogClient: spotipy-backed implementation
"""

from chart_resolver.catalog.client import (
    CatalogSearchClient,
    SearchOutcome,
    SearchStatus,
    SpotifyCatalogClient,
)
from chart_resolver.catalog.models import CandidateTrack, SourceEntry

__all__ = [
    "SourceEntry",
    "CandidateTrack",
    "SearchOutcome",
    "SearchStatus",
    "CatalogSearchClient",
    "SpotifyCatalogClient",
]
