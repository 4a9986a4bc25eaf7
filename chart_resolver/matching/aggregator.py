"""
Lazy, memoized execution of the search cascade for one chart entry.

Each tier's search runs at most once per aggregator, the first time its
result is needed. A caller that is satisfied by an early tier never pays
for the later ones; the scoring engine, which consumes the merged pool,
forces all six.

Tiers may also be prefetched on a thread pool. Every tier sits behind its
own once-cell, so a request for a tier that is already in flight waits for
that call instead of issuing a second one. The merged pool is always built
in SearchTier order, never in completion order.

Usage:
    aggregator = CandidateAggregator(client, entry)
    aggregator.prefetch(max_workers=6)      # optional
    pool = aggregator.merged_pool()
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Callable, Generic, Iterator, TypeVar

from chart_resolver.catalog.client import CatalogSearchClient, SearchStatus
from chart_resolver.catalog.models import CandidateTrack, SourceEntry
from chart_resolver.core.logger import get_logger
from chart_resolver.matching.cascade import QueryCascadeGenerator, SearchTier


logger = get_logger(__name__)

T = TypeVar("T")


class OnceCell(Generic[T]):
    """
    Computes a value at most once, even under concurrent access.

    If the supplier raises, the exception is kept in the cell and raised
    again to every caller, including threads that were waiting for the
    computation; the supplier is never retried.
    """

    def __init__(self, supplier: Callable[[], T]) -> None:
        self._supplier = supplier
        self._lock = threading.Lock()
        self._resolved = False
        self._value: T | None = None
        self._error: Exception | None = None

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def failed(self) -> bool:
        return self._error is not None

    def get(self) -> T:
        if not self._resolved:
            with self._lock:
                if not self._resolved:
                    try:
                        self._value = self._supplier()
                    except Exception as error:
                        self._error = error
                    self._resolved = True
        if self._error is not None:
            raise self._error
        return self._value


class CandidateAggregator:
    """
    Runs the search cascade of one entry and merges the tier results.

    An aggregator belongs to exactly one entry and is discarded once the
    entry is resolved; nothing is shared across entries.

    Attributes:
        _client: Catalog search backend.
        _entry: The chart entry being resolved.
        _queries: Query string per tier.
        _cells: Memoized search result per tier.
    """

    def __init__(
        self,
        client: CatalogSearchClient,
        entry: SourceEntry,
        cascade_generator: QueryCascadeGenerator | None = None
    ) -> None:
        self._client = client
        self._entry = entry
        generator = cascade_generator or QueryCascadeGenerator()
        self._queries: dict[SearchTier, str] = dict(generator.build_cascade(entry))
        self._cells: dict[SearchTier, OnceCell[list[CandidateTrack]]] = {
            tier: OnceCell(partial(self._run_tier, tier)) for tier in SearchTier
        }

    @property
    def entry(self) -> SourceEntry:
        return self._entry

    @property
    def queries(self) -> dict[SearchTier, str]:
        return dict(self._queries)

    def tier_result(self, tier: SearchTier) -> list[CandidateTrack]:
        """
        Get the candidates of one tier, searching on first access.

        Raises:
            CatalogError: If the catalog backend failed for this tier.
        """
        return list(self._cells[tier].get())

    def iter_tiers(self) -> Iterator[tuple[SearchTier, list[CandidateTrack]]]:
        """
        Yield (tier, candidates) in priority order.

        Each tier is searched only when the iteration reaches it, so a
        caller can stop early.
        """
        for tier in SearchTier:
            yield tier, self.tier_result(tier)

    def prefetch(self, max_workers: int = len(SearchTier)) -> None:
        """
        Search every tier concurrently and wait for all of them.

        Raises:
            CatalogError: The failure of the highest-priority failing tier.
        """
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(self._cells[tier].get) for tier in SearchTier]
            errors = [future.exception() for future in futures]

        for error in errors:
            if error is not None:
                raise error

    def merged_pool(self) -> list[CandidateTrack]:
        """
        Concatenate all tier results in tier order without duplicates.

        A candidate already seen in an earlier tier keeps its earlier
        position; later occurrences (same id) are skipped.
        """
        pool: list[CandidateTrack] = []
        seen_ids: set[str] = set()
        for _, candidates in self.iter_tiers():
            for candidate in candidates:
                if candidate.id in seen_ids:
                    continue
                seen_ids.add(candidate.id)
                pool.append(candidate)

        logger.debug(
            f"({self._entry.position}) Found results for {self._entry.short_description}: "
            f"{self.tier_counts()} -> {len(pool)} unique"
        )
        return pool

    def tier_counts(self) -> dict[str, int]:
        """Number of candidates per already-searched tier."""
        return {
            tier.name: len(cell.get())
            for tier, cell in self._cells.items()
            if cell.resolved and not cell.failed
        }

    def _run_tier(self, tier: SearchTier) -> list[CandidateTrack]:
        query = self._queries[tier]
        logger.info(
            f"({self._entry.position}) Searching with '{query}' "
            f"for {self._entry.short_description}"
        )

        outcome = self._client.search(query)

        if outcome.status is SearchStatus.NOT_FOUND:
            logger.debug(f"({self._entry.position}) {tier.name}: nothing found")
            return []
        if outcome.status is SearchStatus.FAILED:
            raise outcome.error
        return list(outcome.tracks)
