"""
Resolution of chart entries to catalog tracks.

ChartResolver wires the matching pipeline together for one entry at a
time:

    entry -> CandidateAggregator (six search tiers) -> merged pool
          -> ScoringEngine (blocklist + eleven dimensions)
          -> MatchSelector -> MatchResult

Every entry gets its own aggregator; nothing is shared between entries.
Catalog failures (CatalogError) abort the resolution and propagate to the
caller, while "no match" is a regular MatchResult.

Usage:
    from chart_resolver.matching.resolver import ChartResolver

    resolver = ChartResolver(client, config.matching)
    results = resolver.resolve_chart(chart)
"""

from chart_resolver.catalog.client import CatalogSearchClient
from chart_resolver.catalog.models import SourceEntry
from chart_resolver.chart.entries import ChartInfo
from chart_resolver.chart.fixes import DEFAULT_FIXES, EntryFix, apply_fixes
from chart_resolver.core.config import MatchingConfig
from chart_resolver.core.logger import (
    REVIEW_CLOSE_ALTERNATIVES,
    REVIEW_NO_MATCH,
    Colors,
    format_close_matches_message,
    format_matched_message,
    format_no_match_message,
    get_logger,
    log_match_review,
)
from chart_resolver.core.progress import ResolvingProgressBar
from chart_resolver.matching.aggregator import CandidateAggregator
from chart_resolver.matching.cascade import QueryCascadeGenerator
from chart_resolver.matching.scoring import CandidateRating, ScoringEngine
from chart_resolver.matching.selector import MatchResult, MatchSelector


logger = get_logger(__name__)


def _review_tuple(rating: CandidateRating) -> tuple[str, str, float]:
    candidate = rating.candidate
    return (candidate.short_description, candidate.id, rating.aggregate_score)


class ChartResolver:
    """
    Resolves chart entries against a catalog search backend.

    Attributes:
        _client: Catalog search backend (CatalogSearchClient protocol).
        _config: Matching settings (threshold, concurrency, diagnostics).
        _cascade: Shared, stateless query cascade generator.
        _engine: Shared, stateless scoring engine.
        _selector: Match selector configured from _config.
        _fixes: Entry fixes applied when normalize_entries is enabled.
    """

    def __init__(
        self,
        client: CatalogSearchClient,
        config: MatchingConfig | None = None,
        fixes: tuple[EntryFix, ...] = DEFAULT_FIXES
    ) -> None:
        self._client = client
        self._config = config or MatchingConfig()
        self._cascade = QueryCascadeGenerator()
        self._engine = ScoringEngine()
        self._selector = MatchSelector(
            min_score=self._config.min_score,
            diagnostics_count=self._config.diagnostics_count,
            close_match_threshold=self._config.close_match_threshold,
        )
        self._fixes = fixes

    @property
    def config(self) -> MatchingConfig:
        return self._config

    def resolve_entry(self, entry: SourceEntry) -> MatchResult:
        """
        Find the best catalog track for one chart entry.

        Searches all six tiers (concurrently if concurrent_tiers is set),
        rates the merged pool and selects the best acceptable candidate.
        Entries that end in "no match" or with close alternatives are
        written to the match review log.

        Args:
            entry: The chart entry to resolve.

        Returns:
            MatchResult with the selected candidate or the diagnostics.

        Raises:
            CatalogError: If the catalog backend failed for any tier.
        """
        aggregator = CandidateAggregator(self._client, entry, self._cascade)
        if self._config.concurrent_tiers:
            aggregator.prefetch(max_workers=self._config.tier_workers)

        pool = aggregator.merged_pool()
        ratings = self._engine.rate(entry, pool)
        result = self._selector.decide(entry, ratings)

        if result.matched:
            logger.debug(
                f"({entry.position}) Selected {result.candidate.short_description} "
                f"for {entry.short_description}: {result.reason}"
            )
            if result.has_close_alternatives:
                log_match_review(
                    logger,
                    entry.short_description,
                    REVIEW_CLOSE_ALTERNATIVES,
                    [_review_tuple(r) for r in result.close_alternatives],
                    selected=_review_tuple(result.rating),
                    position=entry.position,
                )
        else:
            logger.debug(
                f"({entry.position}) No match for {entry.short_description}: {result.reason}"
            )
            log_match_review(
                logger,
                entry.short_description,
                REVIEW_NO_MATCH,
                [_review_tuple(r) for r in result.diagnostics],
                position=entry.position,
            )

        return result

    def resolve_chart(
        self,
        chart: ChartInfo,
        progress_bar: ResolvingProgressBar | None = None
    ) -> list[MatchResult]:
        """
        Resolve every entry of a chart, one at a time in chart order.

        Args:
            chart: The chart to resolve.
            progress_bar: Optional progress bar to update. If None, the
                          outcome of every entry is logged instead.

        Returns:
            One MatchResult per entry, in the order of chart.entries.

        Raises:
            CatalogError: If the catalog backend failed; entries resolved
                          before the failure are discarded.
        """
        if self._config.normalize_entries:
            chart = apply_fixes(chart, self._fixes)

        logger.info(f"Resolving {len(chart.entries)} entries of chart {chart.year}")

        results = []
        for entry in chart.entries:
            result = self.resolve_entry(entry)
            results.append(result)
            self._report_progress(result, progress_bar)

        matched = sum(1 for r in results if r.matched)
        logger.info(
            f"Chart {chart.year}: {matched} matched, {len(results) - matched} without match"
        )
        return results

    def _report_progress(
        self,
        result: MatchResult,
        progress_bar: ResolvingProgressBar | None
    ) -> None:
        entry = result.entry
        if progress_bar is None:
            outcome = "matched" if result.matched else "no match"
            logger.info(
                f"({entry.position}) {entry.short_description}: {outcome}, {result.reason}"
            )
            return

        if result.matched:
            message = format_matched_message(
                entry.short_description,
                result.candidate.short_description,
                result.score,
            )
            if result.has_close_alternatives:
                warning = (
                    f"{Colors.YELLOW}WARNING{Colors.RESET}: "
                    + format_close_matches_message(entry.short_description, result.score)
                )
            else:
                warning = None
        else:
            message = (
                f"{Colors.RED}ERROR{Colors.RESET}: "
                + format_no_match_message(entry.short_description, result.reason)
            )
            warning = None

        progress_bar.log(message)
        if warning:
            progress_bar.log(warning)
        progress_bar.update(
            matched=result.matched,
            has_close_matches=result.has_close_alternatives,
        )
