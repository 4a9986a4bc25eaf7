"""
Matching module for chart-resolver.

This module finds the catalog track of a chart entry:
    - normalize: Text canonicalization shared by queries and scoring
    - cascade: Six search queries of decreasing specificity
    - aggregator: Lazy, memoized tier searches merged into one pool
    - blocklist: Karaoke/instrumental/live exclusion, version classification
    - scoring: Eleven-dimension additive candidate rating
    - selector: Threshold-based selection with diagnostics
    - resolver: Per-entry and per-chart orchestration

Usage:
    from chart_resolver.matching import ChartResolver

    resolver = ChartResolver(client, config.matching)
    result = resolver.resolve_entry(entry)
"""

from chart_resolver.matching.aggregator import CandidateAggregator
from chart_resolver.matching.blocklist import BlocklistFilter
from chart_resolver.matching.cascade import QueryCascadeGenerator, SearchTier
from chart_resolver.matching.normalize import normalize, tokenize
from chart_resolver.matching.resolver import ChartResolver
from chart_resolver.matching.scoring import BLOCKED_SCORE, CandidateRating, ScoringEngine
from chart_resolver.matching.selector import MatchResult, MatchSelector

__all__ = [
    "normalize",
    "tokenize",
    "SearchTier",
    "QueryCascadeGenerator",
    "CandidateAggregator",
    "BlocklistFilter",
    "BLOCKED_SCORE",
    "CandidateRating",
    "ScoringEngine",
    "MatchResult",
    "MatchSelector",
    "ChartResolver",
]
