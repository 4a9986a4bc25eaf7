"""
Additive multi-dimension scoring of a candidate pool.

Every candidate that survives the blocklist is scored along eleven
dimensions. The points are summed, unweighted, into one aggregate score
which the selector compares against the acceptance threshold.

Dimensions (points):
    title           weighted token overlap, up to 10, or -5 without overlap
    artist_count    +2 when the number of credited artists is equal
    artist_names    +10 exact token match, +7 all chart artists present,
                    +5 any chart artist present, else -5
    popularity      0..5, relative to the most popular candidate in the pool
    pool_rank       0..5, earlier pool position scores higher
    duration        0..2, shorter tracks score higher
    live            -2 for results on live-titled albums
    remix           -2 for remixes
    radio_edit      +2 for radio edits
    release_date    -1..+2, depending on release year vs chart year
    track_number    +2 on tracks 1-3, +1 on tracks 4-7

Popularity, pool rank and duration are relative to the whole pool, which
is why the engine always rates a complete pool at once.
"""

from dataclasses import dataclass, field
from functools import cached_property

from chart_resolver.catalog.models import CandidateTrack, SourceEntry
from chart_resolver.matching.aliases import canonical_artist
from chart_resolver.matching.blocklist import BlocklistFilter
from chart_resolver.matching.normalize import tokenize


# Aggregate score of blocked candidates, below every reachable score
BLOCKED_SCORE = float("-inf")

TITLE_MAX_SCORE = 10.0
TITLE_MISMATCH_SCORE = -5.0
TITLE_WEIGHT_FACTOR = 1.5
TITLE_RUN_BOOST_STEP = 0.1

ARTIST_COUNT_MATCH_SCORE = 2.0
ARTIST_EXACT_MATCH_SCORE = 10.0
ARTIST_ALL_PRESENT_SCORE = 7.0
ARTIST_ANY_PRESENT_SCORE = 5.0
ARTIST_MISMATCH_SCORE = -5.0

POPULARITY_MAX_SCORE = 5.0
POOL_RANK_MAX_SCORE = 5.0
DURATION_MAX_SCORE = 2.0

LIVE_SCORE = -2.0
REMIX_SCORE = -2.0
RADIO_EDIT_SCORE = 2.0

TRACK_NUMBER_SCORES = ((3, 2.0), (7, 1.0))

DIMENSIONS = (
    "title",
    "artist_count",
    "artist_names",
    "popularity",
    "pool_rank",
    "duration",
    "live",
    "remix",
    "radio_edit",
    "release_date",
    "track_number",
)


@dataclass(frozen=True, eq=False)
class CandidateRating:
    """
    Score sheet of one candidate.

    Attributes:
        candidate: The rated catalog track.
        scores: Points per dimension, empty for blocked candidates.
        blocked: Whether the candidate is structurally disqualified.

    Ratings compare and hash by identity. The aggregate score is computed
    on first access and cached on the instance; later reads return the
    same value.
    """
    candidate: CandidateTrack
    scores: dict[str, float] = field(default_factory=dict)
    blocked: bool = False

    @cached_property
    def aggregate_score(self) -> float:
        if self.blocked:
            return BLOCKED_SCORE
        return sum(self.scores.values())

    @classmethod
    def blocked_rating(cls, candidate: CandidateTrack) -> "CandidateRating":
        return cls(candidate=candidate, scores={}, blocked=True)


def title_score(entry_title: str, candidate_title: str) -> float:
    """
    Score how well a candidate title covers the chart title.

    Candidate tokens get exponentially decreasing weights from first to
    last (factor 1.5 per position), normalized to sum to 10. Each candidate
    token found among the chart title tokens adds its weight times a
    running boost; the boost grows by 0.1 with every consecutive hit and
    falls back to 1.0 on a miss.

    Returns:
        The accumulated score capped at 10, or -5 if no token matched.

    Example:
        title_score("Lady", "Lady")                      -> 10.0
        title_score("Lady", "Lady (Hear Me Tonight)")    -> 4.15
        title_score("Hey Ya", "Roses")                   -> -5.0
    """
    entry_tokens = tokenize(entry_title)
    candidate_tokens = tokenize(candidate_title)
    if not candidate_tokens or not entry_tokens:
        return TITLE_MISMATCH_SCORE

    count = len(candidate_tokens)
    raw_weights = [TITLE_WEIGHT_FACTOR ** (count - 1 - i) for i in range(count)]
    total_weight = sum(raw_weights)
    weights = [w * TITLE_MAX_SCORE / total_weight for w in raw_weights]

    score = 0.0
    boost = 1.0
    for token, weight in zip(candidate_tokens, weights):
        position = entry_tokens.index(token) if token in entry_tokens else -1
        if position >= 0:
            score += boost * weight
            boost += TITLE_RUN_BOOST_STEP
        else:
            boost = 1.0

    if score <= 0:
        return TITLE_MISMATCH_SCORE
    return min(score, TITLE_MAX_SCORE)


def _artist_tokens(artists, year: int | None = None) -> list[str]:
    tokens: list[str] = []
    for artist in artists:
        name = canonical_artist(artist, year) if year is not None else artist
        for token in tokenize(name):
            if token not in tokens:
                tokens.append(token)
    return tokens


def artist_names_score(entry: SourceEntry, candidate: CandidateTrack) -> float:
    """
    Compare chart artist tokens with candidate artist tokens.

    Chart artists go through the alias and spelling tables first, so
    "The Symbol" on a 1990 chart is compared as "Prince".
    """
    entry_tokens = _artist_tokens(entry.artists, entry.year)
    candidate_tokens = _artist_tokens(candidate.artist_names)
    if not entry_tokens:
        return ARTIST_MISMATCH_SCORE

    present = [token for token in entry_tokens if token in candidate_tokens]
    if len(present) == len(entry_tokens):
        if all(token in entry_tokens for token in candidate_tokens):
            return ARTIST_EXACT_MATCH_SCORE
        return ARTIST_ALL_PRESENT_SCORE
    if present:
        return ARTIST_ANY_PRESENT_SCORE
    return ARTIST_MISMATCH_SCORE


def release_date_score(entry_year: int, release_year: int | None) -> float:
    """
    Score the release year of a candidate against the chart year.

    Releases from the chart year or the year before score best; older
    releases up to three years back still score. Anything released after
    the following year, or more than ten years away, is penalized. A
    release exactly four years before the chart year scores 0.
    """
    if release_year is None:
        return 0.0

    delta = release_year - entry_year
    if delta in (0, -1):
        return 2.0
    if -4 < delta < -1:
        return 1.0
    if delta > 1 or abs(delta) > 10:
        return -1.0
    return 0.0


def track_number_score(track_number: int) -> float:
    for limit, points in TRACK_NUMBER_SCORES:
        if track_number <= limit:
            return points
    return 0.0


class ScoringEngine:
    """
    Rates every candidate of a pool against one chart entry.

    Example:
        engine = ScoringEngine()
        ratings = engine.rate(entry, aggregator.merged_pool())
        best = max(ratings, key=lambda r: r.aggregate_score)
    """

    def __init__(self, blocklist: BlocklistFilter | None = None) -> None:
        self._blocklist = blocklist or BlocklistFilter()

    def rate(self, entry: SourceEntry, pool: list[CandidateTrack]) -> list[CandidateRating]:
        """
        Rate a candidate pool.

        Args:
            entry: The chart entry to match.
            pool: Merged, deduplicated candidates in tier order.

        Returns:
            One CandidateRating per candidate, in pool order. Blocked
            candidates carry no dimension scores.
        """
        pool_size = len(pool)
        if pool_size == 0:
            return []

        max_popularity = max(candidate.popularity for candidate in pool)
        by_duration = sorted(range(pool_size), key=lambda i: pool[i].duration_ms)
        duration_rank = {index: rank for rank, index in enumerate(by_duration)}

        ratings = []
        for index, candidate in enumerate(pool):
            classification = self._blocklist.classify(entry, candidate)
            if classification.blocked:
                ratings.append(CandidateRating.blocked_rating(candidate))
                continue

            if max_popularity > 0:
                popularity = candidate.popularity * POPULARITY_MAX_SCORE / max_popularity
            else:
                popularity = 0.0

            scores = {
                "title": title_score(entry.title, candidate.title),
                "artist_count": (
                    ARTIST_COUNT_MATCH_SCORE
                    if len(candidate.artist_names) == len(entry.artists) else 0.0
                ),
                "artist_names": artist_names_score(entry, candidate),
                "popularity": popularity,
                "pool_rank": POOL_RANK_MAX_SCORE * (pool_size - index) / pool_size,
                "duration": DURATION_MAX_SCORE * (pool_size - duration_rank[index]) / pool_size,
                "live": LIVE_SCORE if classification.live else 0.0,
                "remix": REMIX_SCORE if classification.remix else 0.0,
                "radio_edit": RADIO_EDIT_SCORE if classification.radio_edit else 0.0,
                "release_date": release_date_score(entry.year, candidate.release_year),
                "track_number": track_number_score(candidate.track_number),
            }
            ratings.append(CandidateRating(candidate=candidate, scores=scores))

        return ratings
