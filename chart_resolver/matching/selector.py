"""
Match selection and the per-entry match outcome.

The selector turns the ratings of one pool into a MatchResult: the best
candidate at or above the acceptance threshold, or an explicit "no match"
that carries the best few ratings for review. A low-confidence candidate
is never returned as a match.
"""

from dataclasses import dataclass

from chart_resolver.catalog.models import CandidateTrack, SourceEntry
from chart_resolver.core.config import (
    DEFAULT_CLOSE_MATCH_THRESHOLD,
    DEFAULT_DIAGNOSTICS_COUNT,
    DEFAULT_MIN_SCORE,
)
from chart_resolver.matching.scoring import CandidateRating


@dataclass(frozen=True)
class MatchResult:
    """
    Result of resolving one chart entry to a catalog track.

    Attributes:
        entry: The chart entry that was resolved.

        matched: Whether a candidate reached the acceptance threshold.

        rating: The rating of the selected candidate, or None if no match.

        reason: Human-readable explanation of the decision.
                Examples:
                - "Best score 31.40 (threshold 22.00)"
                - "Best score 17.25 below threshold 22.00"
                - "No candidates found"

        close_alternatives: Other accepted ratings scoring within the close
                            match threshold of the selected one. Empty
                            when the match is unambiguous.

        diagnostics: On "no match", the best ratings regardless of the
                     threshold, highest first. Empty on success.

    Properties:
        candidate: The selected CandidateTrack, or None.
        track_id: The catalog id of the selected track, or None.
        score: Aggregate score of the selected candidate (0.0 if none).
        has_close_alternatives: True if alternatives should be reviewed.

    Example:
        result = resolver.resolve_entry(entry)
        if result.matched:
            print(f"{entry.short_description} -> {result.track_id}")
        else:
            for rating in result.diagnostics:
                print(rating.candidate.short_description, rating.aggregate_score)
    """

    entry: SourceEntry
    matched: bool
    rating: CandidateRating | None
    reason: str
    close_alternatives: tuple[CandidateRating, ...] = ()
    diagnostics: tuple[CandidateRating, ...] = ()

    @property
    def candidate(self) -> CandidateTrack | None:
        return self.rating.candidate if self.rating else None

    @property
    def track_id(self) -> str | None:
        return self.rating.candidate.id if self.rating else None

    @property
    def score(self) -> float:
        return self.rating.aggregate_score if self.rating else 0.0

    @property
    def has_close_alternatives(self) -> bool:
        return len(self.close_alternatives) > 0

    @classmethod
    def success(
        cls,
        entry: SourceEntry,
        rating: CandidateRating,
        reason: str,
        close_alternatives: list[CandidateRating] | None = None
    ) -> "MatchResult":
        """Create a result with matched=True."""
        return cls(
            entry=entry,
            matched=True,
            rating=rating,
            reason=reason,
            close_alternatives=tuple(close_alternatives) if close_alternatives else (),
        )

    @classmethod
    def failure(
        cls,
        entry: SourceEntry,
        reason: str,
        diagnostics: list[CandidateRating] | None = None
    ) -> "MatchResult":
        """Create a "no match" result, optionally with diagnostic ratings."""
        return cls(
            entry=entry,
            matched=False,
            rating=None,
            reason=reason,
            diagnostics=tuple(diagnostics) if diagnostics else (),
        )


def rank_ratings(ratings: list[CandidateRating]) -> list[CandidateRating]:
    """Sort ratings by aggregate score, highest first; ties keep pool order."""
    return sorted(ratings, key=lambda r: r.aggregate_score, reverse=True)


class MatchSelector:
    """
    Picks the best acceptable candidate from a rated pool.

    Selection is a pure function of the ratings and the thresholds given
    at construction time.

    Attributes:
        min_score: Acceptance threshold for the aggregate score.
        diagnostics_count: Number of ratings kept on "no match".
        close_match_threshold: Score distance under which accepted
                               runners-up are reported as close alternatives.
    """

    def __init__(
        self,
        min_score: float = DEFAULT_MIN_SCORE,
        diagnostics_count: int = DEFAULT_DIAGNOSTICS_COUNT,
        close_match_threshold: float = DEFAULT_CLOSE_MATCH_THRESHOLD
    ) -> None:
        self.min_score = min_score
        self.diagnostics_count = diagnostics_count
        self.close_match_threshold = close_match_threshold

    def select(self, ratings: list[CandidateRating]) -> CandidateRating | None:
        """
        Return the highest rating at or above min_score, or None.
        """
        accepted = self._accepted(rank_ratings(ratings))
        return accepted[0] if accepted else None

    def decide(self, entry: SourceEntry, ratings: list[CandidateRating]) -> MatchResult:
        """
        Build the MatchResult of an entry from its ratings.

        Returns:
            A successful result with close alternatives, or a failure
            carrying the top diagnostics_count ratings.
        """
        if not ratings:
            return MatchResult.failure(entry, "No candidates found")

        ranked = rank_ratings(ratings)
        accepted = self._accepted(ranked)

        if not accepted:
            best = ranked[0]
            if best.blocked:
                reason = "All candidates blocked"
            else:
                reason = (
                    f"Best score {best.aggregate_score:.2f} "
                    f"below threshold {self.min_score:.2f}"
                )
            return MatchResult.failure(
                entry, reason, diagnostics=ranked[:self.diagnostics_count]
            )

        best = accepted[0]
        close_alternatives = [
            rating for rating in accepted[1:]
            if best.aggregate_score - rating.aggregate_score <= self.close_match_threshold
        ]
        reason = f"Best score {best.aggregate_score:.2f} (threshold {self.min_score:.2f})"
        return MatchResult.success(entry, best, reason, close_alternatives)

    def _accepted(self, ranked: list[CandidateRating]) -> list[CandidateRating]:
        return [
            rating for rating in ranked
            if not rating.blocked and rating.aggregate_score >= self.min_score
        ]
