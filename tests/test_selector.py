"""Test match selection"""

import pytest

from chart_resolver.matching.scoring import CandidateRating
from chart_resolver.matching.selector import MatchResult, MatchSelector, rank_ratings


@pytest.fixture
def rate(make_candidate):
    """Factory for ratings with a fixed aggregate score"""
    def _rate(id, score, blocked=False):
        return CandidateRating(make_candidate(id=id), scores={"title": score}, blocked=blocked)
    return _rate


class TestSelect:
    """Test MatchSelector.select()"""

    def test_best_above_threshold(self, rate):
        """Test the highest acceptable rating is returned"""
        ratings = [rate("a", 25.0), rate("b", 31.0), rate("c", 10.0)]
        assert MatchSelector().select(ratings).candidate.id == "b"

    def test_nothing_above_threshold(self, rate):
        """Test None when every score is below the threshold"""
        assert MatchSelector().select([rate("a", 21.9), rate("b", 5.0)]) is None

    def test_threshold_inclusive(self, rate):
        """Test a score equal to the threshold is accepted"""
        assert MatchSelector(min_score=22.0).select([rate("a", 22.0)]).candidate.id == "a"

    @pytest.mark.parametrize("min_score", [-10.0, 0.0, 15.0, 22.0, 30.0, 50.0])
    def test_never_below_threshold(self, rate, min_score):
        """Test a selected rating always reaches min_score"""
        ratings = [rate(str(i), float(score)) for i, score in enumerate([-5, 3, 14, 22, 29, 40])]
        selected = MatchSelector(min_score=min_score).select(ratings)
        assert selected is None or selected.aggregate_score >= min_score

    def test_blocked_never_selected(self, rate):
        """Test blocked ratings are ignored even with no threshold"""
        selector = MatchSelector(min_score=float("-inf"))
        assert selector.select([rate("a", 50.0, blocked=True)]) is None

    def test_ties_keep_pool_order(self, rate):
        """Test equal scores keep their pool order"""
        ranked = rank_ratings([rate("a", 30.0), rate("b", 30.0)])
        assert [r.candidate.id for r in ranked] == ["a", "b"]


class TestDecide:
    """Test MatchSelector.decide()"""

    def test_no_candidates(self, make_entry):
        """Test an empty pool is a no match without diagnostics"""
        result = MatchSelector().decide(make_entry(), [])
        assert not result.matched
        assert result.reason == "No candidates found"
        assert result.diagnostics == ()

    def test_no_match_keeps_top_five(self, make_entry, rate):
        """Test diagnostics hold the five best ratings, highest first"""
        ratings = [rate(str(i), float(i)) for i in range(8)]

        result = MatchSelector().decide(make_entry(), ratings)

        assert not result.matched
        assert result.track_id is None
        assert result.score == 0.0
        assert [r.candidate.id for r in result.diagnostics] == ["7", "6", "5", "4", "3"]
        assert result.reason == "Best score 7.00 below threshold 22.00"

    def test_all_blocked(self, make_entry, rate):
        """Test the reason names blocked candidates"""
        result = MatchSelector().decide(make_entry(), [rate("a", 0.0, blocked=True)])
        assert result.reason == "All candidates blocked"
        assert len(result.diagnostics) == 1

    def test_match_with_close_alternatives(self, make_entry, rate):
        """Test accepted runners-up within the threshold are reported"""
        ratings = [rate("a", 25.0), rate("b", 30.0), rate("c", 29.0), rate("d", 10.0)]

        result = MatchSelector(close_match_threshold=2.0).decide(make_entry(), ratings)

        assert result.matched
        assert result.track_id == "b"
        assert result.score == 30.0
        assert result.has_close_alternatives
        assert [r.candidate.id for r in result.close_alternatives] == ["c"]
        assert result.diagnostics == ()


class TestMatchResult:
    """Test MatchResult constructors"""

    def test_success(self, make_entry, rate):
        """Test success() fills the selected rating"""
        rating = rate("a", 30.0)
        result = MatchResult.success(make_entry(), rating, "ok")
        assert result.matched
        assert result.candidate is rating.candidate
        assert not result.has_close_alternatives

    def test_failure(self, make_entry):
        """Test failure() has no candidate"""
        result = MatchResult.failure(make_entry(), "nothing")
        assert not result.matched
        assert result.candidate is None
        assert result.rating is None
