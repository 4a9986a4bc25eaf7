"""Test chart resolution"""

import logging
from unittest.mock import Mock

import pytest

from chart_resolver.catalog.client import SearchOutcome
from chart_resolver.chart.entries import ChartInfo
from chart_resolver.core.config import MatchingConfig
from chart_resolver.core.exceptions import CatalogError
from chart_resolver.core.logger import REVIEW_CLOSE_ALTERNATIVES, REVIEW_NO_MATCH
from chart_resolver.matching.resolver import ChartResolver


def _review_records(caplog, outcome):
    return [
        r for r in caplog.records
        if getattr(r, "match_review_outcome", None) == outcome
    ]


class TestResolveEntry:
    """Test ChartResolver.resolve_entry()"""

    def test_lady_selected_over_karaoke(self, make_entry, make_candidate, fake_client):
        """Test the karaoke version is skipped and the original matched"""
        karaoke = make_candidate(id="karaoke", title="Lady (Karaoke Version)")
        original = make_candidate(id="original", title="Lady")
        client = fake_client(default=SearchOutcome.found([karaoke, original]))

        result = ChartResolver(client).resolve_entry(make_entry())

        assert result.matched
        assert result.track_id == "original"
        assert len(client.calls) == 6

    @pytest.mark.parametrize("candidate_fields", [
        {"title": "Lady", "artists": ("Party Tyme Karaoke",), "album": "Hits of 2001"},
        {"title": "Lady (Live)", "album": "Modjo"},
        {"title": "Lady - Live", "album": "Modjo"},
    ])
    def test_karaoke_act_and_live_never_selected(
        self, make_entry, make_candidate, fake_client, candidate_fields
    ):
        """Test karaoke acts and live takes end as no match when nothing else is found"""
        client = fake_client(default=SearchOutcome.found([make_candidate(**candidate_fields)]))

        result = ChartResolver(client).resolve_entry(make_entry())

        assert not result.matched
        assert result.reason == "All candidates blocked"

    def test_hey_ya_no_match(self, make_entry, make_candidate, fake_client, caplog):
        """Test a below-threshold pool ends as no match with diagnostics"""
        entry = make_entry(title="Hey Ya", artists=("OutKast",), year=2003, position=4)
        candidate = make_candidate(title="Roses", artists=("OutKast",),
                                   album="Speakerboxxx/The Love Below",
                                   release_date="2003-09-23", popularity=60,
                                   duration_ms=300000, track_number=10)
        client = fake_client(default=SearchOutcome.found([candidate]))

        with caplog.at_level(logging.WARNING):
            result = ChartResolver(client).resolve_entry(entry)

        assert not result.matched
        assert len(result.diagnostics) == 1
        records = _review_records(caplog, REVIEW_NO_MATCH)
        assert len(records) == 1
        assert records[0].match_review_position == 4
        assert records[0].match_review_candidates[0][1] == "track_1"

    def test_close_alternatives_reviewed(self, make_entry, make_candidate, fake_client, caplog):
        """Test a match with a close runner-up is written to the review log"""
        first = make_candidate(id="first")
        second = make_candidate(id="second")
        client = fake_client(default=SearchOutcome.found([first, second]))
        config = MatchingConfig(close_match_threshold=5.0)

        with caplog.at_level(logging.WARNING):
            result = ChartResolver(client, config).resolve_entry(make_entry())

        assert result.track_id == "first"
        assert [r.candidate.id for r in result.close_alternatives] == ["second"]
        records = _review_records(caplog, REVIEW_CLOSE_ALTERNATIVES)
        assert records[0].match_review_selected[1] == "first"

    def test_concurrent_tiers_same_result(self, make_entry, make_candidate, fake_client):
        """Test concurrent tier searches give the same match"""
        original = make_candidate(id="original")
        client = fake_client(default=SearchOutcome.found([original]))
        config = MatchingConfig(concurrent_tiers=True, tier_workers=3)

        result = ChartResolver(client, config).resolve_entry(make_entry())

        assert result.track_id == "original"
        assert len(client.calls) == 6

    def test_threshold_from_config(self, make_entry, make_candidate, fake_client):
        """Test the configured min_score is applied"""
        client = fake_client(default=SearchOutcome.found([make_candidate()]))
        config = MatchingConfig(min_score=100.0)

        result = ChartResolver(client, config).resolve_entry(make_entry())
        assert not result.matched

    def test_catalog_failure_propagates(self, make_entry, fake_client):
        """Test transport failures abort the resolution"""
        client = fake_client(default=SearchOutcome.failed(CatalogError("down")))
        with pytest.raises(CatalogError):
            ChartResolver(client).resolve_entry(make_entry())


class TestResolveChart:
    """Test ChartResolver.resolve_chart()"""

    def test_results_in_chart_order(self, make_entry, make_candidate, fake_client):
        """Test one result per entry, in chart order, with progress updates"""
        lady = make_entry(position=1)
        believe = make_entry(title="Believe", artists=("Cher",), position=2)
        chart = ChartInfo(year=2001, entries=(lady, believe))
        client = fake_client(default=SearchOutcome.found([make_candidate()]))
        progress_bar = Mock()

        results = ChartResolver(client).resolve_chart(chart, progress_bar=progress_bar)

        assert [r.entry for r in results] == [lady, believe]
        assert results[0].matched
        assert not results[1].matched
        assert progress_bar.update.call_count == 2
        progress_bar.update.assert_any_call(matched=False, has_close_matches=False)
        assert len(client.calls) == 12

    def test_entry_fixes_applied(self, make_entry, fake_client):
        """Test known scraper mistakes are fixed before searching"""
        entry = make_entry(title="Hie u jetzt - Right Here Right Now",
                           artists=("Mia Aegerter",), year=2003)
        chart = ChartInfo(year=2003, entries=(entry,))
        client = fake_client()

        results = ChartResolver(client, MatchingConfig(normalize_entries=True)).resolve_chart(chart)

        assert results[0].entry.title == "Hie u jetzt"
        assert client.calls[0] == 'track:"Hie u jetzt" artist:"Mia Aegerter" year:2002-2003'

    def test_entry_fixes_disabled(self, make_entry, fake_client):
        """Test entries are searched as scraped by default"""
        entry = make_entry(title="Hie u jetzt - Right Here Right Now",
                           artists=("Mia Aegerter",), year=2003)
        chart = ChartInfo(year=2003, entries=(entry,))
        client = fake_client()

        results = ChartResolver(client).resolve_chart(chart)
        assert results[0].entry.title == "Hie u jetzt - Right Here Right Now"
