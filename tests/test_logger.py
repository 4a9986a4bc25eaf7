"""Test logging setup and the match review log"""

import logging

import pytest

from chart_resolver.core.logger import (
    REVIEW_CLOSE_ALTERNATIVES,
    REVIEW_NO_MATCH,
    get_logger,
    log_match_review,
    setup_logging,
    shutdown_logging,
)


@pytest.fixture
def logs_dir(tmp_path):
    """Configure logging into tmp_path, shut it down afterwards"""
    setup_logging(tmp_path)
    yield tmp_path / "logs"
    shutdown_logging()


def _read(logs_dir, prefix):
    files = list(logs_dir.glob(f"{prefix}_*.log"))
    assert len(files) == 1
    return files[0].read_text(encoding="utf-8")


class TestLogging:
    """Test setup_logging()"""

    def test_log_files(self, logs_dir):
        """Test the full log gets everything, the error log only errors"""
        logger = get_logger("chart_resolver.test")
        logger.debug("debug message")
        logger.error("error message")
        shutdown_logging()

        full = _read(logs_dir, "log_full")
        errors = _read(logs_dir, "log_errors")
        assert "debug message" in full
        assert "error message" in full
        assert "debug message" not in errors
        assert "error message" in errors

    def test_chatty_libraries_quieted(self, logs_dir):
        """Test spotipy debug output is suppressed"""
        assert logging.getLogger("spotipy").level == logging.WARNING


class TestMatchReview:
    """Test the match review log"""

    def test_review_blocks(self, logs_dir):
        """Test no-match and close-alternative entries are written"""
        logger = get_logger("chart_resolver.test")
        log_match_review(
            logger,
            "Lady [Modjo]",
            REVIEW_NO_MATCH,
            [
                ("Lady (Karaoke Version) [Karaoke Hits], Sing (2010)", "id_1", float("-inf")),
                ("Lady - Live [Modjo], Live (2004)", "id_2", 19.75),
            ],
            position=7,
        )
        log_match_review(
            logger,
            "Believe [Cher]",
            REVIEW_CLOSE_ALTERNATIVES,
            [("Believe [Cher], Hits (1999)", "id_4", 33.2)],
            selected=("Believe [Cher], Believe (1998)", "id_3", 34.1),
        )
        logger.warning("plain warning")
        shutdown_logging()

        review = _read(logs_dir, "match_review")
        assert "#7 Lady [Modjo]\nOutcome: no match\n" in review
        assert "id_1 (score: blocked)" in review
        assert "id_2 (score: 19.8)" in review
        assert "Selected: Believe [Cher], Believe (1998) id_3 (score: 34.1)" in review
        assert "plain warning" not in review

    def test_no_candidates(self, logs_dir):
        """Test an entry without candidates is still recorded"""
        log_match_review(get_logger("chart_resolver.test"), "X [Y]", REVIEW_NO_MATCH, [])
        shutdown_logging()
        assert "Candidates: none" in _read(logs_dir, "match_review")
