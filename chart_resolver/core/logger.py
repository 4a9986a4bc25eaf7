"""
Logging configuration for chart-resolver.

This module sets up the logging system with multiple outputs:
    - Console: Real-time progress with tqdm-compatible formatting
    - log_full.log: Complete log of all events (DEBUG and above)
    - log_errors.log: Only ERROR and CRITICAL level messages
    - match_review.log: Entries an operator should look at - entries without
      an acceptable match (with the best-scoring candidates) and matches that
      had close alternatives

The logging system follows the principle: everything to screen is also saved
to file, then filtered into specialized files.

Log File Locations:
    All log files are created in <output directory>/logs with a timestamp
    in their name, so every run keeps its own files.

Usage:
    from chart_resolver.core.logger import setup_logging, get_logger

    setup_logging(output_dir)  # Call once at startup
    logger = get_logger(__name__)  # Get logger for each module

    logger.info("Resolving chart 2001")
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import TextIO

from tqdm import tqdm


LOG_FULL_FILENAME = "log_full"
LOG_ERRORS_FILENAME = "log_errors"
MATCH_REVIEW_FILENAME = "match_review"

# Log format for file output (detailed with timestamp)
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Log format for console output (compact, tqdm-friendly)
CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"

REVIEW_NO_MATCH = "no match"
REVIEW_CLOSE_ALTERNATIVES = "close alternatives"


class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"
    BOLD = "\033[1m"


class ColoredConsoleFormatter(logging.Formatter):
    """
    Formatter that adds colors to console output.

    Colors:
        - DEBUG: Blue
        - INFO: Green
        - WARNING: Yellow
        - ERROR: Red
        - CRITICAL: Bold Red
    """

    LEVEL_COLORS = {
        logging.DEBUG: Colors.BLUE,
        logging.INFO: Colors.GREEN,
        logging.WARNING: Colors.YELLOW,
        logging.ERROR: Colors.RED,
        logging.CRITICAL: Colors.BOLD + Colors.RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, Colors.WHITE)
        colored_levelname = f"{color}{record.levelname}{Colors.RESET}"
        return f"{colored_levelname}: {record.getMessage()}"


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes to console without breaking progress bars.

    Progress bars redraw in place on stderr. Writing through tqdm.write()
    makes messages appear above any active bar instead of through it.
    """

    def __init__(self, stream: TextIO = sys.stderr) -> None:
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except Exception:
            self.handleError(record)


class MatchReviewHandler(logging.Handler):
    """
    Handler that collects entries needing operator review.

    This handler listens for log records carrying match review information
    and writes them to match_review.log in a human-readable format:

        #7 Lady [Modjo] (2001)
        Outcome: no match
        Candidates:
          - Lady (Karaoke Version) [Karaoke Hits], Sing Along (2010) 3abc... (score: blocked)
          - Lady (Live) [Modjo], Live in Paris (2004) 4def... (score: 19.8)

        #12 Believe [Cher] (1999)
        Outcome: close alternatives
        Selected: Believe [Cher], Believe (1998) 1xyz... (score: 34.1)
        Candidates:
          - Believe [Cher], Greatest Hits (1999) 2uvw... (score: 33.2)

    The handler looks for specific extra fields in log records:
        - 'match_review_entry': Short description of the chart entry
        - 'match_review_position': Chart position (optional)
        - 'match_review_outcome': REVIEW_NO_MATCH or REVIEW_CLOSE_ALTERNATIVES
        - 'match_review_selected': (description, id, score) or None
        - 'match_review_candidates': List of (description, id, score) tuples

    Only records containing these fields are written to the report.

    Attributes:
        report_path: Path to the match_review.log file.
        report_file: Open file handle (opened by open()).
    """

    def __init__(self, report_path: Path) -> None:
        super().__init__()
        self.report_path = report_path
        self.report_file: TextIO | None = None

    def open(self) -> None:
        """Open the report file for writing (overwrites existing content)."""
        self.report_file = open(self.report_path, "w", encoding="utf-8")

    def emit(self, record: logging.LogRecord) -> None:
        if not hasattr(record, "match_review_entry"):
            return

        if self.report_file is None:
            return

        try:
            entry = getattr(record, "match_review_entry", "Unknown")
            position = getattr(record, "match_review_position", None)
            outcome = getattr(record, "match_review_outcome", REVIEW_NO_MATCH)
            selected = getattr(record, "match_review_selected", None)
            candidates = getattr(record, "match_review_candidates", [])

            header = f"#{position} {entry}" if position is not None else entry
            self.report_file.write(f"{header}\n")
            self.report_file.write(f"Outcome: {outcome}\n")

            if selected is not None:
                description, candidate_id, score = selected
                self.report_file.write(
                    f"Selected: {description} {candidate_id} (score: {_format_score(score)})\n"
                )

            if candidates:
                self.report_file.write("Candidates:\n")
                for description, candidate_id, score in candidates:
                    self.report_file.write(
                        f"  - {description} {candidate_id} (score: {_format_score(score)})\n"
                    )
            else:
                self.report_file.write("Candidates: none\n")

            self.report_file.write("\n")
            self.report_file.flush()
        except Exception:
            self.handleError(record)

    def close(self) -> None:
        """Close the report file handle. Safe to call multiple times."""
        if self.report_file is not None:
            try:
                self.report_file.close()
            except OSError:
                pass
            self.report_file = None
        super().close()


class ErrorOnlyFilter(logging.Filter):
    """Filter that only allows ERROR and CRITICAL level records."""

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= logging.ERROR


def _format_score(score: float) -> str:
    if score == float("-inf"):
        return "blocked"
    return f"{score:.1f}"


def setup_logging(output_dir: Path, verbose: bool = False) -> None:
    """
    Configure the logging system for the application.

    This function should be called ONCE at application startup, after
    the configuration is loaded but before any other operations.

    Args:
        output_dir: Directory where log files will be created.
                    Logs are stored in a 'logs' subdirectory.
        verbose: Show DEBUG messages on the console as well.

    Behavior:
        1. Create output_dir/logs if it doesn't exist
        2. Configure root logger level to DEBUG
        3. Console handler (TqdmLoggingHandler), INFO or DEBUG, colored
        4. Full log file handler, DEBUG, timestamped format
        5. Error log file handler, ERROR+ via ErrorOnlyFilter
        6. Match review handler writing match_review_<timestamp>.log

    Thread Safety:
        This function is NOT thread-safe. Call it once from the main
        thread before starting any worker threads.
    """
    logs_dir = output_dir / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = TqdmLoggingHandler()
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(ColoredConsoleFormatter())
    root_logger.addHandler(console_handler)

    full_log_path = logs_dir / f"{LOG_FULL_FILENAME}_{timestamp}.log"
    full_handler = logging.FileHandler(full_log_path, mode="w", encoding="utf-8")
    full_handler.setLevel(logging.DEBUG)
    full_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    root_logger.addHandler(full_handler)

    error_log_path = logs_dir / f"{LOG_ERRORS_FILENAME}_{timestamp}.log"
    error_handler = logging.FileHandler(error_log_path, mode="w", encoding="utf-8")
    error_handler.setLevel(logging.DEBUG)  # Filter handles the level restriction
    error_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT, FILE_DATE_FORMAT))
    error_handler.addFilter(ErrorOnlyFilter())
    root_logger.addHandler(error_handler)

    review_path = logs_dir / f"{MATCH_REVIEW_FILENAME}_{timestamp}.log"
    review_handler = MatchReviewHandler(review_path)
    review_handler.open()
    root_logger.addHandler(review_handler)

    # spotipy and urllib3 are chatty at DEBUG
    logging.getLogger("spotipy").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for a module.

    Args:
        name: The logger name, typically __name__ of the calling module.

    Returns:
        logging.Logger: A logger instance configured by setup_logging().

    Note:
        Loggers obtained before setup_logging() is called will have no
        handlers and will not produce output.
    """
    return logging.getLogger(name)


def format_matched_message(entry: str, candidate: str, score: float) -> str:
    """Format a 'Matched' message with colors."""
    return (
        f"{Colors.GREEN}Matched{Colors.RESET}: "
        f"{entry} -> "
        f"{Colors.CYAN}{candidate}{Colors.RESET} "
        f"(score: {score:.1f})"
    )


def format_close_matches_message(entry: str, score: float) -> str:
    """Format a 'Multiple close matches' warning message with colors."""
    return (
        f"{Colors.YELLOW}Multiple close matches{Colors.RESET} for: "
        f"{entry} "
        f"(selected score: {Colors.YELLOW}{score:.1f}{Colors.RESET})"
    )


def format_no_match_message(entry: str, reason: str) -> str:
    """Format a 'No match' error message with colors."""
    return (
        f"{Colors.RED}No match{Colors.RESET} for: "
        f"{entry} "
        f"({reason})"
    )


def log_match_review(
    logger: logging.Logger,
    entry: str,
    outcome: str,
    candidates: list[tuple[str, str, float]],
    selected: tuple[str, str, float] | None = None,
    position: int | None = None
) -> None:
    """
    Log an entry that needs operator review.

    This is a convenience function that logs with the correct extra fields
    for the MatchReviewHandler to pick up.

    Args:
        logger: The logger to use for the message.
        entry: Short description of the chart entry.
        outcome: REVIEW_NO_MATCH or REVIEW_CLOSE_ALTERNATIVES.
        candidates: (description, candidate id, score) tuples. For a no-match
                    these are the top ratings; for a match the close alternatives.
        selected: (description, candidate id, score) of the chosen candidate.
        position: Chart position for the report header.
    """
    logger.warning(
        f"Review needed for {entry}: {outcome} ({len(candidates)} candidates)",
        extra={
            "match_review_entry": entry,
            "match_review_position": position,
            "match_review_outcome": outcome,
            "match_review_selected": selected,
            "match_review_candidates": candidates,
        }
    )


def shutdown_logging() -> None:
    """
    Properly shut down the logging system.

    Flushes and closes all handlers and removes them from the root logger.
    Typically called in a finally block at application exit.
    """
    root_logger = logging.getLogger()

    for handler in root_logger.handlers[:]:
        try:
            handler.flush()
            handler.close()
        except OSError:
            pass
        root_logger.removeHandler(handler)
