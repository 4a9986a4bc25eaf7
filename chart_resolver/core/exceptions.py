"""
Exception classes for chart-resolver.

This module defines all custom exceptions used throughout the application.
Each exception is designed to provide clear, actionable error messages
and to distinguish between different failure modes.

Exception Hierarchy:
    ChartResolverError (base)
        ConfigError - Configuration file issues
        CatalogError - Catalog search backend unreachable or malformed
        EntryError - Chart entries file issues

Note:
    "Nothing found" is never an exception. A search that finds nothing is
    reported as a NOT_FOUND SearchOutcome, and an entry without an acceptable
    candidate ends in a MatchResult with matched=False.
"""


class ChartResolverError(Exception):
    """
    Base exception for all chart-resolver errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch all chart-resolver errors with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., query, field).

    Example:
        try:
            # some operation
        except ChartResolverError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description that will be shown to the user.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'query': Catalog search query involved in the error
                     - 'field': Configuration field that failed validation
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(ChartResolverError):
    """
    Raised when there's an issue with the configuration file.

    This is a CRITICAL error that should stop program execution.

    Common causes:
        - config.yaml not found
        - config.yaml has invalid YAML syntax
        - Required fields missing (client_id, client_secret, output directory)
        - Invalid field values (e.g., negative search limit)

    Example:
        raise ConfigError(
            "'spotify.client_id' must be a non-empty string",
            details={'field': 'spotify.client_id'}
        )
    """
    pass


class CatalogError(ChartResolverError):
    """
    Raised when the catalog search backend itself is unusable.

    This covers transport failures (connection refused, timeout, 5xx) and
    protocol failures (malformed response body). It aborts resolution of the
    current entry and is surfaced to the caller.

    A search that legitimately finds nothing (HTTP 404) is NOT a CatalogError.

    Attributes:
        is_auth_error: True if this is an authentication error (CRITICAL).
        is_rate_limit: True if the backend rejected the call with 429.

    Example:
        raise CatalogError(
            "Catalog search failed: 502 Bad Gateway",
            details={'query': 'track:"Lady" artist:"Modjo"', 'http_status': 502}
        )
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        is_auth_error: bool = False,
        is_rate_limit: bool = False
    ) -> None:
        """
        Initialize catalog error with additional flags.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional context.
            is_auth_error: Set to True if this is an authentication failure.
            is_rate_limit: Set to True if this is a rate limit error.
        """
        super().__init__(message, details)
        self.is_auth_error = is_auth_error
        self.is_rate_limit = is_rate_limit


class EntryError(ChartResolverError):
    """
    Raised when a chart entries file cannot be loaded.

    Common causes:
        - File not found or unreadable
        - Invalid YAML syntax
        - Missing 'year' or 'entries'
        - An entry without title or artists

    Example:
        raise EntryError(
            "Entry 3 has no artists",
            details={'file_path': '/path/to/2001.yaml', 'index': 3}
        )
    """
    pass
