"""Custom filters for uvicorn access logging."""

import logging

# Used when settings cannot be loaded while uvicorn configures logging
DEFAULT_EXCLUDED_PATHS = ["/metrics", "/health"]


class ExcludeMetricsFilter(logging.Filter):
    """
    Logging filter to exclude monitoring endpoint requests from access logs.

    Health checks and Prometheus scraping hit the relay every few seconds;
    their access log lines are noise.

    Note: This class is imported by uvicorn's logging config before the app
    starts, so settings are only read when a record is filtered.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Determine if the log record should be logged.

        Args:
            record: The log record to evaluate.

        Returns:
            False if the request path is in excluded paths, True otherwise.
        """
        message = record.getMessage()

        try:
            from care_relay.settings import app_settings

            excluded_paths = app_settings.LOG_EXCLUDED_PATHS
        except (ImportError, ValueError):
            excluded_paths = DEFAULT_EXCLUDED_PATHS

        return not any(path in message for path in excluded_paths)
