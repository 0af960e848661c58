"""Logging setup for tidetime.

Under Cloud Run (K_SERVICE is set) records go to Google Cloud Logging. Locally
they go to stderr, tagged with the emitting file relative to the project root.
"""

import logging
import os

import google.cloud.logging  # type: ignore[import]

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

LOCAL_LOG_FORMAT = "%(levelname)s:%(relativepath)s:%(lineno)d: %(message)s"


class RelativePathFilter(logging.Filter):
    """Adds a 'relativepath' attribute, the record's source file under PROJECT_ROOT."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            record.relativepath = os.path.relpath(record.pathname, PROJECT_ROOT)
        except ValueError:
            # Source on another drive (Windows)
            record.relativepath = record.pathname
        return True


def setup_logging(level: int = logging.INFO) -> None:
    """Route the root logger to Cloud Logging or a local stderr handler."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    if "K_SERVICE" in os.environ:
        client = google.cloud.logging.Client()  # type: ignore[no-untyped-call]
        client.setup_logging(log_level=level)  # type: ignore[no-untyped-call]
        logging.info("Logging to Google Cloud Logging")
        return

    # Filter on the handler so records from every logger get the attribute
    handler = logging.StreamHandler()
    handler.addFilter(RelativePathFilter())
    handler.setFormatter(logging.Formatter(LOCAL_LOG_FORMAT))
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    logging.info("Logging to stderr")
