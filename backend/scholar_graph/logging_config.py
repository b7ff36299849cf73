"""
Logging Configuration

Configures the root logger once at startup. Modules log through
`logging.getLogger(__name__)`.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"

# Loggers that are too chatty at INFO
NOISY_LOGGERS = ("neo4j", "httpx")


def setup_logging(level: str = "INFO") -> None:
    """
    Configure root logging.

    Args:
        level: Level name (e.g. "DEBUG", "INFO"); unknown names fall back to INFO
    """
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
