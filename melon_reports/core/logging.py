"""
Logging utilities for the report service and operator scripts.

The PDF stack (WeasyPrint, fontTools) and botocore are chatty at INFO, so they
are capped at WARNING unless the service itself runs at DEBUG.
"""

import logging
import sys

_NOISY_LOGGERS = ("weasyprint", "fontTools", "botocore", "boto3", "urllib3")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service."""
    resolved = level.upper()
    logging.basicConfig(
        level=resolved,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    library_level = logging.DEBUG if resolved == "DEBUG" else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


__all__ = ["configure_logging"]
