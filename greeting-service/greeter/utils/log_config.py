"""Process-wide logging setup."""

import logging
import sys


class _BelowErrorFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.ERROR


def configure_logging(level: str = "INFO", fmt: str = "%(message)s") -> None:
    """Send records below ERROR to stdout and ERROR and above to stderr."""
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_BelowErrorFilter())

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=fmt,
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[stdout_handler, stderr_handler],
        force=True,
    )
