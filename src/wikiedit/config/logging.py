"""Logging setup for the command line entry point."""

from __future__ import annotations

import logging

# Transport libraries that log every request line at INFO.
NOISY_LOGGERS = ("httpx", "httpcore", "hishel")


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for CLI output.

    Below DEBUG the transport libraries are held at WARNING; request tracing is
    done by the client's own response hook instead. ``force=True`` replaces
    handlers installed earlier.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    transport_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(transport_level)
