"""Logging setup for the command line."""

from __future__ import annotations

import logging

# httpx logs every request at INFO; the resilient client already does at DEBUG.
_CHATTY_LIBRARIES = ("httpx", "httpcore", "hishel")


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Send log records to stderr so stdout stays free for the JSON report.

    Third-party HTTP loggers are held at WARNING unless ``level`` is DEBUG.
    ``force=True`` replaces handlers installed by an earlier call.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    library_level = logging.DEBUG if logging.getLogger().level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LIBRARIES:
        logging.getLogger(name).setLevel(library_level)
