"""Opt-in log handler setup for host programs."""

import logging

from rich.console import Console
from rich.logging import RichHandler

from ._config import MemographConfig, get_config


def configure_logging(config: MemographConfig | None = None, *, console: Console | None = None) -> RichHandler:
    """Send memograph log records to stderr through a rich handler.

    Only the ``memograph`` logger is configured; the root logger is left
    alone. Calling this again replaces the previously installed handler.

    Args:
        config: Settings to use. Defaults to ``get_config()``.
        console: Console to write to. Defaults to a stderr console.

    Returns:
        The installed handler.

    """
    if config is None:
        config = get_config()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=config.show_path,
        rich_tracebacks=config.rich_tracebacks,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger("memograph")
    for existing in [h for h in logger.handlers if isinstance(h, RichHandler)]:
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(config.log_level)
    return handler
