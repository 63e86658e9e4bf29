"""Logging setup.

Modules log through ``logging.getLogger(__name__)``; the CLI calls
``setup_logging`` once to render records on the console with rich.
The classification engine does not log.
"""

import logging
from typing import Optional, Union

from rich.logging import RichHandler

from channel_screen.config import config

_HANDLER_NAME = "channel_screen.rich"


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    """
    Install a RichHandler on the root logger.

    Calling it again only updates the level.

    Args:
        level: Log level name or number (defaults to config.LOG_LEVEL)
    """
    if level is None:
        level = config.LOG_LEVEL
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s | %(message)s", datefmt="[%X]"))
    root.addHandler(handler)
