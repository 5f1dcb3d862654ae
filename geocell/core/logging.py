from __future__ import annotations

import logging

from geocell.core.settings import Settings


_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings: Settings) -> None:
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    # Leave handlers installed by the host (uvicorn, pytest) alone.
    if not root.handlers:
        logging.basicConfig(format=_FORMAT)
    logging.getLogger("geocell").setLevel(level)
