"""Debug log file for platecheck.

Rich owns the terminal; everything logged under the ``platecheck``
namespace goes to ``debug.log`` in the user config directory instead.
"""

import logging
from pathlib import Path
from typing import Optional

import platformdirs

LOG_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_FILENAME = "debug.log"

# Request-level chatter from the HTTP stack drowns out source decisions
QUIET_LOGGERS = ("httpx", "httpcore")


def _file_handler() -> Optional[logging.Handler]:
    try:
        log_dir = Path(platformdirs.user_config_dir("platecheck", ensure_exists=True))
        handler = logging.FileHandler(log_dir / LOG_FILENAME, encoding="utf-8")
    except OSError:
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def setup_logging() -> None:
    """Attach the debug file handler once; later calls are no-ops."""
    logger = logging.getLogger("platecheck")
    if logger.handlers:
        return
    logger.setLevel(logging.DEBUG)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    handler = _file_handler()
    if handler is None:
        # Read-only home or sandbox
        logger.addHandler(logging.NullHandler())
        return

    logger.addHandler(handler)
    logger.debug("Debug log at %s", handler.baseFilename)
