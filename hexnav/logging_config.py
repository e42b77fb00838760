"""
Purpose: One-call logging setup for the server and dev scripts.
Dependencies: logging, sys, hexnav/config.py.
Ext Hooks: File handlers for long-running servers.
"""

import logging
import sys

from hexnav.config import LOG_LEVEL


def configure_logging(level=LOG_LEVEL):
    """
    Attach a stdout handler to the root logger unless one is already there.

    level may be a logging constant or a name like "DEBUG".
    """
    root = logging.getLogger()
    if root.handlers:
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(level)
