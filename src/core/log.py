"""Logging setup (stdlib logging rendered by rich).

Diagnostics go to stderr through `RichHandler`; operator-facing output
(menus, tables, progress) is printed by the CLI console instead.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_HANDLER_NAME = "paw-rich"


def configure_logging(level: str = "WARNING", *, console: Console | None = None) -> logging.Logger:
    """Install (or replace) the rich handler on the root logger."""

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(level.upper())

    # botocore never logs below INFO.
    logging.getLogger("botocore").setLevel(max(root.level, logging.INFO))
    return root
