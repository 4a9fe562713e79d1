"""
quote_processor/cli/logging_setup.py

Configures worker CLI logging so:
- Diagnostics go to stderr via logging.
- quiet suppresses stderr chatter (ERROR only).
- trace enables DEBUG (including raw message bodies).
"""

from __future__ import annotations

import logging
import sys


def setup_cli_logging(*, trace: bool = False, quiet: bool = False) -> None:
    """
    Configure logging for worker runs.

    - quiet=True: only ERROR logs to stderr
    - trace=True: DEBUG logs to stderr
    - default: INFO logs to stderr
    """
    if quiet:
        level = logging.ERROR
    elif trace:
        level = logging.DEBUG
    else:
        level = logging.INFO

    root = logging.getLogger()

    # Remove existing handlers to avoid duplicate logs in pytest runs
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))

    root.addHandler(handler)
    root.setLevel(level)

    # The redis client is chatty at DEBUG; keep it quiet unless tracing.
    if not trace:
        logging.getLogger("redis").setLevel(logging.WARNING)
