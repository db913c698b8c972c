from __future__ import annotations

import logging
import sys


def setup_logging(*, level: str | int = logging.INFO, error_log_file: str | None = None) -> None:
    """
    Configure root logging with:
    - Console handler on stderr at ``level``
    - Optional file handler that only receives ERROR and above

    Call this ONCE, at startup. Safe to call again (handlers are replaced).
    """
    root = logging.getLogger()
    root.setLevel(level)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if error_log_file:
        fh = logging.FileHandler(error_log_file, encoding="utf-8", delay=True)
        fh.setLevel(logging.ERROR)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    # SQL echo is noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.captureWarnings(True)
