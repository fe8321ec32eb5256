"""Logging configuration for the vlr.gg scraper.

Provides console logging plus an optional file log. Console shows INFO+
with concise timestamps; the log file captures DEBUG+ with full
timestamps and logger names, including every parser diagnostic.
"""

import logging
from datetime import datetime
from pathlib import Path


def setup_logging(
    log_dir: str | None = None, console_level: int = logging.INFO
) -> Path | None:
    """Configure logging with a console handler and an optional file handler.

    Attaches handlers to the root logger:

    * **Console** -- ``console_level`` (default INFO), short time format.
    * **File** -- DEBUG, full datetime with logger name. Only created
      when ``log_dir`` is given; the file is named ``run-<timestamp>.log``.

    Existing handlers on the root logger are cleared first so that calling
    this function multiple times (e.g. in tests) does not produce duplicate
    output.

    Args:
        log_dir: Directory for the log file, created if missing.
        console_level: Minimum level for console output.

    Returns:
        Path to the newly created log file, or None without ``log_dir``.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(console_level)
    console.setFormatter(
        logging.Formatter(
            "%(asctime)s %(levelname)-5s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    root.addHandler(console)

    log_file = None
    if log_dir is not None:
        directory = Path(log_dir)
        directory.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d-%H%M%S")
        log_file = directory / f"run-{timestamp}.log"

        file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-5s [%(name)s] %(message)s")
        )
        root.addHandler(file_handler)

    # Suppress noisy third-party loggers.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    return log_file
