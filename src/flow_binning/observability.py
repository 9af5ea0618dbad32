"""
Logging setup for flow-binning runs.

The binning modules report per-sample progress (cells loaded, cells
dropped by cleaning, bins produced) through module-level loggers and never
attach handlers. The CLI calls setup_logging once per invocation so those
messages reach stderr, leaving stdout to the JSON, CSV or table output.

Usage:
    from flow_binning.observability import setup_logging

    setup_logging(verbose=True, log_file=Path("binning.log"))
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(
    verbose: bool = False,
    log_file: Path | None = None,
    use_rich: bool = True,
) -> None:
    """
    Route flow_binning log records to stderr and, optionally, a file.

    At INFO the console shows the cleaning and binning lines of each
    sample; verbose adds the DEBUG lines for file loading and bin passes.

    Args:
        verbose: Show DEBUG messages on the console (INFO otherwise)
        log_file: Optional file that receives every record at DEBUG level
        use_rich: Use rich formatting for console output
    """
    level = logging.DEBUG if verbose else logging.INFO

    handlers: list[logging.Handler] = []

    # Console handler
    if use_rich:
        # stderr keeps stdout free for command output
        console_handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            level=level,
            show_time=True,
            show_path=verbose,
            markup=False,
            rich_tracebacks=True,
        )
        # RichHandler renders time and level itself
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%H:%M:%S",
        ))
    handlers.append(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s"
        ))
        handlers.append(file_handler)

    # Configure root logger
    logging.basicConfig(
        level=logging.DEBUG,  # Capture everything, handlers filter
        handlers=handlers,
        force=True,
    )
