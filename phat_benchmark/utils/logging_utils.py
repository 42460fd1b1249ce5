from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from time import perf_counter

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape


# Standard output carries only result lines, so everything rich renders goes
# to standard error.
console = Console(stderr=True)

LOGGER_NAME = "phat_benchmark"
LOGGER = logging.getLogger(LOGGER_NAME)


def init_logger(level: int = logging.INFO, log_file: Path | None = None) -> logging.Logger:
    """
    Initialize the project logger with:
    - Rich console output on stderr
    - File logging into the run folder, when one is given

    Safe to call more than once: the console handler is attached once, and
    any previous log file is detached.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False  # prevent double logs

    # ------------------------------------------------------------
    # 1. Rich console handler
    # ------------------------------------------------------------
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        rich_handler = RichHandler(
            console=console,
            markup=True,
            rich_tracebacks=True,
            show_time=True,
            show_level=True,
            show_path=False,
        )
        logger.addHandler(rich_handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    # ------------------------------------------------------------
    # 2. File logging
    # ------------------------------------------------------------
    for handler in [h for h in logger.handlers if isinstance(h, logging.FileHandler)]:
        logger.removeHandler(handler)
        handler.close()

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] [%(levelname)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)
        logger.debug(f"Log file: [cyan]{escape(str(log_file))}[/cyan]")

    return logger


def print_banner(text: str) -> None:
    """
    Print a banner on stderr to mark sweep phases.
    """
    console.rule(f"[bold cyan]{text}[/bold cyan]")


@contextmanager
def timed_section(name: str):
    """
    Measure execution time of a code section and log it.
    Usage:
        with timed_section("Writing summary"):
            write_summary()
    """
    LOGGER.info(f"[bold green]Starting:[/bold green] {name}")
    start = perf_counter()
    yield
    elapsed = perf_counter() - start
    LOGGER.info(
        f"[bold green]Finished:[/bold green] {name} "
        f"in [cyan]{elapsed:.3f}[/cyan] seconds"
    )
