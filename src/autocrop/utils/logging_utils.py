"""
Logging setup and batch reporting for autocrop.

Console output goes through rich when available in the configuration,
otherwise through a plain stream handler. Batch runs report their counts
through :class:`BatchStats` and show a rich progress bar.
"""

import logging
import platform
import sys
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Generator, Optional, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn

console = Console()

LOG_FORMATS = {
    "minimal": "%(asctime)s - %(levelname)s - %(message)s",
    "simple": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s - %(message)s",
}
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class AutocropFormatter(logging.Formatter):
    """Plain-text formatter for one of the ``LOG_FORMATS`` styles."""

    def __init__(self, style: str = "detailed"):
        if style not in LOG_FORMATS:
            raise ValueError(f"Unknown log format style: {style}")
        super().__init__(LOG_FORMATS[style], datefmt=DATE_FORMAT)
        self.style_name = style


def setup_logging(
    level: Union[str, int] = logging.INFO,
    log_file: Optional[Union[str, Path]] = None,
    use_rich: bool = True,
    format_style: str = "detailed"
) -> logging.Logger:
    """
    Configure the root logger, replacing any handlers it already has.

    Args:
        level: Console level, as a name or a logging constant
        log_file: Optional file that receives every record at DEBUG
        use_rich: Render console output with rich
        format_style: 'minimal', 'simple' or 'detailed'

    Returns:
        The root logger
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(min(level, logging.DEBUG) if log_file else level)

    root_logger.addHandler(_console_handler(level, use_rich, format_style))
    if log_file:
        root_logger.addHandler(_file_handler(Path(log_file)))

    return root_logger


def _console_handler(level: int, use_rich: bool, format_style: str) -> logging.Handler:
    if use_rich:
        handler: logging.Handler = RichHandler(
            console=console,
            show_path=format_style == "detailed",
            markup=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(AutocropFormatter(format_style))
    handler.setLevel(level)
    return handler


def _file_handler(path: Path) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(AutocropFormatter("detailed"))
    handler.setLevel(logging.DEBUG)
    return handler


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` (usually ``__name__``)."""
    return logging.getLogger(name)


@dataclass
class BatchStats:
    """Counts of a batch run; skipped files do not count as attempts."""

    operation: str
    processed: int = 0
    failed: int = 0
    skipped: int = 0
    started: float = field(default_factory=time.time)
    duration: Optional[float] = None

    @property
    def success_rate(self) -> float:
        attempted = self.processed + self.failed
        return self.processed / attempted if attempted else 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "files_processed": self.processed,
            "files_failed": self.failed,
            "files_skipped": self.skipped,
            "duration": self.duration,
            "success_rate": self.success_rate,
        }

    def summary(self) -> str:
        return (f"processed={self.processed}, skipped={self.skipped}, failed={self.failed}, "
                f"duration={self.duration or 0:.2f}s, success_rate={self.success_rate:.1%}")


@contextmanager
def log_processing_stats(
    operation: str,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO
) -> Generator[BatchStats, None, None]:
    """
    Time a batch operation and log its counts when it ends.

    Yields:
        :class:`BatchStats` the caller increments as files are handled
    """
    logger = logger or logging.getLogger()
    stats = BatchStats(operation)
    logger.log(level, f"Starting {operation}")

    try:
        yield stats
    except Exception as e:
        logger.error(f"Aborted {operation} after {time.time() - stats.started:.2f}s: {e}")
        raise
    finally:
        stats.duration = time.time() - stats.started

    logger.log(level, f"Completed {operation}: {stats.summary()}")


class ProcessingProgress:
    """Rich progress bar that also shows how many items failed."""

    def __init__(self, description: str, total: int):
        self.description = description
        self.total = total
        self.completed = 0
        self.failed = 0
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("{task.fields[failed]} failed"),
            console=console,
            transient=True,
        )
        self.task_id = None

    def __enter__(self) -> "ProcessingProgress":
        self.progress.start()
        self.task_id = self.progress.add_task(self.description, total=self.total, failed=0)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.progress.stop()

    def update(self, success: bool = True) -> None:
        """Mark one more item as done."""
        if success:
            self.completed += 1
        else:
            self.failed += 1
        if self.task_id is not None:
            self.progress.update(self.task_id, advance=1, failed=self.failed)


def log_system_info(logger: Optional[logging.Logger] = None) -> None:
    """Log interpreter and library versions."""
    import cv2
    import numpy as np
    import pydantic

    logger = logger or logging.getLogger()
    versions = {
        "Platform": platform.platform(),
        "Python": platform.python_version(),
        "OpenCV": cv2.__version__,
        "NumPy": np.__version__,
        "Pydantic": pydantic.VERSION,
    }
    for name, version in versions.items():
        logger.info(f"{name}: {version}")
