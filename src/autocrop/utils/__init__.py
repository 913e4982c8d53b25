"""Autocrop utility modules."""

from .logging_utils import (
    setup_logging, get_logger, log_processing_stats, BatchStats,
    ProcessingProgress, log_system_info, AutocropFormatter
)

__all__ = [
    'setup_logging', 'get_logger', 'log_processing_stats', 'BatchStats',
    'ProcessingProgress', 'log_system_info', 'AutocropFormatter'
]
