"""Logging package with Rich-based reporting."""

from .rich_logger import QuietProgressReporter, RichProgressReporter, configure_logging

__all__ = ["QuietProgressReporter", "RichProgressReporter", "configure_logging"]
