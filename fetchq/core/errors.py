"""Error types raised by the selection pipeline."""
from __future__ import annotations


class FetchqError(RuntimeError):
    """Base error type."""


class ConfigError(FetchqError):
    """Config file missing, unreadable or invalid."""


class ListingParseError(FetchqError):
    """A directory listing line could not be parsed."""


class MediaParseError(FetchqError):
    """A release name does not fit the convention of the selected parser."""


class TemplateError(FetchqError):
    """A local path template is invalid or references unknown fields."""


class ProcessError(FetchqError):
    """The transfer tool or post command failed to start or exited non-zero."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
