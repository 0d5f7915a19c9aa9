"""Protocol definitions (interfaces) for dependency injection."""
from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, Optional

from .models import DirectoryEntry, Item, MediaInfo


class MediaNameParser(Protocol):
    """Interface for extracting media fields from a release name.

    Implementations:
    - ShowParser: Name.S01E02 style episode releases
    - MovieParser: Name.2001 style movie releases
    - DefaultParser: keeps only the raw release name
    """

    @abstractmethod
    def parse(self, name: str) -> MediaInfo:
        """Parse a release name. Raises MediaParseError if it does not fit."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Parser name as used in config."""
        ...


class TransferClient(Protocol):
    """Interface for the external transfer tool."""

    @abstractmethod
    def list_dirs(self, site: str, remote_dir: str) -> list[DirectoryEntry]:
        """Fetch and parse the remote directory listing."""
        ...

    @abstractmethod
    def run_script(self, script: str) -> None:
        """Execute a generated transfer script. Raises ProcessError on failure."""
        ...


class ProgressReporter(Protocol):
    """Interface for user-facing output."""

    @abstractmethod
    def info(self, message: str) -> None:
        """Log an info message."""
        ...

    @abstractmethod
    def success(self, message: str) -> None:
        """Log a success message."""
        ...

    @abstractmethod
    def warning(self, message: str) -> None:
        """Log a warning message."""
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        """Log an error message."""
        ...

    @abstractmethod
    def debug(self, message: str) -> None:
        """Log a debug message."""
        ...

    @abstractmethod
    def print_header(self, title: str) -> None:
        """Print a section header."""
        ...

    @abstractmethod
    def print_config(self, config_items: dict) -> None:
        """Print settings as key/value pairs."""
        ...

    @abstractmethod
    def print_queue(self, site: str, items: list[Item], title: Optional[str] = None) -> None:
        """Print every item of a queue with its decision."""
        ...
