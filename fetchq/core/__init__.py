"""Core domain models and protocols."""
from .protocols import (
    MediaNameParser,
    ProgressReporter,
    TransferClient,
)
from .models import (
    DirectoryEntry,
    DuplicateGroup,
    Item,
    MediaInfo,
    MediaKind,
)
from .config import MatchRuleSet, PathTemplate, Replacement, TransferClientConfig
from .errors import (
    ConfigError,
    FetchqError,
    ListingParseError,
    MediaParseError,
    ProcessError,
    TemplateError,
)

__all__ = [
    # Protocols
    "MediaNameParser",
    "ProgressReporter",
    "TransferClient",
    # Models
    "DirectoryEntry",
    "DuplicateGroup",
    "Item",
    "MediaInfo",
    "MediaKind",
    # Config
    "MatchRuleSet",
    "PathTemplate",
    "Replacement",
    "TransferClientConfig",
    # Errors
    "ConfigError",
    "FetchqError",
    "ListingParseError",
    "MediaParseError",
    "ProcessError",
    "TemplateError",
]
