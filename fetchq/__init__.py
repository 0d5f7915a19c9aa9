"""Select remote directories and queue them for transfer with lftp."""

__version__ = "1.0.0"

# Core exports
from .core.config import MatchRuleSet, PathTemplate, TransferClientConfig
from .core.models import DirectoryEntry, Item, MediaInfo, MediaKind
from .core.errors import (
    ConfigError,
    FetchqError,
    ListingParseError,
    MediaParseError,
    ProcessError,
    TemplateError,
)

# Engine exports
from .engines.media_parser import create_media_parser

# Service exports
from .services.listing import parse_listing, parse_listing_line
from .services.queue import Queue
from .services.transfer import LftpClient

# Config exports
from .config import AppConfig, SiteConfig, load_config

__all__ = [
    # Core
    "MatchRuleSet",
    "PathTemplate",
    "TransferClientConfig",
    "DirectoryEntry",
    "Item",
    "MediaInfo",
    "MediaKind",
    "ConfigError",
    "FetchqError",
    "ListingParseError",
    "MediaParseError",
    "ProcessError",
    "TemplateError",
    # Engines
    "create_media_parser",
    # Services
    "parse_listing",
    "parse_listing_line",
    "Queue",
    "LftpClient",
    # Config
    "AppConfig",
    "SiteConfig",
    "load_config",
]
