"""Service layer - selection pipeline and transfer tool glue."""
from .listing import parse_listing, parse_listing_line
from .matcher import MatchPolicy
from .resolver import MetadataResolver
from .deduplicator import DuplicateResolver, weight
from .queue import PostCommand, Queue, is_dir_empty, list_dir
from .transfer import LftpClient

__all__ = [
    "parse_listing",
    "parse_listing_line",
    "MatchPolicy",
    "MetadataResolver",
    "DuplicateResolver",
    "weight",
    "PostCommand",
    "Queue",
    "is_dir_empty",
    "list_dir",
    "LftpClient",
]
