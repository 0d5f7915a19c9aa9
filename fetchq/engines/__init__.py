"""Media name parsing engines."""
from .media_parser import DefaultParser, MovieParser, ShowParser, create_media_parser

__all__ = [
    "DefaultParser",
    "MovieParser",
    "ShowParser",
    "create_media_parser",
]
