"""Media name parser implementations.

Show: Name.S01E02.Tags-GROUP or Name.1x02.Tags
Movie: Name.2001.Tags-GROUP
Default: keeps the release name only

Season, episode and year detection is done by guessit. The name is kept as
it appears in the release, e.g. ``The.Wire`` rather than guessit's
normalized ``The Wire``, so that local paths mirror the remote naming.
"""
from __future__ import annotations

import re
from typing import Any, Optional

from guessit import guessit

from ..core.errors import MediaParseError
from ..core.models import MediaInfo, MediaKind

SEPARATORS = r"[\W_]+"


def _first(value: Any) -> Any:
    # guessit returns lists for multi-episode releases
    if isinstance(value, list):
        return value[0] if value else None
    return value


def _raw_title(release: str, title: Optional[str]) -> str:
    """Return the prefix of release spelling out title with its original separators."""
    if not title:
        return ""
    words = [w for w in re.split(SEPARATORS, title) if w]
    if not words:
        return ""
    pattern = "^" + SEPARATORS.join(re.escape(w) for w in words)
    match = re.match(pattern, release, re.IGNORECASE)
    if not match:
        return ""
    return match.group(0)


class ShowParser:
    """Parses episode releases into name, season and episode."""

    @property
    def name(self) -> str:
        return MediaKind.SHOW.value

    def parse(self, name: str) -> MediaInfo:
        guess = guessit(name, {"type": "episode"})
        season = _first(guess.get("season"))
        episode = _first(guess.get("episode"))
        show = _raw_title(name, guess.get("title"))
        if season is None or episode is None or not show:
            raise MediaParseError(f"failed to parse show: {name}")
        return MediaInfo(
            kind=MediaKind.SHOW,
            release=name,
            name=show,
            season=int(season),
            episode=int(episode),
        )


class MovieParser:
    """Parses movie releases into name and year."""

    @property
    def name(self) -> str:
        return MediaKind.MOVIE.value

    def parse(self, name: str) -> MediaInfo:
        guess = guessit(name, {"type": "movie"})
        year = _first(guess.get("year"))
        title = _raw_title(name, guess.get("title"))
        if year is None or not title:
            raise MediaParseError(f"failed to parse movie: {name}")
        return MediaInfo(
            kind=MediaKind.MOVIE,
            release=name,
            name=title,
            year=int(year),
        )


class DefaultParser:
    """Accepts any name and keeps it as the release."""

    @property
    def name(self) -> str:
        return MediaKind.DEFAULT.value

    def parse(self, name: str) -> MediaInfo:
        return MediaInfo(kind=MediaKind.DEFAULT, release=name)


PARSERS = {
    MediaKind.SHOW: ShowParser,
    MediaKind.MOVIE: MovieParser,
    MediaKind.DEFAULT: DefaultParser,
}


def create_media_parser(kind: MediaKind | str = MediaKind.DEFAULT) -> ShowParser | MovieParser | DefaultParser:
    """Factory function to create the parser for a site.

    Args:
        kind: Parser variant, either a MediaKind or its config name.

    Returns:
        A MediaNameParser implementation.
    """
    if isinstance(kind, str):
        try:
            kind = MediaKind(kind.strip().lower() or MediaKind.DEFAULT.value)
        except ValueError:
            raise ValueError(
                f"invalid parser: {kind!r} (expected one of: show, movie, default)"
            ) from None
    return PARSERS[kind]()
