"""Domain models for listing entries, media metadata and queue items."""
from __future__ import annotations

import os
import posixpath
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class MediaKind(Enum):
    """Which naming convention a release was parsed with."""
    SHOW = "show"
    MOVIE = "movie"
    DEFAULT = "default"


@dataclass(frozen=True, slots=True)
class DirectoryEntry:
    """One remote directory as reported by the listing."""
    path: str
    created: datetime
    is_symlink: bool = False

    @property
    def name(self) -> str:
        """Base name of the remote path."""
        return posixpath.basename(self.path.rstrip("/")) or self.path


@dataclass(frozen=True, slots=True)
class MediaInfo:
    """Fields extracted from a release name."""
    kind: MediaKind = MediaKind.DEFAULT
    release: str = ""
    name: str = ""
    season: Optional[int] = None
    episode: Optional[int] = None
    year: Optional[int] = None

    def is_empty(self) -> bool:
        return not (
            self.release
            or self.name
            or self.season is not None
            or self.episode is not None
            or self.year is not None
        )

    def identity(self) -> Optional[tuple]:
        """Key used to group copies of the same media.

        Returns None for the default variant, which has no natural key.
        """
        match self.kind:
            case MediaKind.SHOW:
                return (self.kind, self.name.casefold(), self.season, self.episode)
            case MediaKind.MOVIE:
                return (self.kind, self.name.casefold(), self.year)
            case _:
                return None

    def as_context(self) -> dict[str, Any]:
        """Template substitution context for this variant."""
        context: dict[str, Any] = {"Release": self.release}
        if self.kind == MediaKind.SHOW:
            context.update(Name=self.name, Season=self.season, Episode=self.episode)
        elif self.kind == MediaKind.MOVIE:
            context.update(Name=self.name, Year=self.year)
        return context

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "release": self.release,
            "name": self.name,
            "season": self.season,
            "episode": self.episode,
            "year": self.year,
        }


@dataclass(slots=True)
class Item:
    """Decision record for one directory entry.

    ``reason`` always explains the current value of ``transfer``.
    """
    entry: DirectoryEntry
    transfer: bool = False
    reason: str = "no match"
    local_dir: str = ""
    media: MediaInfo = field(default_factory=MediaInfo)
    merged: bool = False

    @property
    def path(self) -> str:
        return self.entry.path

    def accept(self, reason: str) -> None:
        self.transfer = True
        self.reason = reason

    def reject(self, reason: str) -> None:
        self.transfer = False
        self.reason = reason

    def dst_dir(self) -> str:
        """Local destination of the transfer.

        A trailing separator on ``local_dir`` means the remote directory is
        placed inside it, otherwise ``local_dir`` is the destination itself.
        """
        if self.local_dir.endswith(os.sep):
            return os.path.join(self.local_dir, self.entry.name)
        return self.local_dir

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.entry.path,
            "created": self.entry.created.isoformat(),
            "is_symlink": self.entry.is_symlink,
            "local_dir": self.local_dir,
            "dst_dir": self.dst_dir(),
            "transfer": self.transfer,
            "reason": self.reason,
            "merged": self.merged,
            "media": self.media.to_dict(),
        }

    def __str__(self) -> str:
        return (
            f"Path={self.path!r} LocalDir={self.local_dir!r} "
            f"Transfer={str(self.transfer).lower()} Reason={self.reason!r}"
        )


@dataclass(frozen=True, slots=True)
class DuplicateGroup:
    """Items sharing one media identity and the member that was kept."""
    identity: tuple
    kept: Item
    dropped: tuple[Item, ...]

    @property
    def count(self) -> int:
        return len(self.dropped) + 1
