"""Transfer queue for one site: builds items and renders the lftp script."""
from __future__ import annotations

import json
import logging
import os
import shlex
import subprocess
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterable, Optional

from ..core.config import MatchRuleSet
from ..core.errors import MediaParseError, ProcessError
from ..core.models import DirectoryEntry, DuplicateGroup, Item
from .deduplicator import DuplicateResolver
from .matcher import MatchPolicy
from .resolver import MetadataResolver

logger = logging.getLogger(__name__)


def is_dir_empty(path: str) -> bool:
    """True if path is missing, not a directory, or has no entries."""
    try:
        with os.scandir(path) as it:
            return next(it, None) is None
    except OSError:
        return True


def list_dir(path: str) -> list[str]:
    """Sorted names in path, or an empty list if it cannot be read."""
    try:
        return sorted(os.listdir(path))
    except OSError:
        return []


@dataclass(frozen=True, slots=True)
class PostCommand:
    """Prepared post command: argument vector and stdin payload."""
    args: tuple[str, ...]
    stdin: bytes

    def run(self) -> None:
        """Run the command. Raises ProcessError on failure."""
        logger.debug("Running post command: %s", shlex.join(self.args))
        try:
            result = subprocess.run(self.args, input=self.stdin, capture_output=True)
        except OSError as e:
            raise ProcessError(f"post command {self.args[0]!r} failed to start: {e}") from e
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace").strip()
            raise ProcessError(
                f"post command {shlex.join(self.args)!r} exited with status {result.returncode}",
                returncode=result.returncode,
                stderr=stderr,
            )


@dataclass
class Queue:
    """Ordered items of one site.

    Items are sorted by remote path. After ``build`` the queue is only read.
    """
    rules: MatchRuleSet
    items: list[Item] = field(default_factory=list)
    duplicates: list[DuplicateGroup] = field(default_factory=list)
    local: list[Item] = field(default_factory=list)

    @classmethod
    def build(
        cls,
        rules: MatchRuleSet,
        entries: Iterable[DirectoryEntry],
        now: Optional[datetime] = None,
        dir_is_empty: Callable[[str], bool] = is_dir_empty,
        read_dir: Callable[[str], list[str]] = list_dir,
    ) -> "Queue":
        """Run the selection pipeline over a listing.

        Args:
            rules: Site rules.
            entries: Parsed listing entries, in any order.
            now: Reference time for the age rule.
            dir_is_empty: Check used to skip non-empty destinations when
                the site has ``skip_existing`` set.
            read_dir: Lists local directories when looking for copies
                fetched by earlier runs. Only used with ``deduplicate``.

        Returns:
            The built queue.
        """
        policy = MatchPolicy(rules)
        resolver = MetadataResolver(rules)

        items = []
        for entry in sorted(entries, key=lambda e: e.path):
            item = Item(entry=entry)
            transfer, reason = policy.evaluate(entry, now)
            if transfer:
                item.accept(reason)
            else:
                item.reject(reason)
            resolver.resolve(item)
            logger.debug("%s", item)
            items.append(item)

        queue = cls(rules=rules, items=items)
        if rules.deduplicate:
            queue.deduplicate(read_dir, now)
        if rules.skip_existing:
            queue.reject_existing(dir_is_empty)
        return queue

    def local_duplicates(
        self,
        item: Item,
        read_dir: Callable[[str], list[str]] = list_dir,
        now: Optional[datetime] = None,
    ) -> list[Item]:
        """Releases already present locally that share item's media identity.

        Reads the directory item would be placed in. Every release there
        with the same identity, other than item's own, is returned as a
        merged, transferable item whose path and local_dir both point at the
        local copy.
        """
        identity = item.media.identity()
        if identity is None or not item.local_dir:
            return []

        parent = os.path.dirname(item.dst_dir())
        resolver = MetadataResolver(self.rules)
        created = now or datetime.now(timezone.utc)

        found = []
        for name in read_dir(parent):
            if name == item.entry.name:
                continue
            try:
                media = resolver.parse_media(name)
            except MediaParseError:
                continue
            if media.identity() != identity:
                continue
            path = os.path.join(parent, name)
            found.append(Item(
                entry=DirectoryEntry(path=path, created=created),
                transfer=True,
                reason="IsLocal=true",
                local_dir=path,
                media=media,
                merged=True,
            ))
        return found

    def deduplicate(
        self,
        read_dir: Callable[[str], list[str]] = list_dir,
        now: Optional[datetime] = None,
    ) -> None:
        """Keep the best copy of each release, counting local copies too.

        Local copies go first so that on equal weight nothing is fetched.
        A local copy that wins stays out of the script. One that loses is
        left merged with a DuplicateOf reason naming the better remote copy.
        """
        local: dict[str, Item] = {}
        for item in self.transferable():
            for dup in self.local_duplicates(item, read_dir, now):
                local.setdefault(dup.path, dup)
        self.local = list(local.values())

        resolver = DuplicateResolver(self.rules.priority_patterns)
        self.duplicates = resolver.deduplicate(self.local + self.items)

        for dup in self.local:
            if dup.transfer:
                dup.reject("IsLocal=true")

    def reject_existing(self, dir_is_empty: Callable[[str], bool] = is_dir_empty) -> None:
        """Reject transferable items whose destination already has content."""
        for item in self.transferable():
            dst = item.dst_dir()
            if not dir_is_empty(dst):
                item.reject(f"DstDir={dst} exists and is not empty")

    def transferable(self) -> list[Item]:
        return [item for item in self.items if item.transfer]

    def script(self) -> str:
        """Render the lftp script for the transferable items."""
        get_cmd = self.rules.client.get_command
        lines = [f"open {self.rules.name}"]
        for item in self.transferable():
            lines.append(f"queue {get_cmd} {item.path} {item.dst_dir()}")
        lines.extend(["queue start", "wait", "exit"])
        return "\n".join(lines) + "\n"

    def to_json(self) -> str:
        """JSON list of remote items followed by local copies found by deduplicate."""
        return json.dumps([item.to_dict() for item in self.items + self.local], indent=2)

    def post_command(self) -> Optional[PostCommand]:
        """Prepare the configured post command, or None if unset."""
        if not self.rules.post_command:
            return None
        args = shlex.split(self.rules.post_command)
        if not args:
            return None
        return PostCommand(args=tuple(args), stdin=self.to_json().encode("utf-8"))

    def run_post_command(self) -> None:
        """Run the post command if configured. Raises ProcessError."""
        cmd = self.post_command()
        if cmd is not None:
            cmd.run()
