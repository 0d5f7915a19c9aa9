"""Duplicate resolution service."""
from __future__ import annotations

import logging
import re

from ..core.models import DuplicateGroup, Item

logger = logging.getLogger(__name__)


def weight(item: Item, priority_patterns: tuple[re.Pattern, ...]) -> int:
    """Priority score of an item.

    The first pattern occurring anywhere in the entry name scores
    ``len(priority_patterns) - index``. No match scores 0.
    """
    for i, pattern in enumerate(priority_patterns):
        if pattern.search(item.entry.name):
            return len(priority_patterns) - i
    return 0


class DuplicateResolver:
    """Handles duplicate detection and resolution.

    Groups transferable items by media identity and keeps only the
    highest-weighted one per group.
    """

    def __init__(self, priority_patterns: tuple[re.Pattern, ...] = ()):
        """Initialize with priority patterns.

        Args:
            priority_patterns: Patterns ordered from most to least preferred.
        """
        self._priorities = priority_patterns

    def weight(self, item: Item) -> int:
        return weight(item, self._priorities)

    def group_by_identity(self, items: list[Item]) -> dict[tuple, list[Item]]:
        """Group transferable items by media identity.

        Items without an identity (default parser) are never grouped.
        Group members keep their original order.
        """
        groups: dict[tuple, list[Item]] = {}

        for item in items:
            if not item.transfer:
                continue
            key = item.media.identity()
            if key is None:
                continue
            groups.setdefault(key, []).append(item)

        return groups

    def resolve(self, identity: tuple, members: list[Item]) -> DuplicateGroup:
        """Keep the best member of a group and reject the rest.

        Args:
            identity: Media identity shared by members.
            members: Items in original order, at least two.

        Returns:
            DuplicateGroup describing the decision.
        """
        weights = [self.weight(m) for m in members]
        # max() returns the first of equal maxima
        best_index = max(range(len(members)), key=lambda i: weights[i])
        kept = members[best_index]
        dst = kept.dst_dir()

        dropped = []
        for i, member in enumerate(members):
            if i == best_index:
                continue
            member.reject(f"DuplicateOf={kept.path} Weight={weights[best_index]}")
            member.merged = True
            member.local_dir = dst
            dropped.append(member)
            logger.debug("%s: duplicate of %s (weight %d < %d)",
                         member.path, kept.path, weights[i], weights[best_index])

        return DuplicateGroup(identity=identity, kept=kept, dropped=tuple(dropped))

    def deduplicate(self, items: list[Item]) -> list[DuplicateGroup]:
        """Resolve every group of duplicates among items.

        Returns:
            One DuplicateGroup per identity that had more than one member.
        """
        return [
            self.resolve(key, members)
            for key, members in self.group_by_identity(items).items()
            if len(members) > 1
        ]
