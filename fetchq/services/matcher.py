"""Per-site accept/reject decisions for listing entries."""
from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import Optional

from ..core.config import MatchRuleSet
from ..core.models import DirectoryEntry
from ..date_utils import format_duration

logger = logging.getLogger(__name__)

NO_MATCH = "no match"


def first_match(patterns: tuple[re.Pattern, ...], name: str) -> Optional[re.Pattern]:
    """Return the first pattern occurring anywhere in name."""
    for pattern in patterns:
        if pattern.search(name):
            return pattern
    return None


class MatchPolicy:
    """Evaluates the site rules for one entry at a time.

    Rules run in a fixed order and the first one that decides wins:
    symlink, age, include, exclude.
    """

    def __init__(self, rules: MatchRuleSet):
        """Initialize with the site rules.

        Args:
            rules: Rule set of the site being evaluated.
        """
        self._rules = rules

    def evaluate(self, entry: DirectoryEntry, now: Optional[datetime] = None) -> tuple[bool, str]:
        """Decide whether entry should be transferred.

        Args:
            entry: Entry to evaluate.
            now: Reference time for the age rule. Defaults to current UTC time.

        Returns:
            (transfer, reason)
        """
        rules = self._rules
        now = now or datetime.now(timezone.utc)

        if rules.skip_symlinks and entry.is_symlink:
            return False, "IsSymlink=true SkipSymlinks=true"

        if rules.max_age is not None:
            age = now - entry.created
            if age > rules.max_age:
                return False, f"Age={format_duration(age)} MaxAge={format_duration(rules.max_age)}"

        reason = "Match=*"
        if rules.include_patterns:
            include = first_match(rules.include_patterns, entry.name)
            if include is None:
                return False, NO_MATCH
            reason = f"Match={include.pattern}"

        exclude = first_match(rules.exclude_patterns, entry.name)
        if exclude is not None:
            return False, f"Filter={exclude.pattern}"

        return True, reason
