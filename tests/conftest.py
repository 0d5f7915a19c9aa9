"""Shared fixtures for selection pipeline tests."""
import re
from datetime import datetime, timezone

import pytest

from fetchq.core.config import MatchRuleSet, PathTemplate, TransferClientConfig
from fetchq.core.models import DirectoryEntry
from fetchq.engines.media_parser import create_media_parser


NOW = datetime(2016, 1, 2, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Fixed reference time."""
    return NOW


@pytest.fixture
def make_entry(now):
    """Factory for directory entries created at ``now`` unless given."""
    def _make(path: str, created: datetime | None = None, is_symlink: bool = False) -> DirectoryEntry:
        return DirectoryEntry(path=path, created=created or now, is_symlink=is_symlink)
    return _make


@pytest.fixture
def make_rules():
    """Factory for site rule sets with test defaults."""
    def _make(
        name: str = "siteA",
        local_dir: str = "/tmp/",
        parser: str = "default",
        patterns: tuple[str, ...] = (),
        filters: tuple[str, ...] = (),
        priorities: tuple[str, ...] = (),
        **kwargs,
    ) -> MatchRuleSet:
        kwargs.setdefault("client", TransferClientConfig(tool_path="/bin/lftp", get_command="mirror"))
        return MatchRuleSet(
            name=name,
            remote_dir=kwargs.pop("remote_dir", "/misc"),
            local_path_template=PathTemplate.compile(local_dir),
            media_parser=create_media_parser(parser),
            include_patterns=tuple(re.compile(p) for p in patterns),
            exclude_patterns=tuple(re.compile(p) for p in filters),
            priority_patterns=tuple(re.compile(p) for p in priorities),
            **kwargs,
        )
    return _make
