"""Tests for the per-site match policy."""
import pytest
from datetime import timedelta

from fetchq.services.matcher import MatchPolicy


class TestMatchPolicy:
    """Tests for MatchPolicy.evaluate."""

    @pytest.fixture
    def policy(self, make_rules):
        """Policy with every rule enabled."""
        rules = make_rules(
            patterns=(r"dir\d",),
            filters=("^incomplete-",),
            max_age=timedelta(hours=24),
            skip_symlinks=True,
        )
        return MatchPolicy(rules)

    def test_symlink_rejected(self, policy, make_entry, now):
        """Test symlinks are skipped when configured."""
        entry = make_entry("/tmp/dir1", is_symlink=True)

        assert policy.evaluate(entry, now) == (False, "IsSymlink=true SkipSymlinks=true")

    def test_too_old_rejected(self, policy, make_entry, now):
        """Test entries older than MaxAge are rejected with both ages."""
        entry = make_entry("/tmp/dir2", created=now - timedelta(hours=48))

        assert policy.evaluate(entry, now) == (False, "Age=48h0m0s MaxAge=24h0m0s")

    def test_age_boundary(self, policy, make_entry, now):
        """Test age equal to MaxAge is accepted, one second more is not."""
        equal = make_entry("/tmp/dir3", created=now - timedelta(hours=24))
        older = make_entry("/tmp/dir3", created=now - timedelta(hours=24, seconds=1))

        assert policy.evaluate(equal, now) == (True, r"Match=dir\d")
        assert policy.evaluate(older, now)[0] is False

    def test_include_match(self, policy, make_entry, now):
        """Test reason cites the matching include pattern."""
        assert policy.evaluate(make_entry("/tmp/dir4"), now) == (True, r"Match=dir\d")

    def test_no_match(self, policy, make_entry, now):
        """Test entries matching no include pattern."""
        assert policy.evaluate(make_entry("/tmp/foo"), now) == (False, "no match")

    def test_exclude_overrides_include(self, make_rules, make_entry, now):
        """Test exclude wins over an include match."""
        policy = MatchPolicy(make_rules(patterns=(r"dir\d",), filters=("^incomplete-",)))

        transfer, reason = policy.evaluate(make_entry("/tmp/incomplete-dir3"), now)

        assert transfer is False
        assert reason == "Filter=^incomplete-"

    def test_patterns_match_anywhere(self, make_rules, make_entry, now):
        """Test patterns match anywhere in the name unless anchored."""
        policy = MatchPolicy(make_rules(patterns=("Wire",), filters=("^Wire",)))

        assert policy.evaluate(make_entry("/tmp/The.Wire.S01E01"), now) == (True, "Match=Wire")
        assert policy.evaluate(make_entry("/tmp/Wire.S01E01"), now) == (False, "Filter=^Wire")

    def test_empty_include_accepts(self, make_rules, make_entry, now):
        """Test no include patterns means everything not excluded is accepted."""
        policy = MatchPolicy(make_rules(filters=("^skip",)))

        assert policy.evaluate(make_entry("/tmp/foo"), now) == (True, "Match=*")
        assert policy.evaluate(make_entry("/tmp/skip.me"), now) == (False, "Filter=^skip")

    def test_no_max_age(self, make_rules, make_entry, now):
        """Test unset MaxAge accepts any age."""
        policy = MatchPolicy(make_rules(patterns=("foo",)))
        entry = make_entry("/tmp/foo", created=now - timedelta(days=3650))

        assert policy.evaluate(entry, now)[0] is True
