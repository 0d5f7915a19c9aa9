"""Tests for core models."""
import pytest

from fetchq.core.config import MatchRuleSet, PathTemplate
from fetchq.core.errors import TemplateError
from fetchq.core.models import DirectoryEntry, Item, MediaInfo, MediaKind
from fetchq.engines.media_parser import DefaultParser


class TestItem:
    """Tests for Item."""

    def test_defaults(self, make_entry):
        item = Item(entry=make_entry("/foo/bar"))

        assert item.transfer is False
        assert item.reason == "no match"
        assert item.merged is False

    def test_accept(self, make_entry):
        item = Item(entry=make_entry("/foo/bar"))
        item.accept("foo")

        assert item.transfer is True
        assert item.reason == "foo"

    def test_reject(self, make_entry):
        item = Item(entry=make_entry("/foo/bar"), transfer=True)
        item.reject("bar")

        assert item.transfer is False
        assert item.reason == "bar"

    @pytest.mark.parametrize("local_dir,expected", [
        ("/tmp/", "/tmp/bar"),
        ("/tmp/foo/bar", "/tmp/foo/bar"),
    ])
    def test_dst_dir(self, make_entry, local_dir, expected):
        """Test trailing separator places the entry inside local_dir."""
        item = Item(entry=make_entry("/foo/bar"), local_dir=local_dir)

        assert item.dst_dir() == expected

    def test_to_dict(self, make_entry):
        item = Item(entry=make_entry("/foo/bar"), local_dir="/tmp/")
        item.accept("Match=*")

        data = item.to_dict()

        assert data["path"] == "/foo/bar"
        assert data["dst_dir"] == "/tmp/bar"
        assert data["transfer"] is True
        assert data["media"]["kind"] == "default"

    def test_str(self, make_entry):
        item = Item(entry=make_entry("/foo/bar"))

        assert str(item) == "Path='/foo/bar' LocalDir='' Transfer=false Reason='no match'"


class TestDirectoryEntry:
    """Tests for DirectoryEntry."""

    def test_name(self, now):
        assert DirectoryEntry(path="/misc/The.Wire.S01E01", created=now).name == "The.Wire.S01E01"


class TestMediaInfo:
    """Tests for MediaInfo."""

    def test_empty(self):
        assert MediaInfo().is_empty()
        assert not MediaInfo(release="x").is_empty()

    def test_show_identity(self):
        """Test show identity ignores case of the name."""
        a = MediaInfo(kind=MediaKind.SHOW, name="The.Wire", season=1, episode=2)
        b = MediaInfo(kind=MediaKind.SHOW, name="the.wire", season=1, episode=2)

        assert a.identity() == b.identity()

    def test_movie_context(self):
        media = MediaInfo(kind=MediaKind.MOVIE, release="r", name="n", year=1979)

        assert media.as_context() == {"Release": "r", "Name": "n", "Year": 1979}


class TestPathTemplate:
    """Tests for PathTemplate."""

    def test_fields(self):
        assert PathTemplate.compile("/tmp/{Name}/S{Season:02}/").fields == ("Name", "Season")

    def test_render(self):
        media = MediaInfo(kind=MediaKind.SHOW, name="The.Wire", season=3, episode=1)

        assert PathTemplate.compile("/tmp/{Name}/S{Season:02}/").render(media) == "/tmp/The.Wire/S03/"

    @pytest.mark.parametrize("text", ["/tmp/{Name", "/tmp/{0}/", "/tmp/{}/"])
    def test_invalid(self, text):
        with pytest.raises(TemplateError):
            PathTemplate.compile(text)

    def test_bad_format_spec(self):
        """Test format errors at render time raise TemplateError."""
        media = MediaInfo(kind=MediaKind.SHOW, name="x", season=None, episode=1)

        with pytest.raises(TemplateError):
            PathTemplate.compile("/tmp/S{Season:02}/").render(media)


class TestMatchRuleSet:
    """Tests for MatchRuleSet validation."""

    def test_name_required(self):
        with pytest.raises(ValueError, match="name"):
            MatchRuleSet(
                name="",
                remote_dir="/",
                local_path_template=PathTemplate.compile("/tmp/"),
                media_parser=DefaultParser(),
            )
