"""Media metadata extraction and local path resolution."""
from __future__ import annotations

import logging
from dataclasses import replace

from ..core.config import MatchRuleSet
from ..core.errors import MediaParseError, TemplateError
from ..core.models import Item, MediaInfo

logger = logging.getLogger(__name__)


class MetadataResolver:
    """Fills in media fields and the local directory of items.

    Runs for rejected items too, so that duplicates can later be pointed at
    the destination of the copy that was kept.
    """

    def __init__(self, rules: MatchRuleSet):
        self._rules = rules

    def parse_media(self, name: str) -> MediaInfo:
        """Parse a release name and apply the site's name replacements."""
        media = self._rules.media_parser.parse(name)
        if media.name and self._rules.replacements:
            new_name = media.name
            for r in self._rules.replacements:
                new_name = r.apply(new_name)
            media = replace(media, name=new_name)
        return media

    def resolve(self, item: Item) -> None:
        """Set media and local_dir on item, rejecting it on failure."""
        try:
            item.media = self.parse_media(item.entry.name)
        except MediaParseError as e:
            logger.debug("%s: %s", item.path, e)
            item.reject(str(e))
            return

        try:
            item.local_dir = self._rules.local_path_template.render(item.media)
        except TemplateError as e:
            logger.debug("%s: %s", item.path, e)
            item.reject(str(e))
