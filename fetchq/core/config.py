"""Per-site rule sets built once from the loaded configuration."""
from __future__ import annotations

import re
import string
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from .errors import TemplateError
from .models import MediaInfo
from .protocols import MediaNameParser


@dataclass(frozen=True, slots=True)
class TransferClientConfig:
    """Location of the transfer tool and the command used to fetch a directory."""
    tool_path: str = "lftp"
    get_command: str = "mirror"


@dataclass(frozen=True, slots=True)
class Replacement:
    """Regex substitution applied to parsed media names."""
    pattern: re.Pattern
    replacement: str

    def apply(self, value: str) -> str:
        return self.pattern.sub(self.replacement, value)


@dataclass(frozen=True, slots=True)
class PathTemplate:
    """Local path template in ``str.format`` syntax.

    Fields are taken from ``MediaInfo.as_context()``, e.g.
    ``/media/{Name}/S{Season:02}/``.
    """
    text: str
    fields: tuple[str, ...] = field(default=(), compare=False)

    @classmethod
    def compile(cls, text: str) -> "PathTemplate":
        """Validate template syntax. Raises TemplateError."""
        names: list[str] = []
        try:
            for _, field_name, _, _ in string.Formatter().parse(text):
                if field_name is None:
                    continue
                if not field_name or field_name.isdigit():
                    raise TemplateError(
                        f"template {text!r}: positional fields are not supported"
                    )
                names.append(field_name)
        except ValueError as e:
            raise TemplateError(f"template {text!r}: {e}") from e
        return cls(text=text, fields=tuple(names))

    def render(self, media: MediaInfo) -> str:
        """Render the template for one release. Raises TemplateError."""
        try:
            return self.text.format_map(media.as_context())
        except KeyError as e:
            raise TemplateError(
                f"template {self.text!r}: unknown field {e.args[0]!r} "
                f"for {media.kind.value} release"
            ) from e
        except (AttributeError, IndexError, TypeError, ValueError) as e:
            raise TemplateError(f"template {self.text!r}: {e}") from e


@dataclass(frozen=True, slots=True)
class MatchRuleSet:
    """Immutable rules for one site.

    This is the only per-site object passed through the pipeline.
    """
    name: str
    remote_dir: str
    local_path_template: PathTemplate
    media_parser: MediaNameParser
    max_age: Optional[timedelta] = None
    include_patterns: tuple[re.Pattern, ...] = ()
    exclude_patterns: tuple[re.Pattern, ...] = ()
    priority_patterns: tuple[re.Pattern, ...] = ()
    skip_symlinks: bool = False
    deduplicate: bool = False
    skip_existing: bool = False
    post_command: Optional[str] = None
    replacements: tuple[Replacement, ...] = ()
    client: TransferClientConfig = field(default_factory=TransferClientConfig)

    def __post_init__(self) -> None:
        """Validate rule set."""
        if not self.name:
            raise ValueError("Site name is required")
        if self.max_age is not None and self.max_age < timedelta(0):
            raise ValueError("MaxAge must not be negative")
