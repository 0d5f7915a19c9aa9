from __future__ import annotations

import re
import shlex
from datetime import timedelta
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.config import MatchRuleSet, PathTemplate, Replacement, TransferClientConfig
from .core.errors import ConfigError, TemplateError
from .core.models import MediaKind
from .date_utils import parse_duration
from .engines.media_parser import create_media_parser

DEFAULT_CONFIG_PATH = Path("~/.fetchqrc")


def _check_patterns(values: List[str]) -> List[str]:
    for value in values:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid pattern {value!r}: {e}") from e
    return values


class _ConfigModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")


class ClientConfig(_ConfigModel):
    """Transfer tool settings."""
    path: str = Field(default="lftp", alias="Path", description="Path to the lftp binary")
    get_cmd: str = Field(default="mirror", alias="GetCmd", description="lftp command used to fetch a directory")

    def to_client(self) -> TransferClientConfig:
        return TransferClientConfig(tool_path=self.path, get_command=self.get_cmd)


class ReplacementConfig(_ConfigModel):
    """Regex substitution applied to parsed media names."""
    pattern: str = Field(..., alias="Pattern")
    replacement: str = Field(..., alias="Replacement")

    @field_validator("pattern")
    @classmethod
    def check_pattern(cls, value: str) -> str:
        return _check_patterns([value])[0]


class SiteConfig(_ConfigModel):
    """One remote site and the rules deciding what to fetch from it."""
    name: str = Field(..., alias="Name", min_length=1, description="Site name or bookmark passed to 'open'")
    dir: str = Field(..., alias="Dir", min_length=1, description="Remote directory to list")
    max_age: Optional[timedelta] = Field(default=None, alias="MaxAge", description="Skip entries older than this, e.g. 24h")
    patterns: List[str] = Field(default_factory=list, alias="Patterns", description="Include patterns, searched anywhere in the name")
    filters: List[str] = Field(default_factory=list, alias="Filters", description="Exclude patterns, override Patterns")
    skip_symlinks: bool = Field(default=False, alias="SkipSymlinks")
    parser: MediaKind = Field(default=MediaKind.DEFAULT, alias="Parser", description="show, movie or default")
    local_dir: str = Field(..., alias="LocalDir", min_length=1, description="Local path template")
    priorities: List[str] = Field(default_factory=list, alias="Priorities", description="Priority patterns, most preferred first")
    deduplicate: bool = Field(default=False, alias="Deduplicate")
    skip_existing: bool = Field(default=False, alias="SkipExisting", description="Skip entries whose destination is not empty")
    post_command: Optional[str] = Field(default=None, alias="PostCommand")
    replacements: List[ReplacementConfig] = Field(default_factory=list, alias="Replacements")
    client: Optional[ClientConfig] = Field(default=None, alias="Client", description="Overrides the top-level client")

    @field_validator("max_age", mode="before")
    @classmethod
    def parse_max_age(cls, value):
        if value is None or isinstance(value, timedelta):
            return value
        if isinstance(value, str):
            return parse_duration(value)
        raise ValueError(f"expected duration string, got {type(value).__name__}")

    @field_validator("patterns", "filters", "priorities")
    @classmethod
    def check_patterns(cls, value: List[str]) -> List[str]:
        return _check_patterns(value)

    @field_validator("parser", mode="before")
    @classmethod
    def parse_parser(cls, value):
        if isinstance(value, str):
            return create_media_parser(value).name
        return value

    @field_validator("local_dir")
    @classmethod
    def check_local_dir(cls, value: str) -> str:
        try:
            PathTemplate.compile(value)
        except TemplateError as e:
            raise ValueError(str(e)) from e
        return value

    @field_validator("post_command")
    @classmethod
    def check_post_command(cls, value: Optional[str]) -> Optional[str]:
        if value is None or not value.strip():
            return None
        try:
            shlex.split(value)
        except ValueError as e:
            raise ValueError(f"invalid post command {value!r}: {e}") from e
        return value

    def to_rules(self, default_client: Optional[ClientConfig] = None) -> MatchRuleSet:
        """Build the immutable rule set for this site."""
        client = self.client or default_client or ClientConfig()
        return MatchRuleSet(
            name=self.name,
            remote_dir=self.dir,
            local_path_template=PathTemplate.compile(self.local_dir),
            media_parser=create_media_parser(self.parser),
            max_age=self.max_age,
            include_patterns=tuple(re.compile(p) for p in self.patterns),
            exclude_patterns=tuple(re.compile(p) for p in self.filters),
            priority_patterns=tuple(re.compile(p) for p in self.priorities),
            skip_symlinks=self.skip_symlinks,
            deduplicate=self.deduplicate,
            skip_existing=self.skip_existing,
            post_command=self.post_command,
            replacements=tuple(
                Replacement(pattern=re.compile(r.pattern), replacement=r.replacement)
                for r in self.replacements
            ),
            client=client.to_client(),
        )


class AppConfig(_ConfigModel):
    """Top-level configuration file."""
    client: ClientConfig = Field(default_factory=ClientConfig, alias="Client")
    sites: List[SiteConfig] = Field(default_factory=list, alias="Sites")

    @field_validator("sites")
    @classmethod
    def check_unique_names(cls, value: List[SiteConfig]) -> List[SiteConfig]:
        seen = set()
        for site in value:
            if site.name in seen:
                raise ValueError(f"duplicate site name: {site.name!r}")
            seen.add(site.name)
        return value

    def site_rules(self) -> list[MatchRuleSet]:
        """Immutable rule sets for all sites, in config order."""
        return [site.to_rules(self.client) for site in self.sites]


def load_config(path: Path) -> AppConfig:
    """Read and validate a JSON config file. Raises ConfigError."""
    path = path.expanduser()
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Config file not readable: {path}: {e}") from e
    try:
        return AppConfig.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}:\n{e}") from e
