from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional
from zoneinfo import ZoneInfo

from . import config


def _tag_str(data: Dict[str, Any], tag: str) -> str:
    # exiftool emits numbers for some tags (FileNumber) and null for others
    value = data.get(tag)
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class TagRecord:
    """
    The metadata of one file, as reported by exiftool.
    Every field is optional and defaults to an empty string.
    """
    date_time_original: str = ""
    create_date: str = ""
    media_create_date: str = ""
    modify_date: str = ""

    source_file_name: str = ""
    file_number: str = ""

    device_model: str = ""
    device_info: str = ""

    @classmethod
    def from_exiftool(cls, data: Dict[str, Any]) -> "TagRecord":
        """Builds a record from one object of `exiftool -j` output."""
        dates = [_tag_str(data, tag) for tag in config.DATE_TAGS]
        model, info = (_tag_str(data, tag) for tag in config.DEVICE_TAGS)
        return cls(
            date_time_original=dates[0],
            create_date=dates[1],
            media_create_date=dates[2],
            modify_date=dates[3],
            source_file_name=_tag_str(data, config.FILE_NAME_TAG),
            file_number=_tag_str(data, config.FILE_NUMBER_TAG),
            device_model=model,
            device_info=info,
        )

    @property
    def captured_at(self) -> str:
        """First non-empty date tag in priority order, or ''."""
        for value in (self.date_time_original, self.create_date,
                      self.media_create_date, self.modify_date):
            if value:
                return value
        return ""

    def with_file_name(self, name: str) -> "TagRecord":
        """Returns a copy whose source_file_name falls back to `name`."""
        if self.source_file_name:
            return self
        return replace(self, source_file_name=name)


@dataclass(frozen=True)
class DerivedName:
    name: str
    timestamp: datetime     # timezone-aware, used for the name and for mtime


@dataclass(frozen=True)
class RenameSettings:
    """
    Explicit run configuration, built by the CLI and passed down.
    """
    timezone: ZoneInfo = field(default_factory=lambda: ZoneInfo(config.DEFAULT_TIMEZONE))
    prefix: str = ""
    dry_run: bool = False
    extensions: Optional[FrozenSet[str]] = None     # None = every regular file
    file_mode: int = config.DEST_FILE_MODE
    exiftool_timeout: Optional[float] = None
    progress: bool = False


class OutcomeStatus(Enum):
    RENAMED = "renamed"
    EXISTS = "exists"
    UNCHANGED = "unchanged"
    ERROR = "error"


@dataclass
class RenameOutcome:
    """Result of processing one file; one log line and one report row."""
    source: Path
    status: OutcomeStatus
    destination: Optional[Path] = None
    reason: Optional[str] = None
    dry_run: bool = False
