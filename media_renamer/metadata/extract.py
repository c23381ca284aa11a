import json
import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from .. import config
from ..exceptions import (
    ExifToolExecutionError,
    ExifToolNotFoundError,
    MalformedMetadataError,
    NoMetadataRecordsError,
)
from ..models import TagRecord


class MetadataReader:
    """
    Wraps the 'exiftool' command line utility.
    Must be installed and on the system PATH.

    One blocking exiftool process is spawned per file; the reader keeps
    no state between calls.
    """

    def __init__(self, executable: str = config.EXIFTOOL_CMD, timeout: Optional[float] = None):
        self.executable = executable
        self.timeout = timeout

    def ensure_available(self) -> str:
        """
        Resolves exiftool on PATH. Missing exiftool is fatal for the run.
        """
        resolved = shutil.which(self.executable)
        if resolved is None:
            raise ExifToolNotFoundError(f"{self.executable} not found")
        logging.debug(f"Using {resolved}")
        return resolved

    def read_tags(self, path: Path) -> TagRecord:
        """
        Runs exiftool on a single file and decodes the first record.

        Raises:
            ExifToolNotFoundError: the executable vanished (fatal).
            ExifToolExecutionError: non-zero exit status or timeout.
            MalformedMetadataError: output is not a JSON list of objects.
            NoMetadataRecordsError: exiftool returned an empty list.
        """
        cmd = [self.executable, *config.EXIFTOOL_ARGS, str(path)]

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ExifToolNotFoundError(f"{self.executable} not found") from e
        except subprocess.TimeoutExpired as e:
            raise ExifToolExecutionError(f"exiftool timed out after {self.timeout}s") from e

        if result.returncode != 0:
            detail = (result.stderr or "").strip() or f"exit status {result.returncode}"
            raise ExifToolExecutionError(f"exiftool error: {detail}")

        try:
            data_list = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise MalformedMetadataError(f"invalid exiftool output: {e}") from e

        if not isinstance(data_list, list):
            raise MalformedMetadataError("exiftool output is not a list of records")
        if not data_list:
            raise NoMetadataRecordsError("exiftool returned no records")

        tags = data_list[0]
        if not isinstance(tags, dict):
            raise MalformedMetadataError("exiftool record is not an object")

        return TagRecord.from_exiftool(tags)
