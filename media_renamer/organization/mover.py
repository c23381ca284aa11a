import logging
import os
from pathlib import Path

from .. import config
from ..exceptions import FileOperationError
from ..models import DerivedName, OutcomeStatus, RenameOutcome


class FileRenamer:
    """
    Applies a derived name to a file on disk: rename, then chmod, then set
    access/modification time to the capture timestamp.
    """

    def __init__(self, file_mode: int = config.DEST_FILE_MODE, dry_run: bool = False):
        self.file_mode = file_mode
        self.dry_run = dry_run

    def apply(self, src: Path, derived: DerivedName) -> RenameOutcome:
        """
        Renames `src` to `derived.name` in the same directory.

        If the destination already exists it is left in place, but its mode
        and timestamps are still normalized so that a second run repairs
        files renamed by an earlier one.

        Raises FileOperationError if the rename or normalization fails.
        """
        try:
            dest = src.with_name(derived.name)
        except ValueError as e:
            # e.g. a camera model containing a path separator
            raise FileOperationError(f"invalid destination name {derived.name!r}") from e

        if dest.name == src.name:
            self._normalize(dest, derived)
            return RenameOutcome(src, OutcomeStatus.UNCHANGED, dest, dry_run=self.dry_run)

        if os.path.lexists(dest):
            self._normalize(dest, derived)
            return RenameOutcome(src, OutcomeStatus.EXISTS, dest, dry_run=self.dry_run)

        if not self.dry_run:
            try:
                src.rename(dest)
            except OSError as e:
                raise FileOperationError(f"rename {src.name} -> {dest.name} failed: {e}") from e
            # Only reached when the rename succeeded
            self._normalize(dest, derived)

        return RenameOutcome(src, OutcomeStatus.RENAMED, dest, dry_run=self.dry_run)

    def _normalize(self, path: Path, derived: DerivedName):
        if self.dry_run:
            return
        ts = derived.timestamp.timestamp()
        try:
            os.chmod(path, self.file_mode)
            os.utime(path, (ts, ts))
        except OSError as e:
            raise FileOperationError(f"cannot update {path.name}: {e}") from e
        logging.debug(f"Set mode {self.file_mode:o} and mtime {derived.timestamp.isoformat()} on {path.name}")
