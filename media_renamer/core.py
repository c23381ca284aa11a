import logging
from pathlib import Path
from typing import List, Optional

from tqdm import tqdm

from .exceptions import (
    DerivationError,
    FatalError,
    FileOperationError,
    MetadataExtractionError,
)
from .metadata.extract import MetadataReader
from .models import OutcomeStatus, RenameOutcome, RenameSettings
from .naming.derive import derive_name
from .organization.mover import FileRenamer
from .scanning.filesystem import DirectoryScanner


class MediaRenamerApp:
    def __init__(self,
                 settings: RenameSettings,
                 reader: Optional[MetadataReader] = None,
                 scanner: Optional[DirectoryScanner] = None,
                 renamer: Optional[FileRenamer] = None):
        self.settings = settings
        self.reader = reader or MetadataReader(timeout=settings.exiftool_timeout)
        self.scanner = scanner or DirectoryScanner()
        self.renamer = renamer or FileRenamer(file_mode=settings.file_mode, dry_run=settings.dry_run)

    def run(self, root: Path) -> List[RenameOutcome]:
        """
        Renames every candidate file in `root`, one at a time.

        1. Check exiftool (fatal if missing)
        2. List the directory (fatal if unreadable)
        3. Per file: read tags -> derive name -> rename

        Per-file failures are logged and recorded; they never stop the run.
        """
        self.reader.ensure_available()
        files = self.scanner.list_files(root, self.settings.extensions)

        logging.info(f"Processing {len(files)} files in {root} (DryRun={self.settings.dry_run})...")

        outcomes = []
        for path in tqdm(files, desc="Renaming", disable=not self.settings.progress):
            outcome = self.process_file(path)
            self._log_outcome(outcome)
            outcomes.append(outcome)
        return outcomes

    def process_file(self, path: Path) -> RenameOutcome:
        """Never raises for a per-file problem; only FatalError escapes."""
        try:
            return self._process_file(path)
        except FatalError:
            raise
        except Exception as e:
            logging.debug(f"Unexpected failure on {path}", exc_info=True)
            return RenameOutcome(path, OutcomeStatus.ERROR, reason=f"unexpected error ({e})")

    def _process_file(self, path: Path) -> RenameOutcome:
        src = path.name
        try:
            tags = self.reader.read_tags(path)
        except MetadataExtractionError as e:
            return RenameOutcome(path, OutcomeStatus.ERROR, reason=f"error reading tags ({e})")

        tags = tags.with_file_name(src)

        try:
            derived = derive_name(tags, self.settings.timezone, self.settings.prefix, src)
        except DerivationError as e:
            return RenameOutcome(path, OutcomeStatus.ERROR,
                                 reason=f"error creating destination file name ({e})")

        try:
            return self.renamer.apply(path, derived)
        except FileOperationError as e:
            return RenameOutcome(path, OutcomeStatus.ERROR, reason=str(e))

    def _log_outcome(self, outcome: RenameOutcome):
        src = outcome.source.name
        dest = outcome.destination.name if outcome.destination else ""
        tag = "[DRY RUN] " if outcome.dry_run else ""

        if outcome.status is OutcomeStatus.RENAMED:
            logging.info(f"{tag}renamed {src} to {dest}")
        elif outcome.status is OutcomeStatus.EXISTS:
            logging.info(f"{tag}destination file {dest} exists, skipping.")
        elif outcome.status is OutcomeStatus.UNCHANGED:
            logging.info(f"{tag}{src} already named correctly")
        else:
            logging.error(f"{src}: {outcome.reason}")
