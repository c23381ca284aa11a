import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from ..exceptions import DirectoryListingError


def normalize_extensions(exts: Iterable[str]) -> frozenset:
    """'JPG', '.jpg' and 'jpg' all become '.jpg'."""
    normalized = set()
    for ext in exts:
        ext = ext.strip().lower()
        if not ext:
            continue
        normalized.add(ext if ext.startswith(".") else "." + ext)
    return frozenset(normalized)


class DirectoryScanner:
    """
    Lists the regular files of a single directory. Subdirectories are
    skipped, never descended into.
    """

    def list_files(self, root: Path, extensions: Optional[frozenset] = None) -> List[Path]:
        """
        Returns the candidate files sorted by name.

        Raises DirectoryListingError if the directory cannot be read, since
        nothing useful can happen after that.
        """
        try:
            entries = sorted(root.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise DirectoryListingError(f"cannot list {root}: {e}") from e

        return list(self._filter(entries, extensions))

    def _filter(self, entries: List[Path], extensions: Optional[frozenset]) -> Iterator[Path]:
        for path in entries:
            try:
                if not path.is_file() or path.is_symlink():
                    continue
            except OSError as e:
                logging.debug(f"Cannot stat {path}: {e}")
                continue

            if extensions is not None and path.suffix.lower() not in extensions:
                logging.debug(f"Skipping {path.name}: unsupported extension")
                continue

            yield path
