"""
Custom exception hierarchy for the media renamer.

Errors are split in two families: fatal errors abort the whole run before
any file is touched, everything else only skips the file being processed.
"""


class MediaRenamerError(Exception):
    """Base exception for all media renamer errors."""
    pass


class FatalError(MediaRenamerError):
    """Raised when the run as a whole cannot proceed."""
    pass


class ExifToolNotFoundError(FatalError):
    """Raised when the exiftool executable cannot be found on PATH."""
    pass


class InvalidTimezoneError(FatalError):
    """Raised when the configured timezone is not a known IANA zone."""
    pass


class DirectoryListingError(FatalError):
    """Raised when the working directory cannot be listed."""
    pass


class MetadataExtractionError(MediaRenamerError):
    """Raised when metadata cannot be extracted from a file."""
    pass


class ExifToolExecutionError(MetadataExtractionError):
    """Raised when exiftool exits with a non-zero status or times out."""
    pass


class MalformedMetadataError(MetadataExtractionError):
    """Raised when exiftool output is not a JSON list of records."""
    pass


class NoMetadataRecordsError(MetadataExtractionError):
    """Raised when exiftool returns zero records for a file."""
    pass


class DerivationError(MediaRenamerError):
    """Raised when a destination name cannot be derived from the tags."""
    pass


class NoTimestampError(DerivationError):
    """Raised when none of the date tags is populated."""
    pass


class TimestampFormatError(DerivationError):
    """Raised when the selected date tag is not 'YYYY:MM:DD HH:MM:SS'."""
    pass


class FileOperationError(MediaRenamerError):
    """Raised when rename/chmod/utime fails."""
    pass
