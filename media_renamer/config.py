"""
Configuration constants for the media renamer.
"""

# --- File Type Definitions ---
RAW_EXTS = {'.cr2', '.cr3', '.nef', '.arw', '.orf', '.rw2', '.dng', '.raf'}
JPEG_EXTS = {'.jpg', '.jpeg', '.jpe', '.heic', '.png'}
VIDEO_EXTS = {'.mp4', '.mov', '.m4v', '.avi', '.mts', '.m2ts', '.3gp', '.mpg', '.mpeg'}
TIFF_EXTS = {'.tif', '.tiff'}

# Used by --media-only to filter the listing before exiftool is invoked
MEDIA_EXTS = frozenset(RAW_EXTS | JPEG_EXTS | VIDEO_EXTS | TIFF_EXTS)

# --- ExifTool ---
EXIFTOOL_CMD = "exiftool"
# -j = JSON output, one object per input file
EXIFTOOL_ARGS = ["-j"]

# --- Metadata Parsing ---
# Priority: Original -> Create -> MediaCreate -> Modify
DATE_TAGS = [
    'DateTimeOriginal',
    'CreateDate',
    'MediaCreateDate',
    'ModifyDate',
]

# Some recorders (e.g. Ricoh WG-M1 MOV files) store the model in 'Information'
DEVICE_TAGS = [
    'Model',
    'Information',
]

FILE_NAME_TAG = 'FileName'
FILE_NUMBER_TAG = 'FileNumber'

EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"

# --- Naming ---
DEFAULT_TIMEZONE = "UTC"
NAME_SEPARATOR = "_"

# --- Renaming ---
DEST_FILE_MODE = 0o644
