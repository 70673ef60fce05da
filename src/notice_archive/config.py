"""Configuration constants for the notice archive format."""

import zipfile

# Reserved manifest entry, always written last.
INDEX_JSON: str = "index.json"

# Directory prefixes telling branch directories from note directories.
BRANCH_PREFIX: str = "branch_"
NOTE_PREFIX: str = "note_"

# Note body lives at <dir>/<filename><BODY_SUFFIX>.
BODY_SUFFIX: str = ".md"

# One compression policy for the whole archive. Level 5 is zip's "normal" deflate.
COMPRESSION: int = zipfile.ZIP_DEFLATED
DEFAULT_COMPRESS_LEVEL: int = 5

# Generated filenames are cut to this many characters before collision suffixes.
MAX_FILENAME_LENGTH: int = 100
PLACEHOLDER_FILENAME: str = "unnamed"

# Used when moving trees to and from plain directories.
NOTE_FILE_SUFFIXES: tuple[str, ...] = (".md", ".txt")
ATTACHMENTS_DIR_SUFFIX: str = ".files"
