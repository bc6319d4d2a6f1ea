"""Global configuration: limits, defaults, constants."""

# Longest path (in characters) the name canonicalizer and exclusion matcher
# will process. Longer paths bypass both and are used verbatim.
MAX_PATH = 260

# A traversal root must leave room for a "\*" suffix plus terminator.
ROOT_PATH_RESERVE = 3

# Algorithm used when none is requested
DEFAULT_ALGORITHM = "SHA1"

# Read size when streaming file content into the hash primitive
DEFAULT_CHUNK_SIZE = 4096

# Text encoding of names fed into the digest (fixed 2-byte code units, no BOM)
NAME_ENCODING = "utf-16-le"

# Project-local settings directory and file
SETTINGS_DIR = ".treedigest"
SETTINGS_FILE = "config.json"
