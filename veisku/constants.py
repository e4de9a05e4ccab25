"""Module-level constants for the veisku document finder."""

# Configuration
CONFIG_DIR_NAME = ".veisku"
CONFIG_FILE_NAME = "config.yaml"
DEFAULT_FILE_PATTERNS = ("*.md", "*.mdown", "!*.swp", "!.git/", "!.svn/")

# Front-matter scanning
PREAMBLE_LOOKAHEAD_BYTES = 5
READ_CHUNK_BYTES = 1 << 12

# Selection
MAX_DISPLAYED_CANDIDATES = 10

# Query presets that apply no extra filtering
NO_OP_PRESETS = frozenset({"", "default"})

# Logging
LOG_LEVEL = "INFO"
