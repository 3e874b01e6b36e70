# treecopy/tree_constants.py
# Shared constants for the scanner, the assembler and the clipboard logic,
# kept in one place to avoid circular imports.

# --- Node types ---
FILE_TYPE = "file"
DIRECTORY_TYPE = "directory"
NODE_TYPES = (FILE_TYPE, DIRECTORY_TYPE)

# Canonical separator of FileNode.path, independent of the host OS.
PATH_SEPARATOR = "/"

# --- Scanning ---
DEFAULT_IGNORE_GLOB = "**/node_modules/**"
DEFAULT_DEBOUNCE_MS = 300

# --- Binary detection ---
BINARY_SAMPLE_SIZE = 1024
BINARY_CONTROL_RATIO = 0.30
ALLOWED_CONTROL_BYTES = {0x09, 0x0A, 0x0D}  # tab, LF, CR

# --- Aggregated document ---
DEFAULT_FENCE = "```"
BLOCK_SEPARATOR = "\n\n"
BINARY_FILE_TEXT = "Binary file."
READ_ERROR_TEXT = "Error reading file."

# --- Notification tags (same names the log widget used) ---
INFO_TAG = "info"
SUCCESS_TAG = "success"
WARNING_TAG = "warning"
ERROR_TAG = "error"
