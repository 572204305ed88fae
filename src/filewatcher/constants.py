"""Constants for filewatcher."""

# Tool-owned storage directory (relative to the working directory)
WATCHER_DIR = "watcher"

# Artifact files (inside WATCHER_DIR)
SNAPSHOT_FILE = "prev.json"
CHANGED_FILES_FILE = "changed_files.txt"
SETTINGS_FILE = "config.yaml"

# Read size used when streaming file contents through the hash
CHUNK_SIZE = 8192

# Empty snapshot as written to disk
EMPTY_SNAPSHOT_TEXT = "{}"

# Version
WATCHER_VERSION = "0.1.0"
