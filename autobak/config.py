# config.py
"""
Configuration constants for autobak
"""

# Settings defaults
DEFAULT_AUTOSAVE_INTERVAL_SECS = 300.0
DEFAULT_BACKUP_INTERVAL_CYCLES = 1
MIN_AUTOSAVE_INTERVAL_SECS = 15.0  # Smaller values are raised to this floor

# Per-user data layout
DESIGNS_FOLDER = "AircraftDesigns"
WORKING_FILENAME = "__editor__.xml"
MOD_FOLDER = "NACHSAVE"
ARCHIVE_FOLDER = "AUTOBAK"
SETTINGS_FILENAME = "INTERVAL.TXT"

# Archive naming
BACKUP_FILENAME_PREFIX = "backup"
BACKUP_FILENAME_EXTENSION = ".xml"
BACKUP_TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# Console command
BACKUP_COMMAND_NAME = "BackupAircraft"

# Clock settings
TICK_INTERVAL_MS = 1000

# Save command settings
SAVE_COMMAND_TIMEOUT_SECS = 60.0  # A hung host command is abandoned after this

# Logging
LOGGER_NAME = "autobak"
LOG_FILENAME = "autobak.log"
LOG_MAX_BYTES = 1_048_576
LOG_BACKUP_COUNT = 5
