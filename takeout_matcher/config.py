"""
Configuration constants for the sidecar timestamp matcher
"""
import os

# Sidecar files exported next to each media file
SIDECAR_EXTENSION = '.json'

# Sidecar field names
TITLE_FIELD = 'title'
PHOTO_TAKEN_FIELD = 'photoTakenTime'
TIMESTAMP_FIELD = 'timestamp'

# Logging
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_FILE_NAME = 'metadata_matcher.log'
DEFAULT_LOG_DIR = os.path.join(os.getcwd(), 'logs')

# How many records between progress log lines in the CLI
PROGRESS_LOG_INTERVAL = 10

# Timeout (seconds) for the macOS SetFile helper
SETFILE_TIMEOUT = 30
