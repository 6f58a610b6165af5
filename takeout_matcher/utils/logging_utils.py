"""
Logging setup shared by the CLI and the services
"""
import logging
import os
from typing import Optional

from takeout_matcher.config import LOG_FORMAT, LOG_FILE_NAME

# Separate logger for per-record results
processed_logger = logging.getLogger('processed_files')
processed_logger.setLevel(logging.INFO)
processed_logger.propagate = False  # Don't propagate to parent loggers


def setup_logging(log_dir: Optional[str] = None, verbose: bool = False) -> None:
	"""
	Configure root logging with a console handler and, optionally, a log file

	Args:
		log_dir: Directory for the log file (None disables file logging)
		verbose: Log at DEBUG level instead of INFO
	"""
	for handler in processed_logger.handlers[:]:
		processed_logger.removeHandler(handler)
		handler.close()

	handlers = [logging.StreamHandler()]
	if log_dir:
		os.makedirs(log_dir, exist_ok=True)
		handlers.append(logging.FileHandler(os.path.join(log_dir, LOG_FILE_NAME)))

		processed_handler = logging.FileHandler(os.path.join(log_dir, 'processed_files.log'))
		processed_handler.setFormatter(logging.Formatter(LOG_FORMAT))
		processed_logger.addHandler(processed_handler)

	logging.basicConfig(
		level=logging.DEBUG if verbose else logging.INFO,
		format=LOG_FORMAT,
		handlers=handlers,
		force=True
	)
