"""
Service for rewriting file creation and modification times
"""
import os
import logging
import platform
import subprocess
from datetime import datetime
from typing import Callable, List, Optional, Sequence

from takeout_matcher.config import SETFILE_TIMEOUT
from takeout_matcher.errors import TimestampWriteError
from takeout_matcher.models.metadata import MatchStatus, MetadataRecord, RecordResult
from takeout_matcher.utils.file_utils import is_plain_filename, media_path_for
from takeout_matcher.utils.logging_utils import processed_logger

logger = logging.getLogger(__name__)

NANOSECONDS = 1_000_000_000


class TimestampService:
	"""Applies sidecar capture times to media files on disk"""

	@staticmethod
	def set_modification_time(file_path: str, timestamp: int) -> None:
		"""
		Set the modification time, keeping the access time as it is

		Args:
			file_path: File to update
			timestamp: Epoch seconds
		"""
		try:
			atime_ns = os.stat(file_path).st_atime_ns
			os.utime(file_path, ns=(atime_ns, timestamp * NANOSECONDS))
		except (OSError, OverflowError) as e:
			raise TimestampWriteError(file_path, 'modification', e) from e

	@staticmethod
	def _set_creation_time_windows(file_path: str, timestamp: int) -> None:
		import win32file
		import pywintypes

		try:
			win_time = pywintypes.Time(timestamp)
			handle = win32file.CreateFile(
				file_path,
				win32file.GENERIC_WRITE,
				win32file.FILE_SHARE_READ | win32file.FILE_SHARE_WRITE,
				None,
				win32file.OPEN_EXISTING,
				win32file.FILE_ATTRIBUTE_NORMAL,
				None
			)
		except (pywintypes.error, ValueError, OverflowError) as e:
			raise TimestampWriteError(file_path, 'creation', e) from e
		try:
			# Only the creation slot; access and write times are left alone
			win32file.SetFileTime(handle, win_time, None, None)
		except pywintypes.error as e:
			raise TimestampWriteError(file_path, 'creation', e) from e
		finally:
			win32file.CloseHandle(handle)

	@staticmethod
	def _set_creation_time_macos(file_path: str, timestamp: int) -> None:
		# SetFile (macOS, needs Xcode Command Line Tools) takes local time
		try:
			creation_date = datetime.fromtimestamp(timestamp).strftime('%m/%d/%Y %H:%M:%S')
			cmd = ['SetFile', '-d', creation_date, file_path]
			result = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE, text=True, timeout=SETFILE_TIMEOUT)
		except (OSError, ValueError, OverflowError, subprocess.SubprocessError) as e:
			raise TimestampWriteError(file_path, 'creation', e) from e
		if result.returncode != 0:
			raise TimestampWriteError(file_path, 'creation', result.stderr.strip() or f"SetFile exited with {result.returncode}")

	@staticmethod
	def set_creation_time(file_path: str, timestamp: int) -> bool:
		"""
		Set the creation (birth) time where the platform allows it

		Args:
			file_path: File to update
			timestamp: Epoch seconds

		Returns:
			True if the creation time was written, False if the platform
			has no settable creation time

		Raises:
			TimestampWriteError: if the platform supports it but the write failed
		"""
		system = platform.system()
		if system == 'Windows':
			TimestampService._set_creation_time_windows(file_path, timestamp)
			return True
		if system == 'Darwin':
			TimestampService._set_creation_time_macos(file_path, timestamp)
			return True
		logger.debug(f"Creation time is not settable on {system}, skipping it for {file_path}")
		return False

	@staticmethod
	def apply(record: MetadataRecord, directory: str) -> RecordResult:
		"""
		Apply one record's capture time to its media file

		Args:
			record: Metadata read from the sidecar
			directory: Directory holding the media files

		Returns:
			RecordResult with status WRITTEN, SKIPPED or FAILED
		"""
		file_path = media_path_for(directory, record.title)

		if not is_plain_filename(record.title):
			logger.warning(f"Title {record.title!r} points outside {directory}, skipping...")
			processed_logger.info(f"SKIPPED {file_path}")
			return RecordResult(record, file_path, MatchStatus.SKIPPED, 'title is not a plain filename')

		if not os.path.isfile(file_path):
			logger.info(f"File {file_path} does not exist, skipping...")
			result = RecordResult(record, file_path, MatchStatus.SKIPPED, 'media file not found')
			processed_logger.info(f"SKIPPED {file_path}")
			return result

		try:
			creation_set = TimestampService.set_creation_time(file_path, record.captured_at)
			TimestampService.set_modification_time(file_path, record.captured_at)
		except TimestampWriteError as e:
			logger.error(str(e))
			processed_logger.info(f"FAILED {file_path}: {e}")
			return RecordResult(record, file_path, MatchStatus.FAILED, str(e))

		logger.info(f"Set timestamps of {os.path.basename(file_path)} to {record.captured_datetime().isoformat()}")
		processed_logger.info(f"WRITTEN {file_path} {record.captured_at}")
		return RecordResult(record, file_path, MatchStatus.WRITTEN, creation_time_set=creation_set)

	@staticmethod
	def apply_all(
		records: Sequence[MetadataRecord],
		directory: str,
		on_progress: Optional[Callable[[float], None]] = None,
		should_stop: Optional[Callable[[], bool]] = None
	) -> List[RecordResult]:
		"""
		Apply records one at a time, in order, reporting progress after each

		Args:
			records: Records from the extractor
			directory: Directory holding the media files
			on_progress: Called with current/total after every record
			should_stop: Polled before every record; True stops the loop early

		Returns:
			Results for the records that were processed
		"""
		results = []
		total = len(records)
		for i, record in enumerate(records, 1):
			if should_stop is not None and should_stop():
				logger.warning(f"Stopped after {i - 1}/{total} records")
				break
			results.append(TimestampService.apply(record, directory))
			if on_progress is not None:
				on_progress(i / total)
		return results
