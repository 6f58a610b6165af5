"""
Service for reading Google Takeout JSON sidecars
"""
import json
import logging
import re
from typing import Any, Dict, Iterable, List

from takeout_matcher.config import TITLE_FIELD, PHOTO_TAKEN_FIELD, TIMESTAMP_FIELD
from takeout_matcher.errors import (
	SidecarError,
	SidecarReadError,
	SidecarParseError,
	SidecarMissingFieldError,
	SidecarMalformedValueError,
)
from takeout_matcher.models.metadata import MetadataRecord

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r'^[0-9]+$')


class MetadataService:
	"""Service for turning sidecar files into metadata records"""

	@staticmethod
	def read_sidecar(json_path: str) -> Dict[str, Any]:
		"""
		Read and parse a sidecar file into a JSON object

		Args:
			json_path: Path to the JSON file

		Returns:
			The parsed top-level object

		Raises:
			SidecarReadError: if the file cannot be read
			SidecarParseError: if the content is not a JSON object
		"""
		try:
			with open(json_path, 'r', encoding='utf-8') as f:
				content = f.read()
		except (OSError, UnicodeDecodeError) as e:
			raise SidecarReadError(json_path, e) from e

		try:
			data = json.loads(content)
		except json.JSONDecodeError as e:
			raise SidecarParseError(json_path, e) from e

		if not isinstance(data, dict):
			raise SidecarParseError(json_path, f"expected a JSON object, got {type(data).__name__}")
		return data

	@staticmethod
	def parse_timestamp(json_path: str, json_data: Dict[str, Any]) -> int:
		"""
		Extract photoTakenTime.timestamp as epoch seconds

		Args:
			json_path: Sidecar path, for error messages
			json_data: Parsed sidecar

		Returns:
			Non-negative capture time in seconds
		"""
		if PHOTO_TAKEN_FIELD not in json_data:
			raise SidecarMissingFieldError(json_path, PHOTO_TAKEN_FIELD)

		field_name = f"{PHOTO_TAKEN_FIELD}.{TIMESTAMP_FIELD}"
		photo_taken_time = json_data[PHOTO_TAKEN_FIELD]
		if not isinstance(photo_taken_time, dict):
			raise SidecarMalformedValueError(json_path, PHOTO_TAKEN_FIELD, photo_taken_time)
		if TIMESTAMP_FIELD not in photo_taken_time:
			raise SidecarMissingFieldError(json_path, field_name)

		raw = photo_taken_time[TIMESTAMP_FIELD]
		if not isinstance(raw, str) or not _DIGITS.match(raw.strip()):
			raise SidecarMalformedValueError(json_path, field_name, raw)
		try:
			return int(raw.strip())
		except ValueError as e:
			# Longer than the interpreter's int conversion limit
			raise SidecarMalformedValueError(json_path, field_name, raw) from e

	@staticmethod
	def extract_record(json_path: str) -> MetadataRecord:
		"""
		Extract a metadata record from a Google Takeout JSON file

		Args:
			json_path: Path to the JSON file

		Returns:
			MetadataRecord with title and capture time

		Raises:
			SidecarError: subclass describing what is wrong with the file
		"""
		json_data = MetadataService.read_sidecar(json_path)

		if TITLE_FIELD not in json_data:
			raise SidecarMissingFieldError(json_path, TITLE_FIELD)
		title = json_data[TITLE_FIELD]
		if not isinstance(title, str):
			raise SidecarMalformedValueError(json_path, TITLE_FIELD, title)

		captured_at = MetadataService.parse_timestamp(json_path, json_data)
		logger.debug(f"Read {json_path}: title={title!r} timestamp={captured_at}")
		return MetadataRecord(title=title, captured_at=captured_at, sidecar_path=json_path)

	@staticmethod
	def extract_all(json_paths: Iterable[str]) -> List[MetadataRecord]:
		"""
		Extract records from every sidecar, stopping at the first bad one.

		Nothing is returned when any sidecar fails; the error of the first
		failing file propagates to the caller.

		Args:
			json_paths: Sidecar paths in processing order

		Returns:
			Records in the same order as json_paths
		"""
		records = []
		for json_path in json_paths:
			try:
				records.append(MetadataService.extract_record(json_path))
			except SidecarError as e:
				logger.error(str(e))
				raise
		logger.info(f"Extracted metadata from {len(records)} JSON files")
		return records
