"""
Exceptions raised by the matcher pipeline
"""
from typing import Optional


class MatcherError(Exception):
	"""Base class for all matcher errors"""


class DirectoryUnreadableError(MatcherError):
	"""The target directory could not be listed"""

	def __init__(self, directory: str, cause: Optional[BaseException] = None):
		self.directory = directory
		self.cause = cause
		super().__init__(f"Failed to read directory {directory}: {cause}")


class SidecarError(MatcherError):
	"""Base class for errors tied to a single sidecar file"""

	def __init__(self, path: str, message: str):
		self.path = path
		super().__init__(message)


class SidecarReadError(SidecarError):
	def __init__(self, path: str, cause: BaseException):
		self.cause = cause
		super().__init__(path, f"Failed to read JSON file {path}: {cause}")


class SidecarParseError(SidecarError):
	def __init__(self, path: str, cause: object):
		self.cause = cause
		super().__init__(path, f"Failed to parse JSON file {path}: {cause}")


class SidecarMissingFieldError(SidecarError):
	def __init__(self, path: str, field: str):
		self.field = field
		super().__init__(path, f"JSON file {path} does not contain '{field}' property")


class SidecarMalformedValueError(SidecarError):
	def __init__(self, path: str, field: str, value: object):
		self.field = field
		self.value = value
		super().__init__(path, f"JSON file {path} has invalid '{field}' value: {value!r}")


class TimestampWriteError(MatcherError):
	"""Setting a file timestamp failed"""

	def __init__(self, path: str, attribute: str, cause: object):
		self.path = path
		self.attribute = attribute
		self.cause = cause
		super().__init__(f"Failed to set {attribute} time on {path}: {cause}")


class UnimplementedFeatureError(MatcherError):
	"""A requested option is accepted but not implemented"""

	def __init__(self, feature: str):
		self.feature = feature
		super().__init__(f"{feature} is currently unimplemented")


class RunInProgressError(MatcherError):
	"""A batch was started while another one is still running"""

	def __init__(self):
		super().__init__("A metadata matching run is already in progress")
