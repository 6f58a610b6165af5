"""
Service for locating sidecar metadata files
"""
import os
import logging
from typing import List

from takeout_matcher.errors import DirectoryUnreadableError
from takeout_matcher.utils.file_utils import is_sidecar_file

logger = logging.getLogger(__name__)


class SidecarDiscoveryService:
	"""Lists the JSON sidecars directly inside a directory"""

	@staticmethod
	def find_sidecars(directory: str) -> List[str]:
		"""
		Find sidecar files in a directory (non-recursive)

		Args:
			directory: Directory to scan

		Returns:
			Paths of sidecar files, in directory listing order

		Raises:
			DirectoryUnreadableError: if the directory cannot be listed
		"""
		sidecars = []
		try:
			with os.scandir(directory) as entries:
				for entry in entries:
					if is_sidecar_file(entry.name) and entry.is_file():
						sidecars.append(entry.path)
		except OSError as e:
			logger.error(f"Failed to read directory {directory}: {str(e)}")
			raise DirectoryUnreadableError(directory, e) from e

		logger.info(f"Found {len(sidecars)} JSON files in {directory}")
		return sidecars
