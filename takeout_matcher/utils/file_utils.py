"""
Utility functions for file operations
"""
import os

from takeout_matcher.config import SIDECAR_EXTENSION


def is_sidecar_file(filename: str) -> bool:
	"""
	Check if a filename carries the sidecar extension.

	Only the final extension counts, so IMG_1234.jpg.json is a sidecar while
	IMG_1234.json.bak and a bare ".json" are not.

	Args:
		filename: Filename to check

	Returns:
		True if the filename is a sidecar, False otherwise
	"""
	base, ext = os.path.splitext(filename)
	return bool(base) and ext == SIDECAR_EXTENSION


def is_plain_filename(title: str) -> bool:
	"""
	Check that a sidecar title names a file directly inside the folder.

	Absolute paths, path separators and "." or ".." would point at files
	outside the selected folder.

	Args:
		title: Title read from the sidecar

	Returns:
		True if the title is a bare filename, False otherwise
	"""
	if title in ('', '.', '..') or os.path.isabs(title):
		return False
	separators = {'/', os.sep}
	if os.altsep:
		separators.add(os.altsep)
	return not any(sep in title for sep in separators)


def media_path_for(directory: str, title: str) -> str:
	"""
	Path of the media file a sidecar title refers to.

	The title is joined as-is: no case folding, no extension guessing.
	"""
	return os.path.join(directory, title)


def resolve_directory(path: str) -> str:
	"""
	Canonicalize a user-supplied folder path

	Args:
		path: Path as typed by the user

	Returns:
		Absolute, symlink-free path

	Raises:
		NotADirectoryError: if the path does not point at a directory
	"""
	resolved = os.path.realpath(os.path.expanduser(path))
	if not os.path.isdir(resolved):
		raise NotADirectoryError(f"Not a directory: {path}")
	return resolved
