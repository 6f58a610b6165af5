#!/usr/bin/env python3
"""
Google Photos metadata matcher

Reads the JSON sidecars that Google Takeout exports next to each photo and
sets the creation and modification times of the matching media files to the
time the photo was taken.
"""
import sys
import logging
import argparse
from typing import List, Optional

from takeout_matcher.config import DEFAULT_LOG_DIR, PROGRESS_LOG_INTERVAL
from takeout_matcher.errors import UnimplementedFeatureError
from takeout_matcher.models.metadata import RunState
from takeout_matcher.services.match_runner import MatchOptions, MatchRunner, ProgressState
from takeout_matcher.utils.file_utils import resolve_directory
from takeout_matcher.utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_CANCELLED = 130


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
	parser = argparse.ArgumentParser(description='Set file timestamps from Google Takeout JSON sidecars')
	parser.add_argument('directory', help='Folder containing media files and their JSON sidecars')
	parser.add_argument('--search-subdirs', action='store_true', help='Go over subdirectories (not implemented)')
	parser.add_argument('--copy', action='store_true', help='Copy photos to a new folder (reserved, has no effect)')
	parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
	parser.add_argument('--log-dir', default=DEFAULT_LOG_DIR, help=f'Directory for log files (default: {DEFAULT_LOG_DIR})')
	parser.add_argument('--no-log-file', action='store_true', help='Only log to the console')
	return parser.parse_args(argv)


def print_summary(state: ProgressState) -> None:
	outcome = state.outcome
	logger.info("=" * 50)
	logger.info("Metadata Matching Summary:")
	if outcome.report is not None:
		report = outcome.report
		logger.info(f"Matched: {len(report.written)}")
		logger.info(f"Skipped (no media file): {len(report.skipped)}")
		logger.info(f"Failed: {len(report.failed)}")
		for result in report.failed:
			logger.info(f"  {result.media_path}: {result.message}")
	if outcome.state is RunState.ERROR:
		logger.error(f"Error: {outcome.message}")
	logger.info("=" * 50)


def main(argv: Optional[List[str]] = None) -> int:
	"""Run the matcher from the command line"""
	args = parse_args(argv)
	setup_logging(None if args.no_log_file else args.log_dir, args.verbose)

	try:
		directory = resolve_directory(args.directory)
	except NotADirectoryError as e:
		logger.error(str(e))
		return EXIT_USAGE

	options = MatchOptions(
		directory=directory,
		search_subdirectories=args.search_subdirs,
		copy_matched_files=args.copy
	)

	runner = MatchRunner()
	state = ProgressState()
	try:
		runner.start(options)
	except UnimplementedFeatureError as e:
		logger.error(str(e))
		runner.shutdown()
		return EXIT_USAGE

	state.begin()
	logger.info("Working...")
	count = 0
	try:
		for event in runner.events():
			state.update(event)
			if not isinstance(event, float):
				continue
			count += 1
			if count % PROGRESS_LOG_INTERVAL == 0:
				logger.info(f"Progress: {event:.0%}")
	except KeyboardInterrupt:
		logger.warning("Process interrupted by user")
		runner.cancel()
		if state.outcome is None:
			for event in runner.events():
				state.update(event)
	finally:
		runner.shutdown()

	print_summary(state)
	outcome = state.outcome
	if outcome.state is RunState.CANCELLED:
		return EXIT_CANCELLED
	if outcome.state is RunState.ERROR or outcome.report.has_failures:
		return EXIT_FAILED
	logger.info("Metadata processing complete")
	return EXIT_OK


if __name__ == '__main__':
	sys.exit(main())
