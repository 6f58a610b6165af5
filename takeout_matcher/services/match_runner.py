"""
Runs the discover -> extract -> write pipeline off the caller's thread
"""
import logging
import queue
import threading
import concurrent.futures
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Union

from takeout_matcher.errors import MatcherError, RunInProgressError, UnimplementedFeatureError
from takeout_matcher.models.metadata import BatchReport, RunOutcome, RunState
from takeout_matcher.services.discovery_service import SidecarDiscoveryService
from takeout_matcher.services.metadata_service import MetadataService
from takeout_matcher.services.timestamp_service import TimestampService

logger = logging.getLogger(__name__)

Event = Union[float, RunOutcome]


@dataclass(frozen=True)
class MatchOptions:
	"""Inputs supplied by the shell for one run"""

	directory: str
	search_subdirectories: bool = False
	# Reserved: copying matched files is not implemented and has no effect
	copy_matched_files: bool = False

	def validate(self) -> None:
		"""
		Reject options that cannot be honoured, before any work starts

		Raises:
			UnimplementedFeatureError: if subdirectory search is requested
		"""
		if self.search_subdirectories:
			raise UnimplementedFeatureError("Searching subdirectories")


def run_batch(
	options: MatchOptions,
	on_progress: Optional[Callable[[float], None]] = None,
	should_stop: Optional[Callable[[], bool]] = None
) -> BatchReport:
	"""
	Run one batch synchronously

	Args:
		options: Run options
		on_progress: Receives current/total after each record
		should_stop: Polled between records

	Returns:
		BatchReport with one result per processed record

	Raises:
		MatcherError: on any batch-fatal condition (unreadable directory,
			bad sidecar, unimplemented option)
	"""
	options.validate()
	if options.copy_matched_files:
		logger.warning("Copying matched files is not implemented; the option has no effect")

	logger.info(f"Matching metadata in {options.directory}")
	json_paths = SidecarDiscoveryService.find_sidecars(options.directory)
	records = MetadataService.extract_all(json_paths)

	report = BatchReport(directory=options.directory, record_count=len(records))
	report.results = TimestampService.apply_all(records, options.directory, on_progress, should_stop)
	logger.info(report.summary())
	return report


class ProgressState:
	"""Last-seen progress, owned by the consumer of a run's events"""

	def __init__(self):
		self.value = 0.0
		self.working = False
		self.outcome: Optional[RunOutcome] = None

	def begin(self) -> None:
		self.value = 0.0
		self.working = True
		self.outcome = None

	def update(self, event: Event) -> None:
		if isinstance(event, RunOutcome):
			self.outcome = event
			self.working = False
			if event.state is RunState.COMPLETE:
				self.value = 1.0
			return
		self.value = event
		if event >= 1.0:
			self.working = False


class MatchRunner:
	"""
	Runs batches on a single background worker.

	Progress flows one way through an unbounded queue: the worker puts one
	float per record and a final 1.0 on success, then exactly one RunOutcome.
	Only one run may be in flight at a time.
	"""

	def __init__(self):
		self._executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix='matcher')
		self._events: 'queue.Queue[Event]' = queue.Queue()
		self._stop = threading.Event()
		self._future: Optional[concurrent.futures.Future] = None

	@property
	def running(self) -> bool:
		return self._future is not None and not self._future.done()

	def start(self, options: MatchOptions) -> concurrent.futures.Future:
		"""
		Start a run in the background

		Args:
			options: Run options

		Returns:
			Future resolving to the run's RunOutcome

		Raises:
			UnimplementedFeatureError: before anything is read, if the options
				ask for an unimplemented feature
			RunInProgressError: if the previous run has not finished
		"""
		options.validate()
		if self.running:
			raise RunInProgressError()

		self._stop.clear()
		self._events = queue.Queue()
		self._future = self._executor.submit(self._work, options, self._events)
		return self._future

	def cancel(self) -> None:
		"""Ask the current run to stop before its next record"""
		self._stop.set()

	def _work(self, options: MatchOptions, events: 'queue.Queue[Event]') -> RunOutcome:
		try:
			report = run_batch(options, events.put, self._stop.is_set)
		except MatcherError as e:
			outcome = RunOutcome.error(str(e))
		except Exception as e:
			logger.exception(f"Unexpected error while matching {options.directory}")
			outcome = RunOutcome.error(f"Unexpected error: {e}")
		else:
			if not report.finished:
				outcome = RunOutcome.cancelled(report)
			else:
				events.put(1.0)
				outcome = RunOutcome.complete(report)
		events.put(outcome)
		return outcome

	def events(self, timeout: Optional[float] = None) -> Iterator[Event]:
		"""
		Yield progress values and then the terminal RunOutcome

		Args:
			timeout: Seconds to wait for each event (None waits forever)

		Raises:
			queue.Empty: if no event arrives within timeout
		"""
		events = self._events
		while True:
			event = events.get(timeout=timeout)
			yield event
			if isinstance(event, RunOutcome):
				return

	def shutdown(self, wait: bool = True) -> None:
		self.cancel()
		self._executor.shutdown(wait=wait)
