"""
Models for sidecar metadata and match results
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class MetadataRecord:
	"""Represents the metadata read from one Google Takeout JSON sidecar"""

	# Expected filename of the media file, exactly as stored in the sidecar
	title: str

	# Capture time, Unix epoch seconds
	captured_at: int

	# Sidecar the record was read from
	sidecar_path: Optional[str] = None

	def captured_datetime(self) -> datetime:
		"""
		Capture time as a timezone-aware UTC datetime

		Returns:
			datetime in UTC
		"""
		return datetime.fromtimestamp(self.captured_at, tz=timezone.utc)


class MatchStatus(Enum):
	WRITTEN = 'written'
	SKIPPED = 'skipped'
	FAILED = 'failed'


@dataclass
class RecordResult:
	"""Outcome of applying one record to its media file"""

	record: MetadataRecord
	media_path: str
	status: MatchStatus
	message: str = ''
	creation_time_set: bool = False


@dataclass
class BatchReport:
	"""Per-record results for one batch, in processing order"""

	directory: str
	results: List[RecordResult] = field(default_factory=list)

	# Number of records extracted for the batch
	record_count: int = 0

	def _with_status(self, status: MatchStatus) -> List[RecordResult]:
		return [r for r in self.results if r.status is status]

	@property
	def written(self) -> List[RecordResult]:
		return self._with_status(MatchStatus.WRITTEN)

	@property
	def skipped(self) -> List[RecordResult]:
		return self._with_status(MatchStatus.SKIPPED)

	@property
	def failed(self) -> List[RecordResult]:
		return self._with_status(MatchStatus.FAILED)

	@property
	def finished(self) -> bool:
		return len(self.results) == self.record_count

	@property
	def has_failures(self) -> bool:
		return any(r.status is MatchStatus.FAILED for r in self.results)

	def summary(self) -> str:
		return (
			f"{len(self.results)} records: {len(self.written)} matched, "
			f"{len(self.skipped)} skipped, {len(self.failed)} failed"
		)


class RunState(Enum):
	COMPLETE = 'complete'
	ERROR = 'error'
	CANCELLED = 'cancelled'


@dataclass(frozen=True)
class RunOutcome:
	"""Terminal signal delivered to the consumer once a run ends"""

	state: RunState
	report: Optional[BatchReport] = None
	message: str = ''

	@classmethod
	def complete(cls, report: BatchReport) -> 'RunOutcome':
		return cls(RunState.COMPLETE, report=report, message=report.summary())

	@classmethod
	def error(cls, message: str, report: Optional[BatchReport] = None) -> 'RunOutcome':
		return cls(RunState.ERROR, report=report, message=message)

	@classmethod
	def cancelled(cls, report: Optional[BatchReport] = None) -> 'RunOutcome':
		return cls(RunState.CANCELLED, report=report, message='Run cancelled')

	@property
	def succeeded(self) -> bool:
		return self.state is RunState.COMPLETE
