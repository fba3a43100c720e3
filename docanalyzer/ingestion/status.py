"""Per-file status state machine observed by the presentation layer."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from docanalyzer.analysis.models import AnalysisResult
from docanalyzer.database.models import DocumentRecord
from docanalyzer.ingestion.exceptions import InvalidTransitionError
from docanalyzer.logging.logger import Log


class FileState(str, Enum):
    UPLOADING = "uploading"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


TERMINAL_STATES = frozenset({FileState.COMPLETED, FileState.ERROR})

_PROGRESS: dict[FileState, int] = {
    FileState.UPLOADING: 0,
    FileState.PROCESSING: 50,
    FileState.COMPLETED: 100,
    FileState.ERROR: 100,
}

_ALLOWED: dict[FileState, frozenset[FileState]] = {
    FileState.UPLOADING: frozenset({FileState.PROCESSING, FileState.ERROR}),
    FileState.PROCESSING: frozenset({FileState.COMPLETED, FileState.ERROR}),
    FileState.COMPLETED: frozenset(),
    FileState.ERROR: frozenset(),
}


@dataclass(frozen=True)
class FileStatus:
    """Read-only snapshot of a tracker."""

    file_id: str
    filename: str
    state: FileState
    progress: int
    result: AnalysisResult | None = None
    record: DocumentRecord | None = None
    error_message: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES


StatusListener = Callable[[FileStatus], None]


class StatusTracker:
    """uploading -> processing -> completed | error, one instance per file.

    Performs no I/O. Listeners are called synchronously with the new snapshot
    after every transition; a listener that raises is logged and skipped.
    """

    def __init__(self, file_id: str, filename: str) -> None:
        self._listeners: list[StatusListener] = []
        self._status = FileStatus(
            file_id=file_id,
            filename=filename,
            state=FileState.UPLOADING,
            progress=_PROGRESS[FileState.UPLOADING],
        )

    @property
    def snapshot(self) -> FileStatus:
        return self._status

    def subscribe(self, listener: StatusListener) -> Callable[[], None]:
        """Register a listener; returns a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def mark_processing(self) -> FileStatus:
        return self._transition(FileState.PROCESSING)

    def mark_completed(self, result: AnalysisResult, record: DocumentRecord) -> FileStatus:
        return self._transition(FileState.COMPLETED, result=result, record=record)

    def mark_failed(self, message: str) -> FileStatus:
        return self._transition(FileState.ERROR, error_message=message)

    def _transition(
        self,
        target: FileState,
        *,
        result: AnalysisResult | None = None,
        record: DocumentRecord | None = None,
        error_message: str | None = None,
    ) -> FileStatus:
        current = self._status.state
        if target not in _ALLOWED[current]:
            raise InvalidTransitionError(
                f"File {self._status.file_id}: cannot move from "
                f"{current.value} to {target.value}"
            )
        self._status = FileStatus(
            file_id=self._status.file_id,
            filename=self._status.filename,
            state=target,
            progress=max(self._status.progress, _PROGRESS[target]),
            result=result,
            record=record,
            error_message=error_message,
        )
        for listener in list(self._listeners):
            try:
                listener(self._status)
            except Exception:  # noqa: BLE001
                Log.exception(f"Status listener failed for file {self._status.file_id}")
        return self._status
