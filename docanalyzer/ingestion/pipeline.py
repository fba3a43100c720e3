from abc import ABC, abstractmethod
from dataclasses import dataclass

from docanalyzer.analysis.models import AnalysisResult
from docanalyzer.database.models import DocumentRecord
from docanalyzer.ingestion.models import EncodedDocument, UploadedFile
from docanalyzer.ingestion.status import StatusTracker


@dataclass(slots=True)
class PipelineContext:
    file: UploadedFile
    tracker: StatusTracker
    encoded: EncodedDocument | None = None
    raw_response: str = ""
    analysis_result: AnalysisResult | None = None
    record: DocumentRecord | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
