from docanalyzer.analysis.base import BaseAnalyzer
from docanalyzer.ingestion.exceptions import IngestionError
from docanalyzer.ingestion.notifications import BaseNotifier
from docanalyzer.ingestion.persistence import PersistenceWriter
from docanalyzer.ingestion.pipeline import PipelineContext, PipelineStep
from docanalyzer.ingestion.status import FileStatus
from docanalyzer.ingestion.steps import (
    AnalyzeStep,
    EncodeStep,
    MarkCompletedStep,
    MarkFailedStep,
    MarkProcessingStep,
    ParseStep,
    PersistStep,
)
from docanalyzer.logging.logger import Log


class Processor:
    """Runs one file through the pipeline steps in order.

    Pipeline: mark processing -> encode -> analyze -> parse -> persist -> mark completed.
    Any failure runs the failed step instead and ends the run; nothing is re-raised.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    async def process(self, context: PipelineContext) -> FileStatus:
        Log.info(f"Processing file {context.file.filename} ({context.file.id})")
        try:
            for step in self._steps:
                context = await step.run(context)
        except IngestionError as exc:
            context.error_message = str(exc)
            await self._failed_step.run(context)
        except Exception as exc:  # noqa: BLE001
            Log.exception(f"Unexpected failure while processing {context.file.filename}")
            context.error_message = f"Unexpected error: {exc}"
            await self._failed_step.run(context)
        return context.tracker.snapshot


def build_processor(
    analyzer: BaseAnalyzer,
    writer: PersistenceWriter,
    notifier: BaseNotifier,
) -> Processor:
    steps: list[PipelineStep] = [
        MarkProcessingStep(),
        EncodeStep(),
        AnalyzeStep(analyzer),
        ParseStep(),
        PersistStep(writer),
        MarkCompletedStep(notifier),
    ]
    return Processor(steps=steps, failed_step=MarkFailedStep(notifier))

