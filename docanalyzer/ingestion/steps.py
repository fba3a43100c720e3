from docanalyzer.analysis.base import BaseAnalyzer
from docanalyzer.analysis.parser import parse_analysis_response
from docanalyzer.ingestion.encoding import encode
from docanalyzer.ingestion.notifications import BaseNotifier, Notification
from docanalyzer.ingestion.persistence import PersistenceWriter
from docanalyzer.ingestion.pipeline import PipelineContext, PipelineStep
from docanalyzer.logging.logger import Log


class MarkProcessingStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        context.tracker.mark_processing()
        Log.info(f"File {context.file.filename} marked as processing")
        return context


class EncodeStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        context.encoded = encode(
            context.file.content,
            context.file.declared_mime_type,
            context.file.filename,
        )
        Log.info(
            f"Encoded {context.encoded.size} bytes of {context.file.filename} "
            f"as {context.encoded.mime_type}"
        )
        return context


class AnalyzeStep(PipelineStep):
    def __init__(self, analyzer: BaseAnalyzer) -> None:
        self._analyzer = analyzer

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.encoded is None:
            raise ValueError("PipelineContext.encoded must be set before analysis")
        context.raw_response = await self._analyzer.analyze(context.encoded)
        return context


class ParseStep(PipelineStep):
    async def run(self, context: PipelineContext) -> PipelineContext:
        context.analysis_result = parse_analysis_response(context.raw_response)
        if context.analysis_result.degraded:
            Log.warning(f"Analysis of {context.file.filename} degraded to prose")
        return context


class PersistStep(PipelineStep):
    def __init__(self, writer: PersistenceWriter) -> None:
        self._writer = writer

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.encoded is None or context.analysis_result is None:
            raise ValueError("PipelineContext.analysis_result must be set before persist")
        context.record = await self._writer.persist(
            context.file,
            context.encoded.mime_type,
            context.analysis_result,
        )
        return context


class MarkCompletedStep(PipelineStep):
    def __init__(self, notifier: BaseNotifier) -> None:
        self._notifier = notifier

    async def run(self, context: PipelineContext) -> PipelineContext:
        if context.analysis_result is None or context.record is None:
            raise ValueError("PipelineContext.record must be set before completion")
        context.tracker.mark_completed(context.analysis_result, context.record)
        Log.info(f"File {context.file.filename} completed as document {context.record.id}")
        self._notifier.notify(
            Notification(
                title="File processed successfully",
                description=(
                    f"{context.file.filename} has been analyzed and added to your history."
                ),
            )
        )
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, notifier: BaseNotifier) -> None:
        self._notifier = notifier

    async def run(self, context: PipelineContext) -> PipelineContext:
        if not context.tracker.snapshot.is_terminal:
            context.tracker.mark_failed(context.error_message)
        Log.error(f"File {context.file.filename} marked as failed: {context.error_message}")
        self._notifier.notify(
            Notification(
                title="Processing failed",
                description=f"Failed to process {context.file.filename}. {context.error_message}",
                variant="destructive",
            )
        )
        return context
