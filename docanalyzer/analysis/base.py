from abc import ABC, abstractmethod

from docanalyzer.ingestion.models import EncodedDocument


class BaseAnalyzer(ABC):
    """Contract for all document analyzers."""

    @abstractmethod
    async def analyze(self, document: EncodedDocument) -> str:
        """Send an encoded document to the remote model service.

        Args:
            document: Base64 payload and resolved mime type.

        Returns:
            The model's raw free-form response text.

        Raises:
            FileTooLargeError: if the payload exceeds the size ceiling.
            AnalysisError: on a non-success response, timeout or network failure.
        """
