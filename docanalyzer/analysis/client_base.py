from abc import ABC, abstractmethod

from docanalyzer.analysis.models import GenerationConfig
from docanalyzer.ingestion.models import EncodedDocument


class BaseAnalysisClient(ABC):
    """Contract for provider-specific document analysis clients."""

    @abstractmethod
    async def generate(
        self,
        *,
        model: str,
        instruction: str,
        document: EncodedDocument,
        generation_config: GenerationConfig,
    ) -> str:
        """Return the provider's free-form response text."""
