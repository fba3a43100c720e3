"""Example analysis client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnalysisClient and register the provider in AnalyzerFactory.
"""

import json
from typing import ClassVar

from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.analysis.models import GenerationConfig
from docanalyzer.ingestion.models import EncodedDocument


class ExampleClientAdapter(BaseAnalysisClient):
    """Example adapter that returns a fixed analysis JSON.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_RESPONSE: ClassVar[dict[str, str]] = {
        "summary": "Example summary.",
        "author": "Not detected",
        "entity": "Not detected",
        "keyInfo": "See summary",
    }

    def __init__(self, response_text: str | None = None) -> None:
        self._response_text = (
            response_text if response_text is not None else json.dumps(self.DEFAULT_RESPONSE)
        )

    async def generate(
        self,
        *,
        model: str,
        instruction: str,
        document: EncodedDocument,
        generation_config: GenerationConfig,
    ) -> str:
        _ = model, instruction, document, generation_config
        return self._response_text
