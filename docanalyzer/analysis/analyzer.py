"""Remote model document analyzer."""

import asyncio
from pathlib import Path

from docanalyzer.analysis.base import BaseAnalyzer
from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.analysis.models import GenerationConfig
from docanalyzer.analysis.prompt_loader import load_instruction
from docanalyzer.ingestion.encoding import decoded_size
from docanalyzer.ingestion.exceptions import AnalysisError, FileTooLargeError
from docanalyzer.ingestion.models import EncodedDocument
from docanalyzer.logging.logger import Log


class Analyzer(BaseAnalyzer):
    """Sends one document per call to the configured provider client.

    No retry is attempted; a failed call fails the file.
    """

    def __init__(
        self,
        *,
        client: BaseAnalysisClient,
        model: str,
        max_size_bytes: int,
        timeout_seconds: float,
        generation_config: GenerationConfig | None = None,
        instruction_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._max_size_bytes = max_size_bytes
        self._timeout_seconds = timeout_seconds
        self._generation_config = generation_config or GenerationConfig()
        self._instruction = load_instruction(instruction_path)

    @property
    def generation_config(self) -> GenerationConfig:
        return self._generation_config

    async def analyze(self, document: EncodedDocument) -> str:
        size = max(document.size, decoded_size(document.data))
        if size > self._max_size_bytes:
            raise FileTooLargeError(
                f"Payload of {size} bytes exceeds the {self._max_size_bytes} byte limit"
            )

        Log.debug(f"Analysis instruction:\n{self._instruction}")
        try:
            raw_response = await asyncio.wait_for(
                self._client.generate(
                    model=self._model,
                    instruction=self._instruction,
                    document=document,
                    generation_config=self._generation_config,
                ),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise AnalysisError(
                "timeout", f"no response within {self._timeout_seconds}s"
            ) from exc
        Log.debug(f"AI raw response:\n{raw_response}")
        Log.info(f"Analysis complete: {len(raw_response)} chars returned")
        return raw_response
