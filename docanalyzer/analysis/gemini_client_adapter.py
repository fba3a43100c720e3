from typing import Any

import httpx

from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.analysis.models import GenerationConfig
from docanalyzer.ingestion.exceptions import AnalysisError
from docanalyzer.ingestion.models import EncodedDocument
from docanalyzer.logging.logger import Log


class GeminiClientAdapter(BaseAnalysisClient):
    """Analysis client for the Gemini generateContent REST API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout_seconds = timeout_seconds
        self._base_url = base_url.rstrip("/")
        self._http_client = http_client

    async def generate(
        self,
        *,
        model: str,
        instruction: str,
        document: EncodedDocument,
        generation_config: GenerationConfig,
    ) -> str:
        url = f"{self._base_url}/models/{model}:generateContent"
        payload = self.build_request(instruction, document, generation_config)
        response = await self._post(url, payload)

        if not response.is_success:
            Log.error(f"Gemini API error: {response.status_code} - {response.text}")
            raise AnalysisError(response.status_code, response.text)

        try:
            data = response.json()
            return self._extract_text(data)
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise AnalysisError(
                response.status_code,
                f"Unexpected response shape ({exc}): {response.text}",
            ) from exc

    @staticmethod
    def build_request(
        instruction: str,
        document: EncodedDocument,
        generation_config: GenerationConfig,
    ) -> dict[str, Any]:
        return {
            "contents": [
                {
                    "parts": [
                        {"text": instruction},
                        {
                            "inline_data": {
                                "mime_type": document.mime_type,
                                "data": document.data,
                            }
                        },
                    ]
                }
            ],
            "generationConfig": generation_config.to_payload(),
        }

    async def _post(self, url: str, payload: dict[str, Any]) -> httpx.Response:
        params = {"key": self._api_key}
        try:
            if self._http_client is not None:
                return await self._http_client.post(
                    url, params=params, json=payload, timeout=self._timeout_seconds
                )
            async with httpx.AsyncClient(timeout=self._timeout_seconds) as client:
                return await client.post(url, params=params, json=payload)
        except httpx.TimeoutException as exc:
            raise AnalysisError("timeout", str(exc)) from exc
        except httpx.HTTPError as exc:
            raise AnalysisError("network", str(exc)) from exc

    @staticmethod
    def _extract_text(data: Any) -> str:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
        if not isinstance(text, str):
            raise TypeError("candidate text is not a string")
        return text
