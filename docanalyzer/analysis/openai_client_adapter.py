import json

import httpx
import openai

from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.analysis.models import GenerationConfig
from docanalyzer.ingestion.exceptions import AnalysisError
from docanalyzer.ingestion.models import EncodedDocument


class OpenAIClientAdapter(BaseAnalysisClient):
    """Analysis client built on the OpenAI-compatible chat API.

    The document travels as an inline ``file`` content part (data URL).
    ``top_k`` has no counterpart in this API and is not sent.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

    async def generate(
        self,
        *,
        model: str,
        instruction: str,
        document: EncodedDocument,
        generation_config: GenerationConfig,
    ) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=generation_config.temperature,
                top_p=generation_config.top_p,
                max_tokens=generation_config.max_output_tokens,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": instruction},
                            {
                                "type": "file",
                                "file": {
                                    "filename": "document",
                                    "file_data": (
                                        f"data:{document.mime_type};base64,{document.data}"
                                    ),
                                },
                            },
                        ],
                    }
                ],
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            raise AnalysisError("timeout", str(exc)) from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise AnalysisError("network", str(exc)) from exc
        except openai.APIStatusError as exc:
            body = exc.body if exc.body is not None else exc.message
            raise AnalysisError(
                exc.status_code,
                body if isinstance(body, str) else json.dumps(body),
            ) from exc
        except openai.APIError as exc:
            raise AnalysisError("api", str(exc)) from exc

        if not response.choices:
            raise AnalysisError(200, "AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise AnalysisError(200, "AI returned empty response")
        return content
