from docanalyzer.analysis.analyzer import Analyzer
from docanalyzer.analysis.base import BaseAnalyzer
from docanalyzer.analysis.client_base import BaseAnalysisClient
from docanalyzer.analysis.example_client_adapter import ExampleClientAdapter
from docanalyzer.analysis.gemini_client_adapter import GeminiClientAdapter
from docanalyzer.analysis.models import GenerationConfig
from docanalyzer.analysis.openai_client_adapter import OpenAIClientAdapter
from docanalyzer.config.settings import Settings


class AnalyzerFactory:
    """Creates the configured analyzer."""

    PROVIDERS = ("gemini", "openai", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseAnalyzer:
        provider = settings.analysis_provider.lower()
        client, model = cls._create_client(provider, settings)
        return Analyzer(
            client=client,
            model=model,
            max_size_bytes=settings.max_upload_size_bytes,
            timeout_seconds=settings.analysis_timeout_seconds,
            generation_config=GenerationConfig(
                temperature=settings.analysis_temperature,
                top_k=settings.analysis_top_k,
                top_p=settings.analysis_top_p,
                max_output_tokens=settings.analysis_max_output_tokens,
            ),
        )

    @classmethod
    def _create_client(
        cls, provider: str, settings: Settings
    ) -> tuple[BaseAnalysisClient, str]:
        if provider == "example":
            return ExampleClientAdapter(), "example"
        if provider == "gemini":
            if not settings.gemini_api_key:
                raise ValueError("gemini_api_key is required for analysis_provider=gemini")
            client = GeminiClientAdapter(
                api_key=settings.gemini_api_key,
                timeout_seconds=settings.analysis_timeout_seconds,
                base_url=settings.gemini_base_url,
            )
            return client, settings.gemini_model_name
        if provider == "openai":
            if not settings.openai_model_name:
                raise ValueError("openai_model_name is required for analysis_provider=openai")
            client = OpenAIClientAdapter(
                api_key=settings.openai_api_key,
                timeout_seconds=settings.analysis_timeout_seconds,
                base_url=settings.openai_base_url,
            )
            return client, settings.openai_model_name
        raise ValueError(
            f"Unknown analysis provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
