from dataclasses import dataclass

NOT_DETECTED = "Not detected"
SEE_SUMMARY = "See summary"
NO_SUMMARY = "No summary available"


@dataclass(frozen=True)
class AnalysisResult:
    """Structured output of one document analysis."""

    summary: str
    author: str = NOT_DETECTED
    entity: str = NOT_DETECTED
    key_info: str = SEE_SUMMARY
    degraded: bool = False


@dataclass(frozen=True)
class GenerationConfig:
    """Generation parameters sent with every analysis request."""

    temperature: float = 0.4
    top_k: int = 32
    top_p: float = 1.0
    max_output_tokens: int = 4096

    def to_payload(self) -> dict[str, float | int]:
        return {
            "temperature": self.temperature,
            "topK": self.top_k,
            "topP": self.top_p,
            "maxOutputTokens": self.max_output_tokens,
        }
