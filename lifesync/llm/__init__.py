from lifesync.llm.gemini_client import (
    GeminiInferenceClient,
    GenerationResult,
    GroundingChunk,
    InferenceClient,
    InlineImage,
    ResponseFormat,
    ToolDirective,
    WebSource,
)

__all__ = [
    "GeminiInferenceClient",
    "GenerationResult",
    "GroundingChunk",
    "InferenceClient",
    "InlineImage",
    "ResponseFormat",
    "ToolDirective",
    "WebSource",
]
