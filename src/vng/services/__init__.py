"""External service integrations."""

from .base import (
    AnalysisResult,
    AssemblyJob,
    ImageRequest,
    ImageSynthesizer,
    KeyFallback,
    SpeechRequest,
    SpeechSynthesizer,
    TextAnalyzer,
    VideoAssembler,
    VideoRequest,
    VideoResult,
)

__all__ = [
    "AnalysisResult",
    "AssemblyJob",
    "ImageRequest",
    "ImageSynthesizer",
    "KeyFallback",
    "SpeechRequest",
    "SpeechSynthesizer",
    "TextAnalyzer",
    "VideoAssembler",
    "VideoRequest",
    "VideoResult",
]
