"""Wiring of collaborator implementations from configuration."""

import logging
from dataclasses import dataclass
from typing import Optional

from ..agents import NarrationAgent
from ..config import Config, config as default_config
from .base import (
    FallbackImageSynthesizer,
    FallbackTextAnalyzer,
    ImageSynthesizer,
    KeyFallback,
    SpeechSynthesizer,
    TextAnalyzer,
    VideoAssembler,
)
from .gemini import GeminiClient
from .openai_images import OpenAIImageSynthesizer
from .speech import GoogleSpeechSynthesizer

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """One implementation per collaborator capability."""

    text_analyzer: TextAnalyzer
    speech: SpeechSynthesizer
    images: ImageSynthesizer
    video: VideoAssembler


def _text_analyzer(cfg: Config) -> TextAnalyzer:
    if cfg.text_provider == "anthropic":
        from .anthropic import AnthropicClient

        client = AnthropicClient(api_key=cfg.anthropic_api_key, model=cfg.anthropic_model)
        return NarrationAgent(client)

    return FallbackTextAnalyzer(KeyFallback(
        lambda key: NarrationAgent(GeminiClient(api_key=key, model=cfg.gemini_model, timeout=cfg.request_timeout)),
        cfg.gemini_api_keys,
        service="gemini",
    ))


def _image_synthesizer(cfg: Config) -> ImageSynthesizer:
    if cfg.image_provider == "imagen":
        from .imagen import ImagenImageSynthesizer

        return ImagenImageSynthesizer(
            output_dir=cfg.workspace / "images",
            project_id=cfg.google_cloud_project,
            timeout=cfg.request_timeout,
        )

    return FallbackImageSynthesizer(KeyFallback(
        lambda key: OpenAIImageSynthesizer(api_key=key, model=cfg.openai_image_model, timeout=cfg.request_timeout),
        cfg.openai_api_keys,
        service="openai",
    ))


def _video_assembler(cfg: Config) -> VideoAssembler:
    if cfg.video_provider == "json2video":
        from .json2video import Json2VideoAssembler

        return Json2VideoAssembler(
            api_key=cfg.json2video_api_keys[0] if cfg.json2video_api_keys else "",
            workspace=cfg.workspace,
            asset_base_url=cfg.asset_base_url,
            timeout=cfg.request_timeout,
        )

    # moviepy is only imported when rendering locally
    from .local_render import MoviepyAssembler

    return MoviepyAssembler(output_dir=cfg.workspace / "renders")


def build_services(cfg: Optional[Config] = None) -> Services:
    """Build the collaborators selected by `cfg`.

    Raises:
        ValueError: If a selected provider is missing its credentials.
    """
    cfg = cfg or default_config
    logger.debug(
        f"Providers: text={cfg.text_provider}, image={cfg.image_provider}, video={cfg.video_provider}"
    )

    return Services(
        text_analyzer=_text_analyzer(cfg),
        speech=GoogleSpeechSynthesizer(
            output_dir=cfg.workspace / "audio",
            api_key=cfg.google_tts_api_keys[0] if cfg.google_tts_api_keys else None,
            timeout=cfg.request_timeout,
        ),
        images=_image_synthesizer(cfg),
        video=_video_assembler(cfg),
    )
