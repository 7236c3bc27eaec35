"""Wizard step panels."""

from .base import StepPanel
from .text_input import TextInputPanel
from .processing import ProcessingPanel
from .voice import VoiceGenerationPanel
from .image import ImageGenerationPanel
from .music import MusicUploadPanel
from .video import VideoGenerationPanel
from .preview import PreviewPanel

PANEL_TYPES = {
    "text-input": TextInputPanel,
    "processing": ProcessingPanel,
    "voice": VoiceGenerationPanel,
    "image": ImageGenerationPanel,
    "music": MusicUploadPanel,
    "video": VideoGenerationPanel,
    "preview": PreviewPanel,
}

__all__ = [
    "StepPanel",
    "TextInputPanel",
    "ProcessingPanel",
    "VoiceGenerationPanel",
    "ImageGenerationPanel",
    "MusicUploadPanel",
    "VideoGenerationPanel",
    "PreviewPanel",
    "PANEL_TYPES",
]
