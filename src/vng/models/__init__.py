"""Data models for the video narrative wizard."""

from .project import AspectRatio, ProjectStatus, VideoProject, VoiceGender, clamp_duration
from .steps import WIZARD_STEPS, StepDefinition
from .voice import VOICE_OPTIONS, VoiceOption, get_voice, voice_for
from .media import MusicFile, format_file_size

__all__ = [
    "AspectRatio",
    "ProjectStatus",
    "VideoProject",
    "VoiceGender",
    "clamp_duration",
    "WIZARD_STEPS",
    "StepDefinition",
    "VOICE_OPTIONS",
    "VoiceOption",
    "get_voice",
    "voice_for",
    "MusicFile",
    "format_file_size",
]
