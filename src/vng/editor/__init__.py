"""moviepy helpers for local video assembly."""

from .audio import fit_audio, load_audio, mix_audio, repeat_to
from .compositor import blank_clip, cover, export, still_clip

__all__ = [
    "fit_audio",
    "load_audio",
    "mix_audio",
    "repeat_to",
    "blank_clip",
    "cover",
    "export",
    "still_clip",
]
