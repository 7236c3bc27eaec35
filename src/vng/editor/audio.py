"""Soundtrack building: voiceover on top, optional music underneath."""

from pathlib import Path
from typing import Optional

from moviepy import AudioClip, AudioFileClip, CompositeAudioClip
from moviepy.audio.fx import AudioFadeOut


def load_audio(path: Path) -> AudioFileClip:
    """Open an audio file.

    Raises:
        FileNotFoundError: If `path` doesn't exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"Audio file not found: {path}")
    return AudioFileClip(str(path))


def repeat_to(clip: AudioClip, seconds: float) -> AudioClip:
    """Repeat `clip` back to back until it lasts exactly `seconds`."""
    if clip.duration >= seconds:
        return clip.subclipped(0, seconds)

    copies = int(seconds // clip.duration) + 1
    track = CompositeAudioClip([clip.with_start(n * clip.duration) for n in range(copies)])
    return track.subclipped(0, seconds)


def fit_audio(
    clip: AudioClip,
    seconds: float,
    loop: bool = True,
    fade_out: float = 0.0,
) -> AudioClip:
    """Trim `clip` to `seconds`, looping it first when `loop` is set.

    A clip shorter than `seconds` is left short unless looped.
    """
    if clip.duration > seconds:
        clip = clip.subclipped(0, seconds)
    elif loop and clip.duration < seconds:
        clip = repeat_to(clip, seconds)

    if fade_out > 0:
        clip = clip.with_effects([AudioFadeOut(min(fade_out, clip.duration))])
    return clip


def mix_audio(
    voice: AudioClip,
    music: Optional[AudioClip] = None,
    music_volume: float = 0.3,
) -> AudioClip:
    """Lay `music` under `voice` at `music_volume`. Without music the voice is returned as is."""
    if music is None:
        return voice
    return CompositeAudioClip([voice, music.with_volume_scaled(music_volume)])
