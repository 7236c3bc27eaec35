"""Picture track for a narrated video: one still frame held for the whole duration."""

from pathlib import Path
from typing import Tuple

from moviepy import ColorClip, ImageClip, VideoClip

Size = Tuple[int, int]


def cover(clip: VideoClip, size: Size) -> VideoClip:
    """Scale `clip` to fill `size` and crop the overflow around the centre."""
    width, height = size
    scale = max(width / clip.w, height / clip.h)
    scaled = clip.resized(scale)

    x1 = max(0, (scaled.w - width) // 2)
    y1 = max(0, (scaled.h - height) // 2)
    return scaled.cropped(x1=x1, y1=y1, width=width, height=height)


def still_clip(image_path: Path, duration: float, size: Size) -> VideoClip:
    """Hold the image at `image_path` for `duration` seconds at `size`.

    Raises:
        FileNotFoundError: If the image doesn't exist.
    """
    if not image_path.exists():
        raise FileNotFoundError(f"Image not found: {image_path}")
    return cover(ImageClip(str(image_path), duration=duration), size)


def blank_clip(duration: float, size: Size, color: Tuple[int, int, int] = (0, 0, 0)) -> VideoClip:
    """Solid background used when the project has no image."""
    return ColorClip(size=size, color=color, duration=duration)


def export(
    video: VideoClip,
    output_path: Path,
    fps: int = 24,
    preset: str = "medium",
) -> Path:
    """Encode `video` as H.264/AAC MP4 at `output_path`."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    video.write_videofile(
        str(output_path),
        fps=fps,
        codec="libx264",
        audio_codec="aac",
        preset=preset,
        logger=None,
    )
    return output_path
