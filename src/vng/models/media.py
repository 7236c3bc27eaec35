"""Local media files and the music intake policy."""

import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ALLOWED_MUSIC_TYPES = frozenset({"audio/mp3", "audio/wav", "audio/mpeg", "audio/mp4"})
MAX_MUSIC_BYTES = 10 * 1024 * 1024

# Platform-specific spellings of the allowed types
_TYPE_ALIASES = {
    "audio/x-wav": "audio/wav",
    "audio/wave": "audio/wav",
    "audio/vnd.wave": "audio/wav",
    "audio/x-mp3": "audio/mp3",
    "audio/x-m4a": "audio/mp4",
    "audio/m4a": "audio/mp4",
}

_EXTENSION_TYPES = {
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
    ".m4a": "audio/mp4",
}


def normalize_mime_type(mime_type: Optional[str]) -> Optional[str]:
    """Map known aliases onto the canonical MIME type."""
    if not mime_type:
        return None
    mime_type = mime_type.lower()
    return _TYPE_ALIASES.get(mime_type, mime_type)


def format_file_size(size: int) -> str:
    """Render a byte count as e.g. '2.5 MB'."""
    units = ["Bytes", "KB", "MB", "GB"]
    if size <= 0:
        return "0 Bytes"
    i = 0
    value = float(size)
    while value >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    value = round(value, 2)
    if value == int(value):
        value = int(value)
    return f"{value} {units[i]}"


@dataclass
class MusicFile:
    """A user-selected audio file offered for upload."""

    path: Path
    mime_type: Optional[str]
    size: int

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def normalized_type(self) -> Optional[str]:
        return normalize_mime_type(self.mime_type)

    @property
    def type_allowed(self) -> bool:
        return self.normalized_type in ALLOWED_MUSIC_TYPES

    @property
    def size_allowed(self) -> bool:
        return self.size <= MAX_MUSIC_BYTES

    @classmethod
    def from_path(cls, path: Path) -> "MusicFile":
        """Describe a file on disk.

        Raises:
            FileNotFoundError: If the file doesn't exist.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Audio file not found: {path}")

        mime_type = _EXTENSION_TYPES.get(path.suffix.lower())
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(path.name)

        return cls(path=path, mime_type=mime_type, size=path.stat().st_size)
