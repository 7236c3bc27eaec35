"""Google Cloud Text-to-Speech client (REST)."""

import logging
from pathlib import Path
from typing import Dict, Optional

import google.auth
import google.auth.transport.requests
import requests
from google.auth.exceptions import GoogleAuthError

from ..config import config
from ..errors import RemoteCallError, ValidationError
from .assets import decode_base64, read_json, write_media
from .base import SpeechRequest, SpeechSynthesizer

logger = logging.getLogger(__name__)

TTS_URL = "https://texttospeech.googleapis.com/v1/text:synthesize"

# Cloud TTS rejects requests whose input exceeds this many bytes
MAX_INPUT_BYTES = 5000


class GoogleSpeechSynthesizer(SpeechSynthesizer):
    """Speech synthesis via Google Cloud Text-to-Speech.

    Authenticates with an API key when one is configured, otherwise with
    application default credentials.
    """

    def __init__(
        self,
        output_dir: Path,
        api_key: Optional[str] = None,
        speaking_rate: float = 1.0,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the synthesizer.

        Args:
            output_dir: Directory where generated audio is written.
            api_key: Cloud TTS API key. Uses ADC when empty.
            speaking_rate: Speaking rate (0.25-4.0).
            timeout: Request timeout in seconds.
        """
        self._output_dir = Path(output_dir)
        self._api_key = api_key
        self._speaking_rate = speaking_rate
        self._timeout = timeout or config.request_timeout

    def _auth(self) -> Dict[str, Dict[str, str]]:
        """Return request kwargs carrying the credentials."""
        if self._api_key:
            return {"params": {"key": self._api_key}, "headers": {}}

        try:
            scopes = ["https://www.googleapis.com/auth/cloud-platform"]
            credentials, project = google.auth.default(scopes=scopes)
            credentials.refresh(google.auth.transport.requests.Request())
        except GoogleAuthError as e:
            raise RemoteCallError(
                f"No Text-to-Speech credentials: {e}", service="text-to-speech"
            ) from e

        headers = {"Authorization": f"Bearer {credentials.token}"}
        quota_project = config.google_cloud_project or project
        if quota_project:
            headers["x-goog-user-project"] = quota_project
        return {"params": {}, "headers": headers}

    def synthesize(self, request: SpeechRequest) -> str:
        """Synthesize `request.text` and save it as MP3.

        Returns:
            File URI of the generated audio.

        Raises:
            ValidationError: If the text is empty or too long.
            RemoteCallError: If the service call fails or the reply is malformed.
            StorageError: If the MP3 can't be saved.
        """
        text = request.text.strip()
        if not text:
            raise ValidationError("There is no text to narrate.", title="Text Required")
        if len(text.encode("utf-8")) > MAX_INPUT_BYTES:
            raise ValidationError(
                f"Narration text is longer than {MAX_INPUT_BYTES} bytes. Please shorten it.",
                title="Text Too Long",
            )

        voice = request.voice
        body = {
            "input": {"text": text},
            "voice": {
                "languageCode": voice.language,
                "name": voice.provider_voice,
                "ssmlGender": voice.gender.value.upper(),
            },
            "audioConfig": {
                "audioEncoding": "MP3",
                "speakingRate": self._speaking_rate,
            },
        }

        auth = self._auth()
        logger.info(f"Synthesizing speech with {voice.provider_voice}: {text[:50]}...")

        try:
            response = requests.post(
                TTS_URL,
                json=body,
                params=auth["params"],
                headers=auth["headers"],
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Text-to-Speech request failed: {e}")
            raise RemoteCallError(f"Text-to-Speech request failed: {e}", service="text-to-speech") from e

        if response.status_code != 200:
            error_msg = f"{response.status_code}: {response.text[:500]}"
            logger.error(f"Text-to-Speech API error: {error_msg}")
            raise RemoteCallError(
                f"Text-to-Speech API error {error_msg}",
                service="text-to-speech",
                status_code=response.status_code,
            )

        data = read_json(response, "text-to-speech")
        audio = decode_base64(data.get("audioContent"), "text-to-speech")

        output_path = write_media(self._output_dir / f"{request.name}.mp3", audio)

        logger.info(f"Saved voiceover to {output_path}")
        return output_path.resolve().as_uri()
