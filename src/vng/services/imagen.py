"""Background images from Imagen on Vertex AI."""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import google.auth
import google.auth.transport.requests
import requests
from google.auth.exceptions import GoogleAuthError

from ..config import config
from ..errors import RemoteCallError
from .assets import decode_base64, read_json, write_media
from .base import ImageRequest, ImageSynthesizer

logger = logging.getLogger(__name__)

PREDICT_URL = (
    "https://{location}-aiplatform.googleapis.com/v1/projects/{project}/"
    "locations/{location}/publishers/google/models/{model}:predict"
)


class ImagenImageSynthesizer(ImageSynthesizer):
    """Imagen predictions saved as PNG files in `output_dir`.

    Authenticates with application default credentials.
    """

    DEFAULT_LOCATION = "us-central1"
    DEFAULT_MODEL = "imagen-3.0-generate-001"

    def __init__(
        self,
        output_dir: Path,
        project_id: Optional[str] = None,
        location: str = DEFAULT_LOCATION,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self._output_dir = Path(output_dir)
        self._project_id = project_id or config.google_cloud_project
        self._location = location
        self._model = model or self.DEFAULT_MODEL
        self._timeout = timeout or config.request_timeout

        if not self._project_id:
            raise ValueError("GOOGLE_CLOUD_PROJECT not set")

    @property
    def model(self) -> str:
        return self._model

    def _bearer_token(self) -> str:
        try:
            credentials, _ = google.auth.default(scopes=["https://www.googleapis.com/auth/cloud-platform"])
            credentials.refresh(google.auth.transport.requests.Request())
        except GoogleAuthError as e:
            raise RemoteCallError(f"No Google Cloud credentials: {e}", service="imagen") from e
        return credentials.token

    def _predict(self, body: Dict[str, Any]) -> Dict[str, Any]:
        url = PREDICT_URL.format(location=self._location, project=self._project_id, model=self._model)
        headers = {"Authorization": f"Bearer {self._bearer_token()}"}

        try:
            response = requests.post(url, json=body, headers=headers, timeout=self._timeout)
        except requests.RequestException as e:
            logger.error(f"Imagen request failed: {e}")
            raise RemoteCallError(f"Imagen request failed: {e}", service="imagen") from e

        if response.status_code != 200:
            logger.error(f"Imagen API error {response.status_code}: {response.text[:500]}")
            raise RemoteCallError(
                f"Imagen API error {response.status_code}: {response.text[:500]}",
                service="imagen",
                status_code=response.status_code,
            )
        return read_json(response, "imagen")

    def generate(self, request: ImageRequest) -> str:
        """Generate one image and return its file URI.

        Raises:
            RemoteCallError: If authentication or the prediction fails, or the
                reply carries no decodable image.
            StorageError: If the image can't be saved.
        """
        logger.info(f"Generating image with {self._model}: {request.style} / {request.palette}")
        data = self._predict({
            "instances": [{"prompt": request.prompt}],
            "parameters": {"sampleCount": 1, "aspectRatio": request.aspect_ratio.value},
        })

        predictions = data.get("predictions")
        first = predictions[0] if isinstance(predictions, list) and predictions else None
        encoded = first.get("bytesBase64Encoded") if isinstance(first, dict) else None
        image = decode_base64(encoded, "imagen")

        output_path = write_media(self._output_dir / f"{request.name}.png", image)

        logger.info(f"Saved image to {output_path}")
        return output_path.resolve().as_uri()
