"""OpenAI image generation client (REST)."""

import logging
from typing import Optional

import requests

from ..config import config
from ..errors import RemoteCallError
from ..models import AspectRatio
from .assets import read_json
from .base import ImageRequest, ImageSynthesizer

logger = logging.getLogger(__name__)

OPENAI_IMAGES_URL = "https://api.openai.com/v1/images/generations"

SIZES = {
    AspectRatio.LANDSCAPE: "1792x1024",
    AspectRatio.PORTRAIT: "1024x1792",
}


class OpenAIImageSynthesizer(ImageSynthesizer):
    """Background image generation with DALL-E."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if not api_key:
            raise ValueError("OpenAI API key not provided. Set OPENAI_API_KEYS env var.")

        self._api_key = api_key
        self._model = model or config.openai_image_model
        self._timeout = timeout or config.request_timeout

    @property
    def model(self) -> str:
        return self._model

    def generate(self, request: ImageRequest) -> str:
        """Generate one image and return its URL.

        Raises:
            RemoteCallError: If the API call fails.
        """
        body = {
            "model": self._model,
            "prompt": request.prompt,
            "n": 1,
            "size": SIZES[request.aspect_ratio],
            "quality": "hd" if request.quality >= 80 else "standard",
        }
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }

        logger.info(f"Generating image with {self._model}: {request.style} / {request.palette}")

        try:
            response = requests.post(
                OPENAI_IMAGES_URL,
                json=body,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error(f"OpenAI request failed: {e}")
            raise RemoteCallError(f"OpenAI request failed: {e}", service="openai") from e

        if response.status_code != 200:
            error_msg = f"{response.status_code}: {response.text[:500]}"
            logger.error(f"OpenAI API error: {error_msg}")
            raise RemoteCallError(
                f"OpenAI API error {error_msg}",
                service="openai",
                status_code=response.status_code,
            )

        images = read_json(response, "openai").get("data")
        first = images[0] if isinstance(images, list) and images else None
        url = first.get("url") if isinstance(first, dict) else None
        if not isinstance(url, str) or not url:
            raise RemoteCallError("No image URL in response", service="openai")

        return url
