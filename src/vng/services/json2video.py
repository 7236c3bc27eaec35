"""json2video API client for remote video assembly."""

import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional

import requests

from ..config import config
from ..errors import RemoteCallError
from .assets import public_url, read_json
from .base import AssemblyJob, ProgressCallback, VideoAssembler, VideoRequest, VideoResult

logger = logging.getLogger(__name__)

JSON2VIDEO_URL = "https://api.json2video.com/v2/movies"

# Progress shown for each remote render status
STATUS_PROGRESS = {
    "pending": 10.0,
    "running": 50.0,
    "done": 100.0,
}


def _number(value: Any, kind: type) -> Optional[Any]:
    """Metadata the API left out or garbled is reported as unknown."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return kind(value)


class Json2VideoAssembler(VideoAssembler):
    """Video assembly through the json2video movie API.

    This client handles:
    - Building the movie description from the project's assets
    - Submitting the render and polling it until it finishes
    - Reporting the rendered movie's URL and metadata
    """

    DEFAULT_POLL_INTERVAL = 5.0  # seconds
    DEFAULT_MAX_POLL_TIME = 900.0  # 15 minutes
    MUSIC_VOLUME = 0.3

    def __init__(
        self,
        api_key: str,
        workspace: Optional[Path] = None,
        asset_base_url: Optional[str] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        max_poll_time: float = DEFAULT_MAX_POLL_TIME,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the json2video client.

        Args:
            api_key: json2video API key.
            workspace: Workspace holding locally generated assets.
            asset_base_url: Public URL under which the workspace is served.
            poll_interval: Seconds between polling checks.
            max_poll_time: Maximum seconds to wait for a render.
            timeout: HTTP timeout in seconds.
        """
        if not api_key:
            raise ValueError("json2video API key not provided. Set JSON2VIDEO_API_KEYS env var.")

        self._api_key = api_key
        self._workspace = Path(workspace or config.workspace)
        self._asset_base_url = config.asset_base_url if asset_base_url is None else asset_base_url
        self._poll_interval = poll_interval
        self._max_poll_time = max_poll_time
        self._timeout = timeout or config.request_timeout

    @property
    def _headers(self) -> Dict[str, str]:
        return {"x-api-key": self._api_key, "Content-Type": "application/json"}

    def _public(self, reference: str) -> str:
        return public_url(reference, self._workspace, self._asset_base_url)

    def prepare(self, request: VideoRequest, report: ProgressCallback) -> AssemblyJob:
        """Resolve public asset URLs and start the movie description."""
        job = AssemblyJob(request=request)
        assets = {"audio": request.audio_url, "image": request.image_url, "music": request.music_url}
        present = {name: ref for name, ref in assets.items() if ref}

        for i, (name, reference) in enumerate(present.items(), start=1):
            job.artifacts[name] = self._public(reference)
            report(100.0 * i / len(present))

        width, height = request.aspect_ratio.resolution
        job.payload = {
            "resolution": "custom",
            "width": width,
            "height": height,
            "quality": "high",
            "scenes": [
                {
                    "comment": f"project {request.project_id}",
                    "duration": request.duration,
                    "background-color": "#000000",
                    "elements": [],
                }
            ],
            "elements": [],
        }
        return job

    def sync_audio(self, job: AssemblyJob, report: ProgressCallback) -> None:
        """Attach the voiceover to the scene and the music to the whole movie."""
        scene = job.payload["scenes"][0]
        scene["elements"].append({"type": "audio", "src": job.artifacts["audio"], "volume": 1})
        report(50.0)

        if "music" in job.artifacts:
            job.payload["elements"].append({
                "type": "audio",
                "src": job.artifacts["music"],
                "volume": self.MUSIC_VOLUME,
                "loop": -1,
                "duration": -2,
            })

    def compose(self, job: AssemblyJob, report: ProgressCallback) -> None:
        """Place the background image under the scene."""
        if "image" in job.artifacts:
            scene = job.payload["scenes"][0]
            scene["elements"].insert(0, {
                "type": "image",
                "src": job.artifacts["image"],
                "resize": "cover",
                "duration": -2,
            })

    def render(self, job: AssemblyJob, report: ProgressCallback) -> None:
        """Submit the movie and poll until it is done.

        Raises:
            RemoteCallError: If submission fails, the render fails or times out.
        """
        logger.info(f"Submitting json2video render for project {job.request.project_id}")
        data = self._request("post", json=job.payload)
        project = data.get("project")
        if not data.get("success") or not project:
            raise RemoteCallError(
                f"json2video rejected the movie: {data.get('message', 'unknown error')}",
                service="json2video",
            )

        job.artifacts["movie"] = self._poll_movie(project, report)

    def finalize(self, job: AssemblyJob, report: ProgressCallback) -> VideoResult:
        movie = job.artifacts["movie"]
        return VideoResult(
            url=movie["url"],
            size_bytes=_number(movie.get("size"), int),
            width=_number(movie.get("width"), int),
            height=_number(movie.get("height"), int),
            duration=_number(movie.get("duration"), float),
        )

    def _poll_movie(self, project: str, report: ProgressCallback) -> Dict[str, Any]:
        """Poll a render until completion or timeout.

        Returns:
            The finished movie description.
        """
        start_time = time.time()
        poll_count = 0

        while True:
            elapsed = time.time() - start_time
            if elapsed > self._max_poll_time:
                logger.warning(f"Render {project} timed out after {elapsed:.1f}s")
                raise RemoteCallError(
                    f"Render timed out after {self._max_poll_time}s",
                    service="json2video",
                )

            poll_count += 1
            logger.debug(f"Polling render (attempt {poll_count}): {project}")

            movie = self._request("get", params={"project": project}).get("movie") or {}
            if not isinstance(movie, dict):
                raise RemoteCallError(f"Malformed render status: {movie!r}", service="json2video")
            status = str(movie.get("status", "pending"))

            if status in STATUS_PROGRESS:
                report(STATUS_PROGRESS[status])

            if status == "done":
                if not isinstance(movie.get("url"), str) or not movie["url"]:
                    raise RemoteCallError("Render finished without a URL", service="json2video")
                logger.info(f"Render {project} completed: {movie['url']}")
                return movie

            if status == "error":
                logger.error(f"Render {project} failed: {movie.get('message')}")
                raise RemoteCallError(
                    f"Render failed: {movie.get('message', 'unknown error')}",
                    service="json2video",
                )

            time.sleep(self._poll_interval)

    def _request(self, method: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            response = requests.request(
                method,
                JSON2VIDEO_URL,
                headers=self._headers,
                timeout=self._timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            logger.error(f"json2video request failed: {e}")
            raise RemoteCallError(f"json2video request failed: {e}", service="json2video") from e

        if response.status_code != 200:
            error_msg = f"{response.status_code}: {response.text[:500]}"
            logger.error(f"json2video API error: {error_msg}")
            raise RemoteCallError(
                f"json2video API error {error_msg}",
                service="json2video",
                status_code=response.status_code,
            )

        return read_json(response, "json2video")
