"""Helpers for moving media references between the workspace and the network."""

import base64
import binascii
import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import quote, urlparse
from urllib.request import url2pathname

import requests

from ..config import config
from ..errors import RemoteCallError, StorageError, ValidationError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 64


def read_json(response: requests.Response, service: str) -> Dict[str, Any]:
    """Return the JSON object in a successful response's body.

    Raises:
        RemoteCallError: If the body is not JSON or not an object.
    """
    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"{service} returned a non-JSON body: {response.text[:200]}")
        raise RemoteCallError(f"{service} returned a non-JSON body: {e}", service=service) from e

    if not isinstance(data, dict):
        raise RemoteCallError(
            f"{service} returned {type(data).__name__} instead of an object",
            service=service,
        )
    return data


def decode_base64(encoded: Any, service: str) -> bytes:
    """Decode a base64 media payload.

    Raises:
        RemoteCallError: If the payload is missing or not valid base64.
    """
    if not isinstance(encoded, str) or not encoded:
        raise RemoteCallError(f"No media data in {service} response", service=service)
    try:
        return base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise RemoteCallError(f"Invalid media data in {service} response: {e}", service=service) from e


def write_media(dest: Path, data: bytes) -> Path:
    """Write `data` to `dest`, creating its directory.

    Raises:
        StorageError: If the file can't be written.
    """
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(data)
    except OSError as e:
        logger.error(f"Failed to write {dest}: {e}")
        raise StorageError(f"Failed to write {dest}: {e}", title="Save Failed") from e
    return dest


def is_remote(reference: str) -> bool:
    """Return True for http(s) references."""
    return urlparse(reference).scheme in ("http", "https")


def to_local_path(reference: str) -> Optional[Path]:
    """Return the local path behind a file URI or plain path, else None."""
    parsed = urlparse(reference)
    if parsed.scheme == "file":
        return Path(url2pathname(parsed.path))
    if parsed.scheme == "" or (len(parsed.scheme) == 1 and reference[1:3] in (":\\", ":/")):
        return Path(reference)
    return None


def fetch_reference(reference: str, dest: Path, timeout: Optional[float] = None) -> Path:
    """Materialize a media reference at `dest`.

    Remote references are downloaded; local ones are copied.

    Raises:
        RemoteCallError: If the download fails.
        ValidationError: If a local file is missing or the scheme is unsupported.
        StorageError: If `dest` can't be written.
    """
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"Can't create {dest.parent}: {e}", title="Save Failed") from e

    if is_remote(reference):
        logger.debug(f"Downloading {reference} to {dest}")
        try:
            with requests.get(reference, stream=True, timeout=timeout or config.request_timeout) as response:
                if response.status_code != 200:
                    raise RemoteCallError(
                        f"Download failed with status {response.status_code}: {reference}",
                        service="download",
                        status_code=response.status_code,
                    )
                with open(dest, "wb") as f:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
        # RequestException is itself an OSError
        except requests.RequestException as e:
            raise RemoteCallError(f"Download failed: {e}", service="download") from e
        except OSError as e:
            raise StorageError(f"Can't write {dest}: {e}", title="Save Failed") from e
        return dest

    local = to_local_path(reference)
    if local is None:
        raise ValidationError(f"Unsupported media reference: {reference}", title="Unsupported Media")
    if not local.is_file():
        raise ValidationError(f"Media file not found: {local}", title="Media Missing")

    try:
        if local.resolve() != dest.resolve():
            shutil.copyfile(local, dest)
    except OSError as e:
        raise StorageError(f"Can't copy {local} to {dest}: {e}", title="Save Failed") from e
    return dest


def public_url(reference: str, workspace: Path, base_url: str) -> str:
    """Return a URL a remote service can fetch for `reference`.

    Workspace files are mapped under `base_url`.

    Raises:
        ValidationError: If the reference is local and can't be published.
    """
    if is_remote(reference):
        return reference

    local = to_local_path(reference)
    if local is None or not base_url:
        raise ValidationError(
            f"{reference} is not reachable by the video service. "
            "Set VNG_ASSET_BASE_URL or use the local renderer.",
            title="Asset Not Public",
        )

    try:
        relative = local.resolve().relative_to(workspace.resolve())
    except ValueError:
        raise ValidationError(
            f"{local} is outside the workspace {workspace}",
            title="Asset Not Public",
        )

    return f"{base_url.rstrip('/')}/{quote(relative.as_posix())}"
