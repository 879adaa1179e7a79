"""Imgur image host client.

Translates an upload into a multipart ``POST /3/image`` and the JSON
answer ``{data: {id, link}, success, status}`` into an ImageUpload.  Only
``data.link`` matters to callers; a body that doesn't parse comes back
as an ImageUpload without a link rather than an exception.

The client id is injected (see ``Settings.imgur_client_id``); it travels
in the Authorization header and is never logged.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import httpx
from pydantic import BaseModel, SecretStr, ValidationError

from shopcat.domain.exceptions import UploadFailed
from shopcat.domain.gateway.image_host import (
    IMAGE_CONTENT_TYPE,
    IMAGE_FIELD_NAME,
    ImageHostClient,
    ImageUpload,
)

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/3/image"


class ImgurData(BaseModel):
    id: str = ""
    link: str = ""


class ImgurResponse(BaseModel):
    data: Optional[ImgurData] = None
    success: bool = False
    status: int = 0


class ImgurClient(ImageHostClient):

    def __init__(
        self,
        client_id: Optional[SecretStr],
        base_url: str = "https://api.imgur.com",
        timeout_seconds: float = 30.0,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self._client_id = client_id
        self._base_url = base_url.rstrip("/")
        self._http = http_client or httpx.Client(timeout=timeout_seconds)

    def upload(self, image_path: Path) -> ImageUpload:
        if self._client_id is None or not self._client_id.get_secret_value():
            raise UploadFailed("image host client id is not configured")

        headers = {"Authorization": f"Client-ID {self._client_id.get_secret_value()}"}
        url = f"{self._base_url}{UPLOAD_PATH}"

        logger.debug("Uploading %s to %s", image_path.name, url)
        try:
            with open(image_path, "rb") as image:
                files = {IMAGE_FIELD_NAME: (image_path.name, image, IMAGE_CONTENT_TYPE)}
                response = self._http.post(url, files=files, headers=headers)
        except httpx.HTTPError as exc:
            raise UploadFailed(str(exc) or type(exc).__name__) from exc
        except OSError as exc:
            raise UploadFailed(f"cannot read {image_path.name}: {exc}") from exc

        if not response.is_success:
            raise UploadFailed(f"{response.status_code} {response.reason_phrase}".strip())

        return self._parse(response)

    def close(self) -> None:
        self._http.close()

    @staticmethod
    def _parse(response: httpx.Response) -> ImageUpload:
        try:
            body = ImgurResponse.model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning("Unreadable image host response: %s", exc)
            return ImageUpload(link=None)
        if body.data is None:
            return ImageUpload(link=None)
        return ImageUpload(link=body.data.link or None, image_id=body.data.id or None)
