"""
PhotoFunia client.

Uploads an image, applies an effect on it and downloads the rendered result:

    client = PhotoFuniaClient()
    with open("me.jpg", "rb") as f:
        data = client.clownify(f, include_hat=True)

One client keeps one session token; it is not safe to share a client between
threads without serializing the calls.

`timeout` (seconds) is handed to requests, so it bounds the connect and each
socket read of every request and redirect hop. It is not a deadline for the
whole effect: a server trickling bytes or a chain of redirects can take longer.
"""

from __future__ import annotations
from typing import BinaryIO, Optional

import requests

from photofunia.config import (
    BASE_URL, DEFAULT_TIMEOUT, EFFECT_BOUNDARY, IMAGE_ACCEPT, UPLOAD_ACCEPT, UPLOAD_BOUNDARY,
)
from photofunia.errors import (
    EffectRequestError, EmptyKeyError, ImageDownloadError, ResultFetchError, UploadError,
    status_failure, transport_failure,
)
from photofunia.log import Field, Logger, NoopLogger, logger_from_settings
from photofunia.models import EffectRequest, UploadResponse, clown, fat_maker
from photofunia.net import multipart
from photofunia.net.session import SessionManager
from photofunia.net.transport import Transport
from photofunia.scrape import extract_image_url

UPLOAD_FIELD = "image"
UPLOAD_FILENAME = "image.png"
UPLOAD_REFERER_PATH = "/categories/all_effects/clown"


class PhotoFuniaClient:
    def __init__(self, logger: Optional[Logger] = None, timeout: Optional[float] = None,
                 http: Optional[requests.Session] = None, base_url: str = BASE_URL,
                 session_id: Optional[str] = None):
        self.logger = logger or NoopLogger()
        self.timeout = timeout if timeout is not None else DEFAULT_TIMEOUT
        self.base_url = base_url.rstrip("/")
        self.http = http if http is not None else requests.Session()
        self.sessions = SessionManager(self.http, self.base_url, self.timeout, self.logger, token=session_id)
        self.transport = Transport(self.http, self.sessions, self.base_url, self.timeout, self.logger)

    @classmethod
    def from_settings(cls, settings, http: Optional[requests.Session] = None) -> "PhotoFuniaClient":
        return cls(
            logger=logger_from_settings(settings),
            timeout=settings.TIMEOUT_SEC,
            http=http,
            base_url=settings.BASE_URL,
        )

    def with_timeout(self, timeout: float) -> "PhotoFuniaClient":
        """New client with another timeout. The current token is copied."""
        return PhotoFuniaClient(
            logger=self.logger,
            timeout=timeout,
            http=self.http,
            base_url=self.base_url,
            session_id=self.session_id,
        )

    @property
    def session_id(self) -> str:
        return self.sessions.token

    @session_id.setter
    def session_id(self, value: str) -> None:
        self.sessions.token = value or ""

    # --- effects ---

    def fatify(self, image: BinaryIO) -> bytes:
        """Applies the "fat maker" effect. `image` is read and closed."""
        return self.apply_effect(image, fat_maker())

    def clownify(self, image: BinaryIO, include_hat: bool = False) -> bytes:
        """Applies the clown effect, with or without the clown hat."""
        return self.apply_effect(image, clown(include_hat))

    def apply_effect(self, image: BinaryIO, effect: EffectRequest) -> bytes:
        uploaded = self._upload(image)
        if not uploaded.key:
            raise EmptyKeyError("image key is empty in the response")
        self.logger.info("got image key", Field("key", uploaded.key))

        result_url = self._invoke_effect(uploaded.key, effect)
        image_url = self._fetch_result(result_url)
        return self._download(image_url, result_url)

    # --- steps ---

    def _upload(self, image: BinaryIO) -> UploadResponse:
        try:
            data = image.read()
        except (OSError, ValueError) as e:
            raise UploadError(f"failed to read image data: {e}") from e
        finally:
            image.close()

        self.logger.info("read image data", Field("size", len(data)))

        body = multipart.encode_file(UPLOAD_FIELD, UPLOAD_FILENAME, data, UPLOAD_BOUNDARY)
        req = self.transport.build_request("POST", f"{self.base_url}/images?server=1", body)
        req.headers["Accept"] = UPLOAD_ACCEPT
        req.headers["Content-Type"] = multipart.content_type(UPLOAD_BOUNDARY)
        req.headers["Referer"] = self.base_url + UPLOAD_REFERER_PATH

        self.logger.info("sending request to PhotoFunia")
        try:
            resp = self.transport.send(req)
        except requests.RequestException as e:
            raise transport_failure(UploadError, "perform request to PhotoFunia", e) from e

        if resp.status_code != 200:
            raise status_failure(UploadError, "image upload", resp)

        self.logger.info("successfully received response from PhotoFunia",
                         Field("contentType", resp.headers.get("Content-Type", "")),
                         Field("contentLength", len(resp.content)))

        try:
            return UploadResponse.from_payload(resp.json())
        except ValueError as e:
            raise UploadError(f"failed to decode response: {e}") from e

    def _invoke_effect(self, image_key: str, effect: EffectRequest) -> str:
        body = multipart.encode_fields(effect.with_image(image_key), EFFECT_BOUNDARY)
        req = self.transport.build_request("POST", effect.url(self.base_url), body)
        req.headers["Content-Type"] = multipart.content_type(EFFECT_BOUNDARY)
        req.headers["Referer"] = effect.referer(self.base_url)

        self.logger.info(f"sending request to PhotoFunia {effect.name} effect")
        try:
            resp = self.transport.send(req)
        except requests.RequestException as e:
            raise transport_failure(EffectRequestError, f"perform request to PhotoFunia {effect.name} effect", e) from e

        if resp.status_code != 200:
            raise status_failure(EffectRequestError, f"{effect.name} effect", resp)

        self.logger.info(f"successfully received response from PhotoFunia {effect.name} effect",
                         Field("contentType", resp.headers.get("Content-Type", "")),
                         Field("contentLength", len(resp.content)),
                         Field("resultURL", resp.url))
        return resp.url

    def _fetch_result(self, result_url: str) -> str:
        req = self.transport.build_request("GET", result_url)
        try:
            resp = self.transport.send(req)
        except requests.RequestException as e:
            raise transport_failure(ResultFetchError, "get result page", e) from e

        if resp.status_code != 200:
            raise status_failure(ResultFetchError, "result page", resp)

        image_url = extract_image_url(resp.content)
        self.logger.info("found image URL", Field("url", image_url))
        return image_url

    def _download(self, image_url: str, result_url: str) -> bytes:
        req = self.transport.build_request("GET", image_url)
        req.headers["Accept"] = IMAGE_ACCEPT
        req.headers["Referer"] = result_url

        try:
            resp = self.transport.send(req)
        except requests.RequestException as e:
            raise transport_failure(ImageDownloadError, "download image", e) from e

        if resp.status_code != 200:
            raise status_failure(ImageDownloadError, "image", resp)

        data = resp.content
        self.logger.info("successfully downloaded image", Field("url", image_url), Field("size", len(data)))
        return data
