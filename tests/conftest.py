from __future__ import annotations
import json

import pytest
from requests.cookies import RequestsCookieJar, cookiejar_from_dict

from photofunia.client import PhotoFuniaClient

RESULT_URL = "https://photofunia.com/results/abc123"
IMAGE_URL = "https://x/y.jpg"


class DummyResponse:
    def __init__(self, status_code: int = 200, content: bytes | str = b"", url: str = "",
                 cookies: dict | RequestsCookieJar | None = None, headers: dict | None = None, reason: str = "OK"):
        self.status_code = status_code
        self.content = content.encode() if isinstance(content, str) else content
        self.url = url
        self.cookies = cookies if isinstance(cookies, RequestsCookieJar) else cookiejar_from_dict(cookies or {})
        self.headers = headers or {}
        self.reason = reason

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")

    def json(self):
        return json.loads(self.content)


class RecordingLogger:
    def __init__(self):
        self.debugs = []
        self.infos = []

    def debug(self, msg, *fields):
        self.debugs.append((msg, fields))

    def info(self, msg, *fields):
        self.infos.append((msg, fields))


class FakePhotoFunia:
    """
    Stands in for requests.Session. Each endpoint answers with the configured
    DummyResponse, or raises it when an exception instance is configured.
    """

    def __init__(self):
        self.calls = []
        self.timeouts = []
        self.cookies = RequestsCookieJar()
        self.cookie_response = DummyResponse(cookies={"PHPSESSID": "sess-1"})
        self.upload_response = DummyResponse(
            content=json.dumps({"response": {"key": "abc123", "server": 1, "sid": "s",
                                             "image": {"thumb": {"url": "", "width": 0, "height": 0}}}}),
            headers={"Content-Type": "application/json"},
        )
        # requests follows the redirect, so the response url is the result page
        self.effect_response = DummyResponse(url=RESULT_URL)
        self.result_response = DummyResponse(content=f'<img id="result-image" src="{IMAGE_URL}">', url=RESULT_URL)
        self.image_response = DummyResponse(content=b"DEADBEEF", url=IMAGE_URL)

    def send(self, prepared, timeout=None, allow_redirects=True):
        self.calls.append(prepared)
        self.timeouts.append(timeout)
        resp = self._route(prepared)
        if isinstance(resp, Exception):
            raise resp
        return resp

    def _route(self, prepared):
        url = prepared.url
        if url.endswith("/cookie-warning"):
            return self.cookie_response
        if url.endswith("/images?server=1"):
            return self.upload_response
        if "/categories/" in url and prepared.method == "POST":
            return self.effect_response
        if url == RESULT_URL:
            return self.result_response
        if url == IMAGE_URL:
            return self.image_response
        raise AssertionError(f"unexpected request {prepared.method} {url}")

    def urls(self):
        return [p.url for p in self.calls]

    def count(self, fragment: str) -> int:
        return sum(1 for u in self.urls() if fragment in u)


@pytest.fixture
def service():
    return FakePhotoFunia()

@pytest.fixture
def logger():
    return RecordingLogger()

@pytest.fixture
def client(service, logger):
    return PhotoFuniaClient(logger=logger, http=service)
