# error taxonomy, one class per failing step

from __future__ import annotations
from typing import Optional

import requests


class PhotoFuniaError(Exception):
    """
    Base error. `step` names the pipeline stage that failed and
    `status_code` holds the HTTP status when the server answered non-OK.
    The transport error (if any) is chained as `__cause__`.
    """
    step = "client"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

    @property
    def timed_out(self) -> bool:
        return isinstance(self.__cause__, requests.Timeout)


class SessionError(PhotoFuniaError):
    step = "session"

class RequestConstructionError(PhotoFuniaError):
    step = "request"

class UploadError(PhotoFuniaError):
    step = "upload"

class EmptyKeyError(PhotoFuniaError):
    """The upload reply decoded fine but carried no image key."""
    step = "upload"

class EffectRequestError(PhotoFuniaError):
    step = "effect"

class ResultFetchError(PhotoFuniaError):
    step = "result"

class ImageDownloadError(PhotoFuniaError):
    step = "download"


class ResultPageError(PhotoFuniaError):
    step = "scrape"

class ImageNotFoundError(ResultPageError):
    pass

class SrcAttributeError(ResultPageError):
    pass

class UnterminatedAttributeError(ResultPageError):
    pass


def transport_failure(cls, what: str, exc: requests.RequestException) -> PhotoFuniaError:
    """Builds the step error for a failed round-trip; timeouts say so."""
    if isinstance(exc, requests.Timeout):
        return cls(f"{what} timed out: {exc}")
    return cls(f"failed to {what}: {exc}")

def status_failure(cls, what: str, resp) -> PhotoFuniaError:
    return cls(
        f"server returned non-OK status for {what}: {resp.status_code} {resp.reason or ''}".rstrip(),
        status_code=resp.status_code,
    )
