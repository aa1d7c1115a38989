# build browser-like requests carrying the session cookie

from __future__ import annotations
from http import cookiejar
from typing import Optional

import requests
from requests.cookies import RequestsCookieJar

from photofunia.config import BROWSER_HEADERS, CONSENT_COOKIE, SESSION_COOKIE
from photofunia.errors import RequestConstructionError
from photofunia.log import Field, Logger
from photofunia.net.session import SessionManager


class NoStorePolicy(cookiejar.DefaultCookiePolicy):
    """Sends the cookies put in the jar by hand, never stores reply cookies."""

    def set_ok(self, cookie, request):
        return False


def pinned_jar(token: str) -> RequestsCookieJar:
    """Consent flag + session token, in that order, and nothing else."""
    jar = RequestsCookieJar(policy=NoStorePolicy())
    jar.set("accept_cookie", "true")
    jar.set(SESSION_COOKIE, token)
    return jar


class Transport:
    def __init__(self, http: requests.Session, sessions: SessionManager,
                 base_url: str, timeout: float, logger: Logger):
        self.http = http
        self.sessions = sessions
        self.base_url = base_url
        self.timeout = timeout
        self.logger = logger
        # requests merges the session jar into redirected requests
        self.http.cookies.set_policy(NoStorePolicy())

    def build_request(self, method: str, url: str,
                      body: Optional[bytes] = None) -> requests.PreparedRequest:
        """
        Prepares `method url` with the browser headers and the session cookie,
        acquiring the session first if needed. Content-Type is left to the
        caller. Raises RequestConstructionError or SessionError.
        """
        headers = dict(BROWSER_HEADERS)
        headers["Origin"] = self.base_url

        try:
            prepared = requests.Request(method, url, headers=headers, data=body).prepare()
        except (requests.RequestException, ValueError, TypeError) as e:
            raise RequestConstructionError(f"failed to create {method} request for {url}: {e}") from e

        token = self.sessions.ensure_session()
        # requests rebuilds the header from this jar on every redirect hop
        prepared.prepare_cookies(pinned_jar(token))
        prepared.headers["Cookie"] = f"{CONSENT_COOKIE}; {SESSION_COOKIE}={token}"
        return prepared

    def send(self, prepared: requests.PreparedRequest) -> requests.Response:
        """
        Sends following redirects; `response.url` is the final URL.
        `timeout` bounds the connect and each socket read of every hop, not
        the whole exchange.
        """
        self.logger.debug("sending request", Field("method", prepared.method), Field("url", prepared.url))
        return self.http.send(prepared, timeout=self.timeout, allow_redirects=True)
