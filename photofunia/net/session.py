# lazy PHPSESSID acquisition

from __future__ import annotations
from typing import Optional

import requests

from photofunia.config import BROWSER_HEADERS, CONSENT_COOKIE, SESSION_COOKIE
from photofunia.errors import SessionError, status_failure, transport_failure
from photofunia.log import Field, Logger


class SessionManager:
    """
    Holds the server-issued session token. The token is fetched once, on the
    first request that needs it, and reused for the lifetime of the client.
    No locking: one client per thread, or serialize access yourself.
    """

    def __init__(self, http: requests.Session, base_url: str, timeout: float,
                 logger: Logger, token: Optional[str] = None):
        self.http = http
        self.base_url = base_url
        self.timeout = timeout
        self.logger = logger
        self.token = token or ""

    def ensure_session(self) -> str:
        if self.token:
            return self.token

        self.logger.info(f"generating new {SESSION_COOKIE}")
        url = f"{self.base_url}/cookie-warning"
        headers = dict(BROWSER_HEADERS)
        headers["Origin"] = self.base_url
        headers["Cookie"] = CONSENT_COOKIE

        try:
            prepared = requests.Request("GET", url, headers=headers).prepare()
        except (requests.RequestException, ValueError) as e:
            raise SessionError(f"failed to create HTTP request for {SESSION_COOKIE}: {e}") from e

        try:
            resp = self.http.send(prepared, timeout=self.timeout, allow_redirects=True)
        except requests.RequestException as e:
            raise transport_failure(SessionError, f"perform request for {SESSION_COOKIE}", e) from e

        if resp.status_code != 200:
            raise status_failure(SessionError, f"{SESSION_COOKIE} request", resp)

        # first match, the reply may set it more than once (other path or domain)
        token = next((c.value for c in resp.cookies if c.name == SESSION_COOKIE), "")
        if not token:
            raise SessionError(f"{SESSION_COOKIE} cookie not found in response")

        self.token = token
        self.logger.debug("session acquired", Field("cookie", SESSION_COOKIE))
        return token
