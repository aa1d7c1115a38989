# constants of the service protocol and env settings

from __future__ import annotations
import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

BASE_URL = "https://photofunia.com"

# the service checks these literals, keep them as they are
UPLOAD_BOUNDARY = "----WebKitFormBoundaryx4CBHpJEw9pPEXE4"
EFFECT_BOUNDARY = "----WebKitFormBoundaryL3VFyS6LkNI3s7UM"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/138.0.0.0 Safari/537.36"
)

SESSION_COOKIE = "PHPSESSID"
CONSENT_COOKIE = "accept_cookie=true"

BROWSER_HEADERS = {
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,"
        "image/webp,image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Cache-Control": "max-age=0",
    "Connection": "keep-alive",
    "User-Agent": USER_AGENT,
}
UPLOAD_ACCEPT = "application/json, text/javascript, */*; q=0.01"
IMAGE_ACCEPT = "image/avif,image/webp,image/apng,image/svg+xml,image/*,*/*;q=0.8"

DEFAULT_TIMEOUT = 30.0
DEFAULT_CROP = "0.0.961.1093"


def _getenv_bool(name: str, default: bool) -> bool:
    v = os.getenv(name, str(default)).strip().lower()
    return v in ("1", "true", "yes", "y", "on")

def _getenv_timeout(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if value > 0 else default

@dataclass(frozen=True)
class Settings:
    BASE_URL: str
    TIMEOUT_SEC: float

    # logs
    LOG_TO_STDERR: bool
    LOG_DEBUG: bool

def load_settings() -> Settings:
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
    else:
        load_dotenv()

    base_url = os.getenv("PHOTOFUNIA_BASE_URL", BASE_URL).strip().rstrip("/") or BASE_URL

    return Settings(
        BASE_URL=base_url,
        TIMEOUT_SEC=_getenv_timeout("PHOTOFUNIA_TIMEOUT_SEC", DEFAULT_TIMEOUT),
        LOG_TO_STDERR=_getenv_bool("PHOTOFUNIA_LOG", False),
        LOG_DEBUG=_getenv_bool("PHOTOFUNIA_DEBUG", False),
    )
