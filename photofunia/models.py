# upload reply and effect requests

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from photofunia.config import DEFAULT_CROP


def _int(v: Any) -> int:
    try:
        return int(v)
    except (TypeError, ValueError):
        return 0

def _obj(v: Any) -> Mapping[str, Any]:
    return v if isinstance(v, Mapping) else {}


@dataclass
class ImageVariant:
    url: str = ""
    width: int = 0
    height: int = 0

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "ImageVariant":
        return cls(
            url=str(data.get("url") or ""),
            width=_int(data.get("width")),
            height=_int(data.get("height")),
        )


@dataclass
class UploadedImage:
    highres: ImageVariant = field(default_factory=ImageVariant)
    preview: ImageVariant = field(default_factory=ImageVariant)
    thumb: ImageVariant = field(default_factory=ImageVariant)


@dataclass
class UploadResponse:
    """
    Reply of `POST /images?server=1`. Only `key` is used by the pipeline,
    the rest is kept for callers. Unknown fields are ignored.
    """
    key: str = ""
    server: int = 0
    existed: bool = False
    expiry: int = 0
    created: int = 0
    lifetime: int = 0
    image: UploadedImage = field(default_factory=UploadedImage)
    sid: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "UploadResponse":
        if not isinstance(payload, Mapping):
            raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
        body = _obj(payload.get("response"))
        image = _obj(body.get("image"))
        return cls(
            key=str(body.get("key") or ""),
            server=_int(body.get("server")),
            existed=bool(body.get("existed", False)),
            expiry=_int(body.get("expiry")),
            created=_int(body.get("created")),
            lifetime=_int(body.get("lifetime")),
            image=UploadedImage(
                highres=ImageVariant.from_payload(_obj(image.get("highres"))),
                preview=ImageVariant.from_payload(_obj(image.get("preview"))),
                thumb=ImageVariant.from_payload(_obj(image.get("thumb"))),
            ),
            sid=str(body.get("sid") or ""),
        )


@dataclass(frozen=True)
class EffectRequest:
    path: str                 # e.g. "faces/fat_maker"
    params: Dict[str, str]
    name: str = ""

    def with_image(self, image_key: str) -> Dict[str, str]:
        fields = dict(self.params)
        fields["image"] = image_key
        return fields

    def url(self, base_url: str) -> str:
        return f"{base_url}/categories/{self.path}?server=1"

    def referer(self, base_url: str) -> str:
        return f"{base_url}/categories/{self.path}"


def fat_maker() -> EffectRequest:
    return EffectRequest(
        path="faces/fat_maker",
        params={
            "current-category": "faces",
            "image:crop": DEFAULT_CROP,
            "size": "XXXXXL",
        },
        name="fatify",
    )

def clown(include_hat: bool) -> EffectRequest:
    return EffectRequest(
        path="all_effects/clown",
        params={
            "current-category": "all_effects",
            "image:crop": DEFAULT_CROP,
            "hat": "on" if include_hat else "off",
        },
        name="clownify",
    )
