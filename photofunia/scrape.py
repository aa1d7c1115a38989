# pull the result image URL out of the result page

from __future__ import annotations
from typing import Union

from photofunia.errors import ImageNotFoundError, SrcAttributeError, UnterminatedAttributeError

IMG_MARKER = b'<img id="result-image"'
SRC_START = b'src="'
SRC_END = b'"'


def extract_image_url(html: Union[bytes, str]) -> str:
    """
    Plain text scan, not an HTML parse: find the result-image tag, then the
    first `src="` after it, then the closing quote. Each stage has its own
    error so callers can tell which one failed.
    """
    if isinstance(html, str):
        html = html.encode("utf-8")

    tag_at = html.find(IMG_MARKER)
    if tag_at == -1:
        raise ImageNotFoundError("could not find result image in HTML")

    src_at = html.find(SRC_START, tag_at)
    if src_at == -1:
        raise SrcAttributeError("could not find src attribute in image tag")
    src_at += len(SRC_START)

    end_at = html.find(SRC_END, src_at)
    if end_at == -1:
        raise UnterminatedAttributeError("could not find end of src attribute")

    return html[src_at:end_at].decode("utf-8", errors="replace")
