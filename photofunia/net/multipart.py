# multipart/form-data bodies with a fixed boundary

from __future__ import annotations
from typing import Mapping


def content_type(boundary: str) -> str:
    return f"multipart/form-data; boundary={boundary}"

def _part(boundary: str, name: str, value: str) -> bytes:
    return (
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="{name}"\r\n\r\n'
        f"{value}\r\n"
    ).encode("utf-8")

def _file_part(boundary: str, name: str, filename: str, data: bytes) -> bytes:
    header = (
        f"--{boundary}\r\n"
        f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
        f"Content-Type: application/octet-stream\r\n\r\n"
    ).encode("utf-8")
    return header + data + b"\r\n"

def _closing(boundary: str) -> bytes:
    return f"--{boundary}--\r\n".encode("utf-8")

def encode_file(name: str, filename: str, data: bytes, boundary: str) -> bytes:
    """Body with a single file part."""
    return _file_part(boundary, name, filename, data) + _closing(boundary)

def encode_fields(fields: Mapping[str, str], boundary: str) -> bytes:
    """Body with one part per field, in mapping order."""
    body = b""
    for name, value in fields.items():
        body += _part(boundary, name, value)
    return body + _closing(boundary)
