from __future__ import annotations

import io
import struct
import zlib

import httpx
from PIL import Image

from marketplace.domain.users.entities import HashedPassword
from marketplace.domain.users.repositories import PasswordHasher


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.hash_calls = 0
        self.verify_calls = 0

    def hash(self, password: str) -> HashedPassword:
        self.hash_calls += 1
        return HashedPassword(salt=b"saltsalt", digest=f"hashed:{password}".encode())

    def verify(self, password: str, hashed: HashedPassword) -> bool:
        self.verify_calls += 1
        return hashed.digest == f"hashed:{password}".encode()


def png_bytes(width: int, height: int) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), color=(200, 10, 10)).save(buf, format="PNG")
    return buf.getvalue()


def png_header(width: int, height: int) -> bytes:
    """A PNG whose IHDR claims ``width`` x ``height`` without any real pixel data."""

    def chunk(kind: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(kind + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + kind + data + struct.pack(">I", crc)

    ihdr = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return b"\x89PNG\r\n\x1a\n" + chunk(b"IHDR", ihdr) + chunk(b"IDAT", zlib.compress(b"\x00"))


def image_transport(
    body: bytes,
    *,
    content_type: str = "image/png",
    declared_length: int | None = None,
    seen: list[str] | None = None,
) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request.method)
        length = declared_length if declared_length is not None else len(body)
        headers = {"content-type": content_type, "content-length": str(length)}
        if request.method == "HEAD":
            return httpx.Response(200, headers=headers)
        return httpx.Response(
            200, headers={"content-type": content_type}, stream=httpx.ByteStream(body)
        )

    return httpx.MockTransport(handler)
