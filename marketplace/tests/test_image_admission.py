from __future__ import annotations

import asyncio
import gzip

import httpx
import pytest

from marketplace.domain.listings.exceptions import ImageRejectedError
from marketplace.infrastructure.image_admission import RemoteImageAdmission
from marketplace.shared.config import ImageAdmissionConfig
from marketplace.tests.helpers import image_transport, png_bytes, png_header

URL = "https://images.example.com/picture.png"


def _admission(transport: httpx.AsyncBaseTransport) -> RemoteImageAdmission:
    return RemoteImageAdmission(ImageAdmissionConfig(), transport=transport)


def _admit(admission: RemoteImageAdmission, timeout: float = 5.0):
    return asyncio.run(admission.admit(URL, timeout=timeout))


def test_small_png_is_admitted() -> None:
    admission = _admission(image_transport(png_bytes(800, 600)))

    result = _admit(admission)

    assert (result.width, result.height) == (800, 600)
    assert result.format == "PNG"
    assert result.content_type == "image/png"


def test_declared_size_over_cap_is_rejected_before_download() -> None:
    seen: list[str] = []
    admission = _admission(
        image_transport(png_bytes(10, 10), declared_length=10_000_000, seen=seen)
    )

    with pytest.raises(ImageRejectedError) as exc_info:
        _admit(admission)

    assert exc_info.value.reason == "too_large"
    assert seen == ["HEAD"]


def test_oversized_dimensions_are_rejected_after_sniff() -> None:
    admission = _admission(image_transport(png_header(5000, 5000)))

    with pytest.raises(ImageRejectedError) as exc_info:
        _admit(admission)

    assert exc_info.value.reason == "dimensions"
    assert exc_info.value.context["width"] == 5000
    assert exc_info.value.status == 400


def test_non_image_content_type_is_rejected() -> None:
    admission = _admission(image_transport(b"<html></html>", content_type="text/html"))

    with pytest.raises(ImageRejectedError) as exc_info:
        _admit(admission)

    assert exc_info.value.reason == "content_type"


def test_undecodable_body_is_rejected() -> None:
    admission = _admission(image_transport(b"definitely not a png"))

    with pytest.raises(ImageRejectedError) as exc_info:
        _admit(admission)

    assert exc_info.value.reason == "undecodable"


def test_non_success_status_is_rejected() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(404))

    with pytest.raises(ImageRejectedError) as exc_info:
        _admit(_admission(transport))

    assert exc_info.value.reason == "status"
    assert exc_info.value.context["status"] == 404


def test_bad_content_length_is_rejected() -> None:
    transport = httpx.MockTransport(
        lambda request: httpx.Response(200, headers={"content-length": "lots"})
    )

    with pytest.raises(ImageRejectedError) as exc_info:
        _admit(_admission(transport))

    assert exc_info.value.reason == "bad_content_length"


def test_transport_failure_is_rejection() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ImageRejectedError) as exc_info:
        _admit(_admission(httpx.MockTransport(handler)))

    assert exc_info.value.reason == "unreachable"


def test_slow_remote_hits_deadline() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, headers={"content-type": "image/png"})

    with pytest.raises(ImageRejectedError) as exc_info:
        _admit(_admission(httpx.MockTransport(handler)), timeout=0.05)

    assert exc_info.value.reason == "timeout"


def test_body_read_stops_at_sniff_cap() -> None:
    chunk_size = 64 << 10
    yielded = 0

    async def body():
        nonlocal yielded
        yield png_bytes(800, 600)
        yielded += 1
        for _ in range(64):
            yield b"\x00" * chunk_size
            yielded += 1

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "HEAD":
            return httpx.Response(200, headers={"content-type": "image/png"})
        return httpx.Response(200, headers={"content-type": "image/png"}, content=body())

    result = _admit(_admission(httpx.MockTransport(handler)))

    assert (result.width, result.height) == (800, 600)
    assert yielded <= (512 << 10) // chunk_size + 1


def test_cancellation_propagates() -> None:
    started = asyncio.Event()

    async def handler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(10)
        return httpx.Response(200)

    async def scenario() -> None:
        task = asyncio.create_task(
            _admission(httpx.MockTransport(handler)).admit(URL, timeout=30)
        )
        await started.wait()
        task.cancel()
        await task

    with pytest.raises(asyncio.CancelledError):
        asyncio.run(scenario())


def test_compressed_body_is_refused_without_inflating(monkeypatch: pytest.MonkeyPatch) -> None:
    cap = ImageAdmissionConfig().sniff_bytes
    bomb = gzip.compress(png_bytes(800, 600) + b"\x00" * (60 << 20))
    accept_encodings: list[str | None] = []
    held_chunks: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        headers = {"content-type": "image/png", "content-length": str(len(bomb))}
        if request.method == "HEAD":
            return httpx.Response(200, headers=headers)
        accept_encodings.append(request.headers.get("accept-encoding"))
        return httpx.Response(200, headers={**headers, "content-encoding": "gzip"}, content=bomb)

    original_aiter_bytes = httpx.Response.aiter_bytes

    async def recording_aiter_bytes(self, *args, **kwargs):
        async for chunk in original_aiter_bytes(self, *args, **kwargs):
            held_chunks.append(len(chunk))
            yield chunk

    monkeypatch.setattr(httpx.Response, "aiter_bytes", recording_aiter_bytes)

    with pytest.raises(ImageRejectedError) as exc_info:
        _admit(_admission(httpx.MockTransport(handler)))

    assert exc_info.value.reason == "encoding"
    assert exc_info.value.context["content_encoding"] == "gzip"
    assert accept_encodings == ["identity"]
    assert all(size <= cap for size in held_chunks)


def test_identity_encoding_is_accepted() -> None:
    body = png_bytes(32, 16)

    def handler(request: httpx.Request) -> httpx.Response:
        headers = {"content-type": "image/png"}
        if request.method == "GET":
            headers["content-encoding"] = "identity"
        return httpx.Response(200, headers=headers, stream=httpx.ByteStream(body))

    result = _admit(_admission(httpx.MockTransport(handler)))

    assert (result.width, result.height) == (32, 16)
