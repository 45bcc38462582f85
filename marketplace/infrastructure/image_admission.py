# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Admission of user supplied remote image URLs.

Phase one is a HEAD probe (status, declared length, declared type). Phase two
streams at most ``sniff_bytes`` of the body and decodes only the image header
to read its dimensions. Both phases share one deadline.
"""

from __future__ import annotations

import asyncio
import warnings
from io import BytesIO

import httpx
from PIL import Image, UnidentifiedImageError

from marketplace.domain.listings.entities import ImageProbeResult
from marketplace.domain.listings.exceptions import ImageRejectedError
from marketplace.domain.listings.repositories import ImageAdmissionPort
from marketplace.infrastructure.observability import record_image_admission
from marketplace.shared.config import ImageAdmissionConfig
from marketplace.shared.logging import RequestContext, context_log

ALLOWED_FORMATS = ("PNG", "JPEG", "GIF")
_IDENTITY_ENCODINGS = ("", "identity")


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


class RemoteImageAdmission(ImageAdmissionPort):
    def __init__(
        self,
        config: ImageAdmissionConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    def _client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=self._transport,
            timeout=timeout,
            follow_redirects=True,
            max_redirects=self._config.max_redirects,
        )

    async def admit(
        self, url: str, *, timeout: float | None = None, ctx: RequestContext | None = None
    ) -> ImageProbeResult:
        log = context_log(ctx)
        deadline = timeout if timeout is not None else self._config.timeout
        try:
            async with self._client(deadline) as client:
                result = await asyncio.wait_for(self._probe(client, url), timeout=deadline)
        except ImageRejectedError as exc:
            log.info(f"image: rejected reason={exc.reason}")
            record_image_admission(exc.reason)
            raise
        except (TimeoutError, httpx.TimeoutException) as exc:
            log.info(f"image: rejected reason=timeout deadline={deadline}s")
            record_image_admission("timeout")
            raise ImageRejectedError("timeout") from exc
        except httpx.InvalidURL as exc:
            record_image_admission("invalid_url")
            raise ImageRejectedError("invalid_url") from exc
        except httpx.HTTPError as exc:
            log.info(f"image: rejected reason=unreachable error={type(exc).__name__}")
            record_image_admission("unreachable")
            raise ImageRejectedError("unreachable") from exc

        log.info(
            f"image: admitted format={result.format} size={result.width}x{result.height}"
        )
        record_image_admission("admitted")
        return result

    async def _probe(self, client: httpx.AsyncClient, url: str) -> ImageProbeResult:
        content_type, declared_length = await self._head(client, url)
        prefix = await self._read_prefix(client, url)
        image_format, width, height = self._decode_header(prefix)
        if width > self._config.max_width or height > self._config.max_height:
            raise ImageRejectedError("dimensions", width=width, height=height)
        return ImageProbeResult(
            content_type=content_type,
            declared_length=declared_length,
            width=width,
            height=height,
            format=image_format,
        )

    async def _head(self, client: httpx.AsyncClient, url: str) -> tuple[str | None, int | None]:
        response = await client.head(url)
        if not _is_success(response.status_code):
            raise ImageRejectedError("status", status=response.status_code)

        declared_length: int | None = None
        raw_length = response.headers.get("content-length")
        if raw_length is not None:
            try:
                declared_length = int(raw_length)
            except ValueError:
                raise ImageRejectedError("bad_content_length") from None
            if declared_length < 0:
                raise ImageRejectedError("bad_content_length")
            if declared_length > self._config.max_bytes:
                raise ImageRejectedError(
                    "too_large", declared=declared_length, limit=self._config.max_bytes
                )

        content_type = response.headers.get("content-type")
        if content_type and not content_type.lower().startswith("image/"):
            raise ImageRejectedError("content_type", content_type=content_type)
        return content_type, declared_length

    async def _read_prefix(self, client: httpx.AsyncClient, url: str) -> bytes:
        limit = self._config.sniff_bytes
        buffer = bytearray()
        # The cap counts wire bytes, so compressed bodies are refused.
        async with client.stream("GET", url, headers={"Accept-Encoding": "identity"}) as response:
            if not _is_success(response.status_code):
                raise ImageRejectedError("status", status=response.status_code)
            encoding = response.headers.get("content-encoding", "").strip().lower()
            if encoding not in _IDENTITY_ENCODINGS:
                raise ImageRejectedError("encoding", content_encoding=encoding)
            async for chunk in response.aiter_raw():
                buffer.extend(chunk[: limit - len(buffer)])
                if len(buffer) >= limit:
                    break
        return bytes(buffer)

    @staticmethod
    def _decode_header(prefix: bytes) -> tuple[str, int, int]:
        # Image.open only parses the header; pixel data is never loaded.
        try:
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", Image.DecompressionBombWarning)
                with Image.open(BytesIO(prefix), formats=list(ALLOWED_FORMATS)) as image:
                    width, height = image.size
                    image_format = image.format or "unknown"
        except Image.DecompressionBombError as exc:
            raise ImageRejectedError("dimensions") from exc
        except (UnidentifiedImageError, OSError, ValueError, SyntaxError) as exc:
            raise ImageRejectedError("undecodable") from exc
        return image_format, width, height


__all__ = ["ALLOWED_FORMATS", "RemoteImageAdmission"]
