"""Image loading primitives with cross-platform TLS guidance."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import io
from pathlib import Path
import posixpath
import ssl
import time
from typing import Protocol, runtime_checkable
from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit

import httpx
from PIL import Image, UnidentifiedImageError

from streettype.core.exceptions import AssetLoadError, TLSCertificateError


CACHE_BUSTER_PARAM = "t"
USER_AGENT = "streettype"


@dataclass(frozen=True, slots=True)
class ImageInfo:
    """Decoded image dimensions reported by a loader."""

    url: str
    width: int
    height: int


@runtime_checkable
class ImageLoader(Protocol):
    """Asynchronously fetch and decode an image, raising ``AssetLoadError``."""

    async def load(self, url: str) -> ImageInfo: ...


def add_cache_buster(url: str, stamp: int | None = None) -> str:
    """Append a ``t=<milliseconds>`` query parameter to ``url``."""
    if stamp is None:
        stamp = int(time.time() * 1000)
    parts = urlsplit(url)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query = [(key, value) for key, value in query if key != CACHE_BUSTER_PARAM]
    query.append((CACHE_BUSTER_PARAM, str(stamp)))
    return urlunsplit(parts._replace(query=urlencode(query)))


def strip_cache_buster(url: str) -> str:
    """Remove the cache-busting parameter so URLs can be used as cache keys."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key != CACHE_BUSTER_PARAM
    ]
    return urlunsplit(parts._replace(query=urlencode(query)))


def decode_dimensions(url: str, data: bytes) -> ImageInfo:
    """Decode ``data`` with Pillow and return its dimensions."""
    try:
        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        raise AssetLoadError(url, "not a decodable image") from exc
    if not width or not height:
        raise AssetLoadError(url, "image has no dimensions")
    return ImageInfo(url=url, width=width, height=height)


def _tls_help(url: str) -> str:
    return (
        "TLS certificate verification failed while downloading "
        f"'{url}'. On macOS run the Python 'Install Certificates.command' "
        "(from the python.org installer). On Windows run 'py -m pip install --upgrade certifi'. "
        "On Linux install your 'ca-certificates' package (apt/yum/apk). "
        "Also check system date/time and any proxy or corporate SSL inspection."
    )


def _is_cert_error(error: BaseException) -> bool:
    current: BaseException | None = error
    while current is not None:
        if isinstance(current, ssl.SSLCertVerificationError):
            return True
        current = current.__cause__ or current.__context__
    return False


class HttpImageLoader:
    """Load images over HTTP(S), resolving relative URLs against ``base_url``.

    Relative paths follow browser semantics: ``/assets/`` resolves against the
    host root while ``./assets/`` and ``../assets/`` resolve against the
    directory of ``base_url``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        client: httpx.AsyncClient | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"
        self._headers = {"User-Agent": USER_AGENT, "Accept": "image/*, */*"}
        self._headers.update(headers or {})
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(headers=self._headers, follow_redirects=True)
        return self._client

    def resolve(self, url: str) -> str:
        return urljoin(self.base_url, url)

    async def load(self, url: str) -> ImageInfo:
        target = self.resolve(url)
        try:
            response = await self._get_client().get(target)
        except httpx.ConnectError as exc:
            if _is_cert_error(exc):
                raise TLSCertificateError(url, _tls_help(target)) from exc
            raise AssetLoadError(url, str(exc)) from exc
        except httpx.HTTPError as exc:
            raise AssetLoadError(url, str(exc)) from exc
        if response.status_code != 200:
            raise AssetLoadError(url, f"HTTP {response.status_code}")
        return decode_dimensions(url, response.content)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None


class FileImageLoader:
    """Load images from a local directory acting as the web root."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).expanduser().resolve()

    def resolve(self, url: str) -> Path | None:
        path = urlsplit(url).path
        normalised = posixpath.normpath(path.lstrip("/")) if path else ""
        if not normalised or normalised == "." or normalised.startswith(".."):
            return None
        return self.root / normalised

    async def load(self, url: str) -> ImageInfo:
        target = self.resolve(url)
        if target is None:
            raise AssetLoadError(url, "path escapes the asset root")
        try:
            data = await asyncio.to_thread(target.read_bytes)
        except OSError as exc:
            raise AssetLoadError(url, exc.strerror or str(exc)) from exc
        return decode_dimensions(url, data)

    async def aclose(self) -> None:
        return


__all__ = [
    "CACHE_BUSTER_PARAM",
    "FileImageLoader",
    "HttpImageLoader",
    "ImageInfo",
    "ImageLoader",
    "add_cache_buster",
    "decode_dimensions",
    "strip_cache_buster",
]
