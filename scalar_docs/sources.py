"""Resolve a spec from a file path, an http(s) URL, or a spec document object."""
import logging
import os
from typing import Protocol
from urllib.parse import quote, unquote, urlparse

import httpx

from .config import settings
from .content import JSONText, normalize_spec_content
from .errors import (
    EmptyResponseError,
    HTTPRequestError,
    InvalidSpecError,
    InvalidURLError,
    SpecFileError,
    UnsupportedSchemeError,
)

logger = logging.getLogger(__name__)

FILE_SCHEME = "file"
FILE_PREFIX = "file://"
HTTP_SCHEMES = ("http", "https")

# Accept header: prefer JSON, allow YAML for content negotiation
SPEC_ACCEPT = "application/json, application/yaml, text/yaml, */*"


class SpecDocument(Protocol):
    # Anything that can hand back its spec text, e.g. a framework-generated document.
    def read_doc(self) -> str: ...


def default_http_client(timeout: float | None = None) -> httpx.Client:
    return httpx.Client(timeout=timeout if timeout is not None else settings.http_timeout)


def normalize_file_url(file_path: str) -> str:
    """Turn a bare path, a relative path, or a file:// URL into an absolute file:// URL.

    The text after ``file://`` is always read as a percent-encoded path, so
    ``file://spec.json`` means ``spec.json`` in the working directory rather
    than a host name. Bare paths are taken literally and encoded.
    """
    if file_path.startswith(FILE_PREFIX):
        path = unquote(file_path[len(FILE_PREFIX):])
    else:
        path = file_path
    return FILE_PREFIX + quote(os.path.abspath(path))


def read_file_from_url(file_url: str) -> bytes:
    scheme = urlparse(file_url).scheme
    if scheme != FILE_SCHEME:
        raise UnsupportedSchemeError(f"unsupported URL scheme: {scheme!r}")

    path = unquote(file_url[len(FILE_PREFIX):])
    logger.debug("Reading spec file %s", path)
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise SpecFileError(f"failed to read file {path}: {e}") from e


def load_spec_from_file(file_path: str) -> str:
    file_url = normalize_file_url(file_path)
    raw = read_file_from_url(file_url)
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise SpecFileError(f"file {file_url} is not valid UTF-8: {e}") from e
    return normalize_spec_content(JSONText(text))


def validate_url(raw_url: str) -> None:
    # Raise InvalidURLError / UnsupportedSchemeError unless raw_url is an http(s) URL.
    if not raw_url or not raw_url.strip():
        raise InvalidURLError()
    try:
        parsed = urlparse(raw_url)
    except ValueError as e:
        raise InvalidURLError(f"invalid URL provided: {e}") from e
    if parsed.scheme not in HTTP_SCHEMES:
        raise UnsupportedSchemeError(f"unsupported URL scheme: {parsed.scheme!r}")


def fetch_from_url(spec_url: str, client: httpx.Client) -> bytes:
    """GET spec_url with client, bounded by the client's timeout."""
    headers = {"Accept": SPEC_ACCEPT, "User-Agent": settings.user_agent}
    logger.debug("Fetching spec from %s", spec_url)
    try:
        r = client.get(spec_url, headers=headers)
    except httpx.RequestError as e:
        raise HTTPRequestError(f"HTTP request failed: {e!s}") from e

    if not r.is_success:
        raise HTTPRequestError(
            f"HTTP request failed: HTTP {r.status_code} {r.reason_phrase}",
            status_code=r.status_code,
        )

    try:
        content = r.read()
    except httpx.HTTPError as e:
        raise HTTPRequestError(f"failed to read response body: {e!s}", status_code=r.status_code) from e

    if not content:
        raise EmptyResponseError()
    logger.debug("Fetched %d bytes from %s", len(content), spec_url)
    return content


def load_spec_from_url(spec_url: str, client: httpx.Client | None = None, timeout: float | None = None) -> str:
    # Without a client, a short-lived one is opened with timeout (or the configured default).
    validate_url(spec_url)
    if client is None:
        with default_http_client(timeout) as owned:
            content = fetch_from_url(spec_url, owned)
    else:
        content = fetch_from_url(spec_url, client)
    text = content.decode("utf-8-sig", errors="replace")
    return normalize_spec_content(JSONText(text))


def read_spec_document(doc: SpecDocument | None) -> str:
    if doc is None:
        raise InvalidSpecError()
    content = doc.read_doc()
    if not content:
        raise InvalidSpecError()
    return content
