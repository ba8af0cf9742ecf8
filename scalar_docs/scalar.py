"""Build a Scalar docs page from options and render it."""
import io
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TextIO

import httpx
from pydantic import BaseModel, ConfigDict, Field

from .config import settings
from .content import JSONText, normalize_spec_content, spec_content
from .errors import InvalidSpecError, InvalidTimeoutError, InvalidTitleError, ScalarDocsError, SpecRequiredError
from .escaping import escape_js_string
from .rendering import Renderer
from .sources import (
    SpecDocument,
    load_spec_from_file,
    load_spec_from_url,
    read_spec_document,
)

logger = logging.getLogger(__name__)


class Config(BaseModel):
    # Frozen once every option has been applied.
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    title: str = Field(..., min_length=1)
    language: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1, description="Spec JSON escaped for a script template literal")
    http_client: httpx.Client | None = Field(None, description="Caller-owned client; never closed here")
    timeout: float | None = None


@dataclass
class ConfigDraft:
    title: str
    language: str
    content: str = ""
    http_client: httpx.Client | None = None
    timeout: float | None = None

    @classmethod
    def defaults(cls) -> "ConfigDraft":
        return cls(
            title=settings.default_title,
            language=settings.default_language,
        )


Option = Callable[[ConfigDraft], None]


def _set_content(draft: ConfigDraft, content: str) -> None:
    if not content:
        raise InvalidSpecError("spec is not valid JSON")
    draft.content = escape_js_string(content)


def with_title(title: str) -> Option:
    def apply(draft: ConfigDraft) -> None:
        value = (title or "").strip()
        if not value:
            raise InvalidTitleError()
        draft.title = value
    return apply


def with_language(language: str) -> Option:
    def apply(draft: ConfigDraft) -> None:
        draft.language = (language or "").strip() or settings.default_language
    return apply


def with_http_client(client: httpx.Client | None) -> Option:
    # The caller owns client. None drops it: URL loads then open their own short-lived client.
    def apply(draft: ConfigDraft) -> None:
        draft.http_client = client
    return apply


def with_timeout(seconds: float) -> Option:
    def apply(draft: ConfigDraft) -> None:
        if seconds <= 0:
            raise InvalidTimeoutError(f"timeout must be positive, got {seconds}")
        draft.timeout = seconds
    return apply


def with_file(file_path: str) -> Option:
    def apply(draft: ConfigDraft) -> None:
        try:
            content = load_spec_from_file(file_path)
        except ScalarDocsError as e:
            raise e.wrap("failed to load spec from file") from e
        _set_content(draft, content)
    return apply


def with_url(spec_url: str) -> Option:
    def apply(draft: ConfigDraft) -> None:
        try:
            content = load_spec_from_url(spec_url, draft.http_client, draft.timeout)
        except ScalarDocsError as e:
            raise e.wrap("failed to load spec from URL") from e
        _set_content(draft, content)
    return apply


def with_spec(doc: SpecDocument | None) -> Option:
    def apply(draft: ConfigDraft) -> None:
        content = read_spec_document(doc)
        _set_content(draft, normalize_spec_content(JSONText(content)))
    return apply


def with_spec_content(content: str) -> Option:
    def apply(draft: ConfigDraft) -> None:
        text = (content or "").strip()
        if not text:
            raise InvalidSpecError()
        _set_content(draft, normalize_spec_content(JSONText(text)))
    return apply


def with_spec_object(value: Mapping[str, Any] | Callable[[], Mapping[str, Any]]) -> Option:
    """Use an in-memory spec: a mapping, or a zero-argument callable returning one."""
    def apply(draft: ConfigDraft) -> None:
        if isinstance(value, str) or value is None:
            raise InvalidSpecError("spec object must be a mapping or a callable returning one")
        _set_content(draft, normalize_spec_content(spec_content(value)))
    return apply


class Scalar:
    """A configured docs page.

    Options run in order and the first failure aborts construction. The
    resulting config is immutable, so one instance can render from many
    threads.
    """

    def __init__(self, *options: Option):
        draft = ConfigDraft.defaults()
        for opt in options:
            opt(draft)
        if not draft.content:
            raise SpecRequiredError()
        logger.debug("Built docs config %r (%s, %d content chars)", draft.title, draft.language, len(draft.content))
        self._config = Config(
            title=draft.title,
            language=draft.language,
            content=draft.content,
            http_client=draft.http_client,
            timeout=draft.timeout,
        )

    @property
    def config(self) -> Config:
        return self._config

    def render_docs(self, writer: TextIO, renderer: Renderer | None = None) -> None:
        (renderer or Renderer()).render(self._config, writer)

    def render_html(self, renderer: Renderer | None = None) -> str:
        buf = io.StringIO()
        self.render_docs(buf, renderer)
        return buf.getvalue()


class Builder:
    """Fluent interface collecting options for Scalar."""

    def __init__(self):
        self._options: list[Option] = []

    def _add(self, option: Option) -> "Builder":
        self._options.append(option)
        return self

    def title(self, title: str) -> "Builder":
        return self._add(with_title(title))

    def language(self, language: str) -> "Builder":
        return self._add(with_language(language))

    def file(self, file_path: str) -> "Builder":
        return self._add(with_file(file_path))

    def url(self, spec_url: str) -> "Builder":
        return self._add(with_url(spec_url))

    def spec(self, doc: SpecDocument | None) -> "Builder":
        return self._add(with_spec(doc))

    def content(self, content: str) -> "Builder":
        return self._add(with_spec_content(content))

    def spec_object(self, value: Mapping[str, Any] | Callable[[], Mapping[str, Any]]) -> "Builder":
        return self._add(with_spec_object(value))

    def http_client(self, client: httpx.Client | None) -> "Builder":
        return self._add(with_http_client(client))

    def timeout(self, seconds: float) -> "Builder":
        return self._add(with_timeout(seconds))

    def build(self) -> Scalar:
        return Scalar(*self._options)


def from_file(file_path: str, *options: Option) -> Scalar:
    return Scalar(with_file(file_path), *options)


def from_url(spec_url: str, *options: Option) -> Scalar:
    return Scalar(with_url(spec_url), *options)


def from_spec(doc: SpecDocument | None, *options: Option) -> Scalar:
    return Scalar(with_spec(doc), *options)


def from_content(content: str, *options: Option) -> Scalar:
    return Scalar(with_spec_content(content), *options)


def from_spec_object(value: Mapping[str, Any] | Callable[[], Mapping[str, Any]], *options: Option) -> Scalar:
    return Scalar(with_spec_object(value), *options)
