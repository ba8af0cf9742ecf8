"""Render a Scalar config into the bundled HTML page with Jinja2."""
import logging
from dataclasses import dataclass
from functools import lru_cache
from importlib import resources
from typing import TYPE_CHECKING, TextIO

from jinja2 import Environment, StrictUndefined, TemplateError, TemplateSyntaxError, select_autoescape

from .config import settings
from .errors import RenderError

if TYPE_CHECKING:
    from .scalar import Config

logger = logging.getLogger(__name__)

TEMPLATE_PATH = ("templates", "index.html")
SCRIPT_PATH = ("templates", "scripts", "api_reference.js")

# Sequences still live inside a backtick literal in an inline <script> after escape_js_string.
# Each replacement is a redundant JS escape that decodes back to the same characters.
_TEMPLATE_LITERAL_GUARDS = (
    ("${", "\\${"),
    ("</", "<\\/"),
    ("<!--", "<\\!--"),
)


def template_literal(escaped: str) -> str:
    """Jinja filter: make escape_js_string output inert inside an inline script literal."""
    for seq, repl in _TEMPLATE_LITERAL_GUARDS:
        escaped = escaped.replace(seq, repl)
    return escaped


@dataclass(frozen=True)
class Assets:
    template_source: str
    script: str

    @property
    def script_block(self) -> str:
        return f"<script>{self.script}</script>"


def _read_package_text(parts: tuple[str, ...]) -> str:
    node = resources.files(__package__)
    for part in parts:
        node = node.joinpath(part)
    return node.read_text(encoding="utf-8")


@lru_cache(maxsize=1)
def load_assets() -> Assets:
    # Read once per process from package data.
    template_source = _read_package_text(TEMPLATE_PATH)
    script = _read_package_text(SCRIPT_PATH)
    return Assets(template_source=template_source, script=script)


class Renderer:
    """Writes the docs page for a Config.

    Title and language are HTML-escaped; the spec content, already escaped
    for the script template literal, goes through the template_literal filter.
    """

    def __init__(self, assets: Assets | None = None, cdn_url: str | None = None):
        self.assets = assets or load_assets()
        self.cdn_url = cdn_url or settings.cdn_url
        self._env = Environment(
            autoescape=select_autoescape(["html", "xml"], default_for_string=True),
            undefined=StrictUndefined,
        )
        self._env.filters["template_literal"] = template_literal

    def _template(self):
        try:
            return self._env.from_string(self.assets.template_source)
        except TemplateSyntaxError as e:
            raise RenderError(f"failed to parse template: {e}") from e

    def render(self, config: "Config", writer: TextIO) -> None:
        if writer is None:
            raise RenderError("writer cannot be None")
        template = self._template()
        try:
            for chunk in template.generate(
                title=config.title,
                language=config.language,
                content=config.content,
                script=self.assets.script_block,
                cdn_url=self.cdn_url,
            ):
                writer.write(chunk)
        except TemplateError as e:
            raise RenderError(f"failed to execute template: {e}") from e
        logger.debug("Rendered docs page %r", config.title)
