"""Tests for scalar_docs.rendering: bundled assets and page rendering."""

from __future__ import annotations

import io
import json
import re

import pytest

from scalar_docs import Scalar, from_content, from_spec_object, with_language, with_spec_content, with_title
from scalar_docs.config import settings
from scalar_docs.errors import RenderError
from scalar_docs.escaping import unescape_js_string
from scalar_docs.rendering import Assets, Renderer, load_assets, template_literal

from .conftest import VALID_JSON, VALID_SPEC


def _spec_literal(html: str) -> str:
    # Pull the template literal back out; escaped backticks never end it early.
    match = re.search(r"window\.__SCALAR_SPEC__ = `((?:\\.|[^`\\])*)`;", html, re.S)
    assert match, "spec literal not found in page"
    return match.group(1)


def _embedded_spec(html: str) -> str:
    return unescape_js_string(_spec_literal(html))


class TestAssets:
    def test_loaded_once(self) -> None:
        assert load_assets() is load_assets()

    def test_bundled_files_present(self) -> None:
        assets = load_assets()
        assert "{{ content|template_literal|safe }}" in assets.template_source
        assert "createApiReference" in assets.script
        assert assets.script_block.startswith("<script>")
        assert assets.script_block.endswith("</script>")


class TestRenderDocs:
    def test_writes_page(self) -> None:
        scalar = Scalar(with_title("Test API"), with_language("pt-BR"), with_spec_content(VALID_JSON))
        buf = io.StringIO()
        scalar.render_docs(buf)
        html = buf.getvalue()
        assert html.startswith("<!doctype html>")
        assert '<html lang="pt-BR">' in html
        assert "<title>Test API</title>" in html
        assert f'<script src="{settings.cdn_url}"></script>' in html
        assert load_assets().script in html

    def test_spec_survives_embedding(self) -> None:
        html = from_content(VALID_JSON).render_html()
        assert _embedded_spec(html) == VALID_JSON

    def test_tricky_spec_survives_embedding(self) -> None:
        spec = {"info": {"title": "Tick ` quote \" slash \\ newline \n tab \t", "version": "1"}}
        html = from_spec_object(spec).render_html()
        assert json.loads(_embedded_spec(html)) == spec

    def test_title_is_html_escaped(self) -> None:
        html = Scalar(with_title("<b>API</b> & co"), with_spec_content(VALID_JSON)).render_html()
        assert "<title>&lt;b&gt;API&lt;/b&gt; &amp; co</title>" in html

    def test_mapping_cannot_close_script(self) -> None:
        spec = dict(VALID_SPEC, info={"title": "</script><script>alert(1)</script>", "version": "1"})
        html = from_spec_object(spec).render_html()
        assert "</script><script>alert(1)" not in html
        assert json.loads(_embedded_spec(html)) == spec

    def test_none_writer(self) -> None:
        with pytest.raises(RenderError, match="writer"):
            from_content(VALID_JSON).render_docs(None)

    def test_custom_cdn_url(self) -> None:
        renderer = Renderer(cdn_url="https://cdn.example.com/scalar.js")
        html = from_content(VALID_JSON).render_html(renderer)
        assert '<script src="https://cdn.example.com/scalar.js"></script>' in html


class TestRenderErrors:
    def test_template_parse_error(self) -> None:
        renderer = Renderer(assets=Assets(template_source="{% if %}", script=""))
        with pytest.raises(RenderError, match="failed to parse template"):
            from_content(VALID_JSON).render_html(renderer)

    def test_template_execution_error(self) -> None:
        renderer = Renderer(assets=Assets(template_source="{{ missing.field }}", script=""))
        with pytest.raises(RenderError, match="failed to execute template"):
            from_content(VALID_JSON).render_html(renderer)


# ── inline script safety ────────────────────────────────────────────


class TestTemplateLiteralFilter:
    """Interpolation and tag-closing sequences are neutralized at render time."""

    def test_guards_sequences(self) -> None:
        assert template_literal("a${b}</c><!--d") == "a\\${b}<\\/c><\\!--d"

    def test_plain_text_unchanged(self) -> None:
        assert template_literal('{\\"a\\":1}') == '{\\"a\\":1}'

    def test_interpolation_in_mapping_is_inert(self) -> None:
        spec = dict(VALID_SPEC, info={"title": "${alert(1)}", "version": "1"})
        html = from_spec_object(spec).render_html()
        assert re.search(r"(?<!\\)\$\{", _spec_literal(html)) is None
        assert json.loads(_embedded_spec(html)) == spec

    def test_interpolation_in_text_is_inert(self) -> None:
        text = '{"info":{"title":"${document.cookie}","version":"1"}}'
        html = from_content(text).render_html()
        assert re.search(r"(?<!\\)\$\{", _spec_literal(html)) is None
        assert _embedded_spec(html) == text

    def test_text_cannot_close_script(self) -> None:
        text = '{"info":{"title":"</script><script>alert(1)</script>"}}'
        html = from_content(text).render_html()
        assert "</script><script>alert(1)" not in html
        assert "</" not in _spec_literal(html)
        assert json.loads(_embedded_spec(html)) == json.loads(text)

    def test_text_cannot_open_html_comment(self) -> None:
        text = '{"description":"<!-- <script>"}'
        html = from_content(text).render_html()
        assert "<!--" not in _spec_literal(html)
        assert _embedded_spec(html) == text

    def test_escaped_backslash_before_interpolation(self) -> None:
        spec = {"pattern": "\\${x}"}
        html = from_spec_object(spec).render_html()
        assert json.loads(_embedded_spec(html)) == spec
