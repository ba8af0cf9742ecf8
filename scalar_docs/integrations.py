"""FastAPI helpers: use an app's own OpenAPI schema and serve the rendered page."""
import json
import logging
import threading

from fastapi import APIRouter, FastAPI
from fastapi.responses import HTMLResponse

from .scalar import Option, Scalar, with_spec, with_title

logger = logging.getLogger(__name__)

DEFAULT_DOCS_PATH = "/scalar"


class FastAPISpecDocument:
    """Spec document backed by ``app.openapi()``."""

    def __init__(self, app: FastAPI):
        self.app = app

    def read_doc(self) -> str:
        schema = self.app.openapi()
        if not schema:
            return ""
        return json.dumps(schema)


def docs_router(scalar: Scalar, path: str = DEFAULT_DOCS_PATH, include_in_schema: bool = False) -> APIRouter:
    # Router serving a prebuilt page; rendered once, the config never changes.
    router = APIRouter()
    html = scalar.render_html()

    @router.get(path, response_class=HTMLResponse, include_in_schema=include_in_schema)
    def scalar_docs_page():
        return HTMLResponse(html)

    return router


def mount_docs(app: FastAPI, path: str = DEFAULT_DOCS_PATH, *options: Option) -> None:
    """Serve Scalar docs for ``app`` at ``path``.

    The page is built on the first request, after every route has been
    registered. Title defaults to the app title; extra options run after it.
    """
    lock = threading.Lock()
    cache: dict[str, str] = {}

    def build_page() -> str:
        with lock:
            if "html" not in cache:
                scalar = Scalar(with_title(app.title), with_spec(FastAPISpecDocument(app)), *options)
                cache["html"] = scalar.render_html()
                logger.debug("Built Scalar docs page for %r at %s", app.title, path)
            return cache["html"]

    @app.get(path, response_class=HTMLResponse, include_in_schema=False)
    def scalar_docs_page():
        return HTMLResponse(build_page())
