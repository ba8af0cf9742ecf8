# scalar-docs: render an OpenAPI / Swagger spec into a static Scalar API reference page.
#  Load the spec from a file, an http(s) URL, raw JSON text, a mapping or a spec document.

from .content import JSONText, SpecMapping, SpecSupplier, normalize_spec_content
from .errors import (
    EmptyResponseError,
    HTTPRequestError,
    InvalidSpecError,
    InvalidTimeoutError,
    InvalidTitleError,
    InvalidURLError,
    RenderError,
    ScalarDocsError,
    SpecFileError,
    SpecRequiredError,
    UnsupportedSchemeError,
)
from .escaping import escape_js_string
from .rendering import Renderer
from .scalar import (
    Builder,
    Config,
    Scalar,
    from_content,
    from_file,
    from_spec,
    from_spec_object,
    from_url,
    with_file,
    with_http_client,
    with_language,
    with_spec,
    with_spec_content,
    with_spec_object,
    with_timeout,
    with_title,
    with_url,
)

__all__ = [
    "Builder",
    "Config",
    "Scalar",
    "Renderer",
    "from_content",
    "from_file",
    "from_spec",
    "from_spec_object",
    "from_url",
    "with_file",
    "with_http_client",
    "with_language",
    "with_spec",
    "with_spec_content",
    "with_spec_object",
    "with_timeout",
    "with_title",
    "with_url",
    "escape_js_string",
    "normalize_spec_content",
    "JSONText",
    "SpecMapping",
    "SpecSupplier",
    "ScalarDocsError",
    "InvalidTitleError",
    "InvalidSpecError",
    "InvalidURLError",
    "InvalidTimeoutError",
    "UnsupportedSchemeError",
    "SpecRequiredError",
    "HTTPRequestError",
    "EmptyResponseError",
    "SpecFileError",
    "RenderError",
]
