"""Errors raised while building a Scalar page or rendering it."""
import copy


class ScalarDocsError(Exception):
    """Base class for every error raised by scalar_docs."""

    default_message = "scalar docs error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    def wrap(self, context: str) -> "ScalarDocsError":
        # Same error kind, message prefixed with the stage that failed.
        wrapped = copy.copy(self)
        wrapped.args = (f"{context}: {self}",)
        return wrapped


class InvalidTitleError(ScalarDocsError, ValueError):
    default_message = "title cannot be empty"


class InvalidSpecError(ScalarDocsError, ValueError):
    default_message = "spec cannot be empty"


class InvalidURLError(ScalarDocsError, ValueError):
    default_message = "invalid URL provided"


class UnsupportedSchemeError(ScalarDocsError, ValueError):
    default_message = "unsupported URL scheme, only file://, http://, and https:// are supported"


class InvalidTimeoutError(ScalarDocsError, ValueError):
    default_message = "timeout must be positive"


class SpecRequiredError(ScalarDocsError):
    default_message = (
        "spec content is required, use with_file(), with_url(), with_spec(), "
        "with_spec_content() or with_spec_object()"
    )


class HTTPRequestError(ScalarDocsError):
    default_message = "HTTP request failed"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class EmptyResponseError(ScalarDocsError):
    default_message = "received empty response from URL"


class SpecFileError(ScalarDocsError):
    default_message = "failed to read spec file"


class RenderError(ScalarDocsError):
    default_message = "failed to render docs"
