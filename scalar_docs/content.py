"""Normalize spec content (JSON text, a mapping, or a mapping supplier) to JSON text."""
import json
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Union

logger = logging.getLogger(__name__)

# Characters json.dumps leaves alone but that must not appear raw inside an HTML <script>.
_HTML_UNSAFE = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass(frozen=True)
class JSONText:
    text: str


@dataclass(frozen=True)
class SpecMapping:
    data: Mapping[str, Any]


@dataclass(frozen=True)
class SpecSupplier:
    supplier: Callable[[], Mapping[str, Any]]


SpecContent = Union[JSONText, SpecMapping, SpecSupplier]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def is_valid_json(text: str) -> bool:
    # Exactly one JSON value; trailing data, NaN and Infinity are rejected.
    try:
        json.loads(text, parse_constant=_reject_constant)
    except (TypeError, ValueError):
        return False
    return True


def _dump_mapping(data: Mapping[str, Any]) -> str:
    text = json.dumps(data, separators=(",", ":"), ensure_ascii=False, allow_nan=False)
    for ch, repl in _HTML_UNSAFE.items():
        text = text.replace(ch, repl)
    return text


def spec_content(value: Any) -> SpecContent | None:
    """Wrap a plain str, mapping, or zero-argument mapping supplier in its SpecContent variant.

    Returns None for anything else (including None itself).
    """
    if isinstance(value, (JSONText, SpecMapping, SpecSupplier)):
        return value
    if isinstance(value, str):
        return JSONText(value)
    if isinstance(value, Mapping):
        return SpecMapping(value)
    if callable(value):
        return SpecSupplier(value)
    return None


def normalize_spec_content(content: SpecContent | None) -> str:
    """Return the content as JSON text, or "" when it is not usable.

    Never raises: callers turn an empty result into InvalidSpecError or
    SpecRequiredError.
    """
    if isinstance(content, JSONText):
        text = content.text.strip()
        return text if is_valid_json(text) else ""

    if isinstance(content, SpecSupplier):
        try:
            data = content.supplier()
        except Exception as e:
            logger.warning("Spec supplier failed: %s", e)
            return ""
        if not isinstance(data, Mapping):
            logger.warning("Spec supplier returned %s, expected a mapping", type(data).__name__)
            return ""
    elif isinstance(content, SpecMapping):
        data = content.data
    else:
        return ""

    try:
        return _dump_mapping(data)
    except (TypeError, ValueError) as e:
        logger.warning("Spec mapping is not JSON serializable: %s", e)
        return ""
