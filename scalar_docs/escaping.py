"""Escape spec text so it can sit inside a backtick template literal in an inline <script>."""

_SIMPLE_ESCAPES = {
    "`": "\\`",
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\f": "\\f",
    "\b": "\\b",
    "\v": "\\v",
    "\x00": "\\u0000",
}

_SIMPLE_UNESCAPES = {
    "`": "`",
    '"': '"',
    "\\": "\\",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "f": "\f",
    "b": "\b",
    "v": "\v",
    # Redundant escapes added when the text is placed in an inline script.
    "$": "$",
    "/": "/",
    "!": "!",
}


def escape_js_string(raw: str) -> str:
    # Per code point: multi-byte characters are copied through untouched.
    if not raw:
        return ""
    parts = []
    for ch in raw:
        escaped = _SIMPLE_ESCAPES.get(ch)
        if escaped is not None:
            parts.append(escaped)
            continue
        code = ord(ch)
        if code < 32 or code == 127:
            parts.append(f"\\u{code:04x}")
        else:
            parts.append(ch)
    return "".join(parts)


def unescape_js_string(escaped: str) -> str:
    """Reverse escape_js_string.

    Understands the sequences escape_js_string produces plus the redundant
    ``\\$``, ``\\/`` and ``\\!`` escapes the renderer adds; anything else
    after a backslash raises ValueError.
    """
    if not escaped:
        return ""
    parts = []
    i = 0
    n = len(escaped)
    while i < n:
        ch = escaped[i]
        if ch != "\\":
            parts.append(ch)
            i += 1
            continue
        if i + 1 >= n:
            raise ValueError("dangling backslash at end of input")
        nxt = escaped[i + 1]
        if nxt == "u":
            hex_digits = escaped[i + 2:i + 6]
            if len(hex_digits) != 4:
                raise ValueError(f"truncated \\u escape at offset {i}")
            parts.append(chr(int(hex_digits, 16)))
            i += 6
            continue
        if nxt not in _SIMPLE_UNESCAPES:
            raise ValueError(f"unknown escape \\{nxt} at offset {i}")
        parts.append(_SIMPLE_UNESCAPES[nxt])
        i += 2
    return "".join(parts)
