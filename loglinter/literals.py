"""
Go string literal syntax.

unquote() follows the Go language rules for interpreted ("...") and raw
(`...`) string literals and for rune literals ('x'). quote() produces an
interpreted literal the way Go's strconv.Quote does; it is used to build
the replacement text of suggested fixes.

Malformed literals raise ValueError.
"""
from typing import Iterator, Tuple

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
}

_HEX_DIGITS = {"x": 2, "u": 4, "U": 8}

_QUOTE_ESCAPES = {v: k for k, v in _SIMPLE_ESCAPES.items()}

_MAX_RUNE = 0x10FFFF


def _scan(body: str, quote: str) -> Iterator[Tuple[str, bytes]]:
    """
    Walk the body of an interpreted literal.

    Yields (source text, decoded bytes) for each character or escape
    sequence. \\x and octal escapes denote single bytes, so one code
    point may be spelled by several consecutive pieces.
    """
    i = 0
    n = len(body)
    while i < n:
        c = body[i]
        if c == quote or c == "\n":
            raise ValueError(f"invalid character {c!r} in literal")
        if c != "\\":
            yield c, c.encode("utf-8")
            i += 1
            continue

        if i + 1 >= n:
            raise ValueError("literal ends inside escape sequence")
        e = body[i + 1]

        if e in _SIMPLE_ESCAPES:
            yield body[i:i + 2], _SIMPLE_ESCAPES[e].encode("utf-8")
            i += 2
        elif e in ("'", '"'):
            if e != quote:
                raise ValueError(f"escape \\{e} not allowed in this literal")
            yield body[i:i + 2], e.encode("utf-8")
            i += 2
        elif e in _HEX_DIGITS:
            width = _HEX_DIGITS[e]
            digits = body[i + 2:i + 2 + width]
            if len(digits) != width or not all(d in "0123456789abcdefABCDEF" for d in digits):
                raise ValueError(f"invalid \\{e} escape")
            value = int(digits, 16)
            if e == "x":
                yield body[i:i + 2 + width], bytes([value])
            else:
                if value > _MAX_RUNE or 0xD800 <= value <= 0xDFFF:
                    raise ValueError(f"escape is invalid Unicode code point {value:#x}")
                yield body[i:i + 2 + width], chr(value).encode("utf-8")
            i += 2 + width
        elif "0" <= e <= "7":
            digits = body[i + 1:i + 4]
            if len(digits) != 3 or not all("0" <= d <= "7" for d in digits):
                raise ValueError("invalid octal escape")
            value = int(digits, 8)
            if value > 255:
                raise ValueError("octal escape value > 255")
            yield body[i:i + 4], bytes([value])
            i += 4
        else:
            raise ValueError(f"unknown escape sequence \\{e}")


def _split(value: str) -> Tuple[str, str]:
    if len(value) < 2:
        raise ValueError("literal too short")
    quote = value[0]
    if quote not in ('"', "'", "`") or value[-1] != quote:
        raise ValueError("literal is not quoted")
    return quote, value[1:-1]


def unquote(value: str) -> str:
    """Decode the raw source text of a Go string or rune literal."""
    quote, body = _split(value)

    if quote == "`":
        if "`" in body:
            raise ValueError("backquote inside raw string")
        # Carriage returns are discarded from raw string values
        return body.replace("\r", "")

    data = b"".join(piece for _, piece in _scan(body, quote))
    text = data.decode("utf-8", errors="replace")

    if quote == "'" and len(text) != 1:
        raise ValueError("rune literal must hold exactly one character")
    return text


def first_char_source(value: str) -> str:
    """
    Return the source text that spells the first code point of a literal.

    For `"Hello"` this is "H"; for `"\\u0048ello"` it is "\\u0048".
    """
    quote, body = _split(value)
    if quote == "`":
        return body.replace("\r", "")[:1]

    spelled = []
    data = b""
    for source, piece in _scan(body, quote):
        spelled.append(source)
        data += piece
        if data and len(data) >= _utf8_length(data[0]):
            break
    return "".join(spelled)


def _utf8_length(lead: int) -> int:
    if lead < 0x80:
        return 1
    if lead >> 5 == 0b110:
        return 2
    if lead >> 4 == 0b1110:
        return 3
    if lead >> 3 == 0b11110:
        return 4
    # Stray continuation byte, decodes on its own as U+FFFD
    return 1


def quote(text: str) -> str:
    """Return a double-quoted Go literal denoting text."""
    out = ['"']
    for ch in text:
        if ch == '"' or ch == "\\":
            out.append("\\" + ch)
        elif ch.isprintable():
            out.append(ch)
        elif ch in _QUOTE_ESCAPES:
            out.append("\\" + _QUOTE_ESCAPES[ch])
        elif ord(ch) < 0x20 or ord(ch) == 0x7F:
            out.append(f"\\x{ord(ch):02x}")
        elif ord(ch) < 0x10000:
            out.append(f"\\u{ord(ch):04x}")
        else:
            out.append(f"\\U{ord(ch):08x}")
    out.append('"')
    return "".join(out)
