"""Scanning of JSON text held in a byte buffer.

Every scanner takes the buffer, a start position and an end position and
either returns how far the value reaches or raises :class:`JsonError`.
Leading whitespace is skipped; trailing text after a value is left alone.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from functools import partial

_END = "unexpected end of json string"
_WHITESPACE = b" \n\r\t"
_DIGITS = b"0123456789"
_HEX_DIGITS = b"0123456789abcdefABCDEF"
_QUOTE = ord('"')
_BACKSLASH = ord("\\")
_ESCAPES = {
    ord('"'): b'"',
    ord("\\"): b"\\",
    ord("/"): b"/",
    ord("b"): b"\b",
    ord("f"): b"\f",
    ord("n"): b"\n",
    ord("r"): b"\r",
    ord("t"): b"\t",
}


class JsonError(ValueError):
    """Raised when JSON text is malformed or a value cannot be read.

    ``specific`` is false when the text merely is not the kind of value a
    scanner looks for, rather than being a broken value of that kind.
    """

    def __init__(self, message: str, *, specific: bool = True) -> None:
        super().__init__(message)
        self.message = message
        self.specific = specific


class JsonType(enum.IntEnum):
    """Kinds of JSON values."""

    INVALID = 0
    STRING = 1
    NUMBER = 2
    OBJECT = 3
    ARRAY = 4
    TRUE = 5
    FALSE = 6
    NULL = 7


@dataclass(frozen=True)
class NumberParts:
    """The pieces of a scanned number, as they are written in the text."""

    start: int
    end: int
    negative: bool
    integer: str
    fraction: str | None
    exponent: str | None


def _peek(data: bytes, pos: int, end: int) -> bytes:
    return data[pos:pos + 1] if pos < end else b""


def _is_digit(char: bytes) -> bool:
    return len(char) == 1 and char[0] in _DIGITS


def _skip_digits(data: bytes, pos: int, end: int) -> int:
    while pos < end and data[pos] in _DIGITS:
        pos += 1
    return pos


def utf8_length(data: bytes, pos: int, end: int) -> int:
    """Return the byte length of the UTF-8 sequence starting at ``pos``."""
    if pos >= end:
        raise JsonError("invalid utf-8")
    lead = data[pos]
    if lead & 0x80:
        count = 0
        for bit in range(7, 2, -1):
            if not (lead >> bit) & 1:
                break
            count += 1
        if count == 1 or count > 4:
            raise JsonError("invalid utf-8")
    else:
        count = 1
    if end - pos < count:
        raise JsonError("invalid utf-8")
    sequence = data[pos:pos + count]
    if any(byte in (0xC0, 0xC1) or byte >= 0xF5 for byte in sequence):
        raise JsonError("invalid utf-8")
    if any(byte & 0xC0 != 0x80 for byte in sequence[1:]):
        raise JsonError("invalid utf-8")
    return count


def skip_whitespace(data: bytes, pos: int, end: int) -> int:
    """Return the position of the first non-whitespace byte."""
    if pos >= end:
        raise JsonError(_END)
    while pos < end and data[pos] in _WHITESPACE:
        pos += 1
    if pos >= end:
        raise JsonError(_END)
    return pos


def _read_hex_unit(data: bytes, pos: int, end: int) -> tuple[int, int]:
    chunk = data[pos:pos + 4] if end - pos >= 4 else b""
    if len(chunk) != 4 or any(byte not in _HEX_DIGITS for byte in chunk):
        raise JsonError("invalid escaped unicode")
    return int(chunk, 16), pos + 4


def _codepoint(first: int, second: int | None) -> int:
    if second is not None:
        if not (0xD800 <= first <= 0xDBFF and 0xDC00 <= second <= 0xDFFF):
            raise JsonError("invalid escaped unicode")
        return 0x10000 + ((first & 0x3FF) << 10) + (second & 0x3FF)
    if 0xD800 <= first <= 0xDFFF:
        raise JsonError("invalid escaped unicode")
    return first


def decode_char(data: bytes, pos: int, end: int) -> tuple[bytes, int]:
    """Decode one character of a string body.

    Returns the UTF-8 bytes it stands for and the position after it.
    Two consecutive ``\\u`` escapes are read as one surrogate pair.
    """
    if pos >= end:
        raise JsonError(_END)
    length = utf8_length(data, pos, end)
    lead = data[pos]
    if lead == _BACKSLASH:
        pos += 1
        if pos >= end:
            raise JsonError(_END)
        kind = data[pos]
        if kind == ord("u"):
            first, pos = _read_hex_unit(data, pos + 1, end)
            second = None
            if end - pos >= 2 and data[pos:pos + 2] == b"\\u":
                second, pos = _read_hex_unit(data, pos + 2, end)
            return chr(_codepoint(first, second)).encode("utf-8"), pos
        replacement = _ESCAPES.get(kind)
        if replacement is None:
            raise JsonError("invalid escaped control character")
        return replacement, pos + 1
    if lead < 0x1F:
        raise JsonError("unescaped control character")
    return data[pos:pos + length], pos + length


def scan_string(data: bytes, pos: int, end: int) -> int:
    """Scan a quoted string and return the position after its closing quote."""
    pos = skip_whitespace(data, pos, end)
    if data[pos] != _QUOTE:
        raise JsonError("'\"' expected", specific=False)
    pos += 1
    while pos >= end or data[pos] != _QUOTE:
        _, pos = decode_char(data, pos, end)
    return pos + 1


def scan_number(data: bytes, pos: int, end: int) -> NumberParts:
    """Scan a number and return its parts and where it ends."""
    pos = skip_whitespace(data, pos, end)
    start = pos
    negative = data[pos] == ord("-")
    if negative:
        pos += 1
        if pos >= end:
            raise JsonError(_END)
    integer_start = pos
    if data[pos] == ord("0"):
        pos += 1
    else:
        if not _is_digit(_peek(data, pos, end)):
            raise JsonError("number expected", specific=False)
        pos = _skip_digits(data, pos, end)
    integer = data[integer_start:pos].decode("ascii")

    fraction = None
    if _peek(data, pos, end) == b".":
        pos += 1
        fraction_start = pos
        if not _is_digit(_peek(data, pos, end)):
            raise JsonError("invalid number")
        pos = _skip_digits(data, pos, end)
        fraction = data[fraction_start:pos].decode("ascii")

    exponent = None
    if _peek(data, pos, end) in (b"e", b"E"):
        pos += 1
        if pos >= end:
            raise JsonError(_END)
        exponent_start = pos
        if data[pos] in b"+-":
            pos += 1
            if pos >= end:
                raise JsonError(_END)
        if not _is_digit(_peek(data, pos, end)):
            raise JsonError("invalid number")
        pos = _skip_digits(data, pos, end)
        exponent = data[exponent_start:pos].decode("ascii")

    if _is_digit(_peek(data, pos, end)):
        raise JsonError("invalid number")
    return NumberParts(start, pos, negative, integer, fraction, exponent)


def _scan_number_end(data: bytes, pos: int, end: int) -> int:
    return scan_number(data, pos, end).end


def _scan_keyword(data: bytes, pos: int, end: int, *, word: bytes) -> int:
    pos = skip_whitespace(data, pos, end)
    if end - pos < len(word) or not data.startswith(word, pos):
        raise JsonError(f"'{word.decode()}' expected", specific=False)
    return pos + len(word)


def scan_member(data: bytes, pos: int, end: int) -> tuple[int, int, int, int]:
    """Scan a ``"name": value`` pair of an object.

    Returns the start and end of the quoted name, the position right after
    the colon, and the position after the value.
    """
    key_start = skip_whitespace(data, pos, end)
    if data[key_start] != _QUOTE:
        raise JsonError("'\"' expected")
    key_end = scan_string(data, key_start, end)
    pos = skip_whitespace(data, key_end, end)
    if data[pos] != ord(":"):
        raise JsonError("':' expected")
    value_start = pos + 1
    _, value_end = scan_value(data, value_start, end)
    return key_start, key_end, value_start, value_end


def scan_object(data: bytes, pos: int, end: int) -> int:
    """Scan an object and return the position after its closing brace."""
    pos = skip_whitespace(data, pos, end)
    if data[pos] != ord("{"):
        raise JsonError("'{' expected", specific=False)
    pos = skip_whitespace(data, pos + 1, end)
    if data[pos] == ord("}"):
        return pos + 1
    while True:
        *_, pos = scan_member(data, pos, end)
        pos = skip_whitespace(data, pos, end)
        if data[pos] == ord("}"):
            return pos + 1
        if data[pos] != ord(","):
            raise JsonError("',' or '}' expected")
        pos += 1


def scan_array(data: bytes, pos: int, end: int) -> int:
    """Scan an array and return the position after its closing bracket."""
    pos = skip_whitespace(data, pos, end)
    if data[pos] != ord("["):
        raise JsonError("'[' expected", specific=False)
    pos = skip_whitespace(data, pos + 1, end)
    if data[pos] == ord("]"):
        return pos + 1
    while True:
        _, pos = scan_value(data, pos, end)
        pos = skip_whitespace(data, pos, end)
        if data[pos] == ord("]"):
            return pos + 1
        if data[pos] != ord(","):
            raise JsonError("',' or ']' expected")
        pos += 1


_ALTERNATIVES = (
    (JsonType.STRING, scan_string),
    (JsonType.NUMBER, _scan_number_end),
    (JsonType.OBJECT, scan_object),
    (JsonType.ARRAY, scan_array),
    (JsonType.TRUE, partial(_scan_keyword, word=b"true")),
    (JsonType.FALSE, partial(_scan_keyword, word=b"false")),
    (JsonType.NULL, partial(_scan_keyword, word=b"null")),
)


def scan_value(data: bytes, pos: int, end: int) -> tuple[JsonType, int]:
    """Scan any value; return its type and the position after it."""
    reason = None
    for kind, scanner in _ALTERNATIVES:
        try:
            return kind, scanner(data, pos, end)
        except JsonError as exc:
            if exc.specific:
                reason = exc.message
    if reason is None:
        reason = "unexpected character" if pos < end else _END
    raise JsonError(reason)