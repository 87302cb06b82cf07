"""Lazy access to parsed JSON values.

A :class:`JsonValue` is a view onto a span of the original text. Nothing is
decoded until a member, element or scalar is asked for, and every lookup
scans the text again.
"""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass
from typing import Iterator

from .scanner import (
    JsonError,
    JsonType,
    NumberParts,
    decode_char,
    scan_member,
    scan_number,
    scan_value,
    skip_whitespace,
)

_INT_BITS = 32


def _decode_body(data: bytes, pos: int, end: int) -> bytes:
    """Decode the escaped body of a string into UTF-8 bytes."""
    out = bytearray()
    while pos < end:
        chunk, pos = decode_char(data, pos, end)
        out += chunk
    return bytes(out)


def _to_float(number: int) -> float:
    try:
        return float(number)
    except OverflowError:
        return math.copysign(math.inf, number)


def _parse_at(data: bytes, pos: int, end: int) -> JsonValue:
    try:
        start = skip_whitespace(data, pos, end)
    except JsonError:
        raise JsonError("invalid string") from None
    kind, stop = scan_value(data, start, end)
    return JsonValue(data, start, stop, kind)


def parse(data: str | bytes | bytearray) -> JsonValue:
    """Parse the first JSON value in ``data``; text after it is ignored."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    data = bytes(data)
    return _parse_at(data, 0, len(data))


@dataclass(frozen=True)
class JsonValue:
    """A JSON value: its kind and where it lies in the text."""

    data: bytes
    start: int
    end: int
    kind: JsonType

    @property
    def raw(self) -> bytes:
        """The text of the value, exactly as written."""
        return self.data[self.start:self.end]

    def __str__(self) -> str:
        return self.raw.decode("utf-8", errors="replace")

    def _require(self, kind: JsonType, what: str) -> None:
        if self.kind is not kind:
            raise TypeError(f"JSON value is {self.kind.name.lower()}, not {what}")

    def _iter_members(self) -> Iterator[tuple[JsonValue, JsonValue]]:
        data, end = self.data, self.end
        pos = skip_whitespace(data, self.start + 1, end)
        if data[pos] == ord("}"):
            return
        while True:
            key_start, key_end, value_start, value_end = scan_member(data, pos, end)
            name = JsonValue(data, key_start, key_end, JsonType.STRING)
            yield name, _parse_at(data, value_start, end)
            pos = skip_whitespace(data, value_end, end)
            if data[pos] != ord(","):
                return
            pos += 1

    def _iter_elements(self) -> Iterator[JsonValue]:
        data, end = self.data, self.end
        pos = skip_whitespace(data, self.start + 1, end)
        if data[pos] == ord("]"):
            return
        while True:
            element = _parse_at(data, pos, end)
            yield element
            pos = skip_whitespace(data, element.end, end)
            if data[pos] != ord(","):
                return
            pos += 1

    def members(self) -> Iterator[tuple[JsonValue, JsonValue]]:
        """Iterate over the ``(name, value)`` pairs of an object."""
        self._require(JsonType.OBJECT, "an object")
        return self._iter_members()

    def elements(self) -> Iterator[JsonValue]:
        """Iterate over the elements of an array."""
        self._require(JsonType.ARRAY, "an array")
        return self._iter_elements()

    def count(self) -> int:
        """Number of members or elements; zero for any other kind."""
        if self.kind is JsonType.OBJECT:
            return sum(1 for _ in self._iter_members())
        if self.kind is JsonType.ARRAY:
            return sum(1 for _ in self._iter_elements())
        return 0

    def value_by_name(self, name: str) -> JsonValue:
        """Return the first member value whose name matches ``name``.

        ``name`` is read like the body of a JSON string, so escapes such as
        ``\\u0032`` match the character they stand for.
        """
        self._require(JsonType.OBJECT, "an object")
        try:
            target = _decode_body(name.encode("utf-8"), 0, len(name.encode("utf-8")))
        except JsonError as exc:
            raise KeyError(name) from exc
        for key, value in self._iter_members():
            if _decode_body(self.data, key.start + 1, key.end - 1) == target:
                return value
        raise KeyError(name)

    def name_by_index(self, index: int) -> JsonValue:
        """Return the quoted name of the member at ``index``."""
        self._require(JsonType.OBJECT, "an object")
        if index >= 0:
            for position, (key, _) in enumerate(self._iter_members()):
                if position == index:
                    return key
        raise IndexError(f"member index {index} out of range")

    def value_by_index(self, index: int) -> JsonValue:
        """Return the member value or array element at ``index``."""
        if self.kind is JsonType.OBJECT:
            items: Iterator[JsonValue] = (value for _, value in self._iter_members())
        else:
            self._require(JsonType.ARRAY, "an object or array")
            items = self._iter_elements()
        if index >= 0:
            for position, item in enumerate(items):
                if position == index:
                    return item
        raise IndexError(f"index {index} out of range")

    def as_string(self, max_bytes: int | None = None) -> str:
        """Decode a string value.

        With ``max_bytes``, the UTF-8 form plus a terminating byte must fit
        in that many bytes, or :class:`JsonError` is raised.
        """
        self._require(JsonType.STRING, "a string")
        body = _decode_body(self.data, self.start + 1, self.end - 1)
        if max_bytes is not None and len(body) + 1 > max_bytes:
            raise JsonError("buffer too small")
        try:
            return body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise JsonError("invalid utf-8") from exc

    def _number(self) -> tuple[NumberParts, int, float | None, int]:
        self._require(JsonType.NUMBER, "a number")
        parts = scan_number(self.data, self.start, self.end)
        integer = int(parts.integer)
        if parts.negative:
            integer = -integer
        fraction = None
        if parts.fraction is not None:
            fraction = _to_float(int(parts.fraction))
            if parts.negative:
                fraction = -fraction
            for _ in parts.fraction:
                if fraction == 0:
                    break
                fraction /= 10.0
        exponent = int(parts.exponent) if parts.exponent is not None else 0
        return parts, integer, fraction, exponent

    def as_double(self) -> float:
        """Read a number as a float."""
        _, integer, fraction, exponent = self._number()
        value = _to_float(integer)
        if fraction is not None:
            value += fraction
        while exponent > 0 and value != 0 and math.isfinite(value):
            value *= 10.0
            exponent -= 1
        while exponent < 0 and value != 0:
            value /= 10.0
            exponent += 1
        return value

    def as_float(self) -> float:
        """Read a number rounded to single precision."""
        value = self.as_double()
        try:
            return struct.unpack("f", struct.pack("f", value))[0]
        except OverflowError:
            return math.copysign(math.inf, value)

    def as_long(self) -> int:
        """Read a number as an integer.

        A fraction above one half rounds away from zero; the exponent then
        scales the result, truncating towards zero.
        """
        _, value, fraction, exponent = self._number()
        if fraction is not None:
            if fraction < -0.5:
                value -= 1
            elif fraction > 0.5:
                value += 1
        if exponent > 0 and value:
            value *= 10**exponent
        elif exponent < 0 and value:
            digits = len(str(abs(value)))
            if -exponent > digits:
                value = 0
            else:
                quotient = abs(value) // 10**(-exponent)
                value = quotient if value > 0 else -quotient
        return value

    def as_int(self) -> int:
        """Read a number as an integer wrapped to 32 bits."""
        value = self.as_long()
        half = 1 << (_INT_BITS - 1)
        return ((value + half) % (1 << _INT_BITS)) - half