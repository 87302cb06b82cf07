"""Reading JSON documents from disk and printing them indented."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Sequence

from .scanner import JsonError, JsonType
from .value import JsonValue, parse

DEFAULT_PATH = "./res/test.json"
DEFAULT_LIMIT = 2048
_INDENT_UNIT = "    "
_INVALID_TEXT = "INVALID JSON!!\n"


def read_document(path: str | Path, limit: int = DEFAULT_LIMIT) -> bytes:
    """Read a whole file as bytes.

    The content together with a terminating byte must fit in ``limit`` bytes;
    otherwise :class:`ValueError` is raised.
    """
    data = Path(path).read_bytes()
    if len(data) >= limit:
        raise ValueError(f"{path}: document does not fit in {limit} bytes")
    return data


def _emit(value: JsonValue, indent: int, write: Callable[[str], None]) -> None:
    if value.kind is JsonType.INVALID:
        write(_INVALID_TEXT)
        return
    if value.kind is JsonType.OBJECT:
        write("{\n")
        for position, (name, member) in enumerate(value.members()):
            if position:
                write(",\n")
            _emit(name, indent + 1, write)
            write(":")
            if member.kind in (JsonType.OBJECT, JsonType.ARRAY):
                _emit(member, indent + 1, write)
            else:
                _emit(member, 0, write)
        write("\n" + _INDENT_UNIT * indent + "}")
        return
    if value.kind is JsonType.ARRAY:
        write("[\n")
        for position, element in enumerate(value.elements()):
            if position:
                write(",\n")
            _emit(element, indent + 1, write)
        write("\n" + _INDENT_UNIT * indent + "]")
        return
    write(_INDENT_UNIT * indent + str(value))


def format_json(value: JsonValue, indent: int = 0) -> str:
    """Lay out a value with one member or element per line.

    Scalars are written exactly as they appear in the text, preceded by
    ``indent`` levels of four spaces.
    """
    parts: list[str] = []
    _emit(value, indent, parts.append)
    return "".join(parts)


def main(argv: Sequence[str] | None = None) -> int:
    """Print a JSON document from a file in indented form."""
    parser = argparse.ArgumentParser(
        prog="oijson", description="Print a JSON document indented."
    )
    parser.add_argument("path", nargs="?", default=DEFAULT_PATH,
                        help="file holding the JSON document")
    parser.add_argument("--limit", type=int, default=DEFAULT_LIMIT,
                        help="largest document size in bytes, terminator included")
    args = parser.parse_args(argv)

    try:
        document = read_document(args.path, args.limit)
    except OSError as exc:
        print(f"{args.path}: {exc.strerror or exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        value = parse(document)
    except JsonError as exc:
        print(f"{args.path}: {exc.message}", file=sys.stderr)
        return 1

    sys.stdout.write(format_json(value) + "\n")
    return 0