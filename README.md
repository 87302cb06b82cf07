# oijson

A small JSON reader that works directly on the text of a document. Parsing
checks that the first value in the text is well formed and records where it
lies; nothing is converted until you ask for it. Objects and arrays are
walked again on every lookup, so no tree is ever built.

The reader is strict: leading zeros, trailing commas, unescaped control
characters, malformed UTF-8 and invalid `\u` surrogates are all rejected.
Text after the first complete value is ignored.

## Installing

```
pip install .
```

To run the tests as well:

```
pip install .[test]
pytest
```

## Reading a document

```python
from oijson.value import parse
from oijson.scanner import JsonType, JsonError

doc = parse('{"name": "widget", "sizes": [1, 2.5, 3e2], "ok": true}')

assert doc.kind is JsonType.OBJECT
print(doc.count())                        # 3

print(doc.value_by_name("name").as_string())   # widget

for element in doc.value_by_name("sizes").elements():
    print(element.as_double())            # 1.0, 2.5, 300.0

print(doc.name_by_index(0).as_string())   # name
print(doc.value_by_index(2).kind)         # JsonType.TRUE
```

`parse` accepts `str`, `bytes` or `bytearray` and returns a
`JsonValue`. A `JsonValue` holds the document (`data`), the span of the
value (`start`, `end`) and its `kind`, a `JsonType`. `raw` gives the value's
text exactly as written, and `str(value)` gives the same text decoded.

Members and elements can be iterated:

```python
for key, value in doc.members():
    print(key.as_string(), value.kind)
```

- `count()` gives the number of members or elements, and `0` for any other
  kind of value.
- `value_by_index(i)` works on both objects and arrays.
- `name_by_index(i)` returns the member's name as a string value.
- Names passed to `value_by_name` are read like the body of a JSON string,
  so `"size\\u0073"` finds the member `"sizes"`. The first matching member
  wins.

### Strings

`as_string()` decodes escapes, including surrogate pairs written as two
consecutive `\u` escapes. `as_string(max_bytes)` additionally requires the
UTF-8 form plus one terminating byte to fit in `max_bytes`, and raises
`JsonError("buffer too small")` otherwise.

### Numbers

- `as_double()` gives the value as a float; `as_float()` rounds it to
  single precision.
- `as_long()` gives an integer. A fraction rounds away from zero only when
  it is greater than one half, so `0.5` gives `0` and `0.51` gives `1`. The
  exponent then scales that result, truncating towards zero: `10.51e7`
  gives `110000000` and `19.5e-1` gives `1`.
- `as_int()` is `as_long()` wrapped to a signed 32-bit integer.

### Errors

- Malformed text raises `JsonError` (a `ValueError`) whose `message` says
  what went wrong, for example `"unexpected end of json string"`,
  `"invalid escaped unicode"` or `"',' or ']' expected"`. Empty or
  whitespace-only input gives `"invalid string"`.
- Asking a value for something its kind does not have (members of an
  array, `as_double()` of a string) raises `TypeError`.
- `value_by_name` raises `KeyError` when no member matches, and the index
  lookups raise `IndexError` when the index is out of range.

The lower-level scanners used by `parse` (`scan_value`, `scan_object`,
`scan_array`, `scan_string`, `scan_number`, `scan_member`, `decode_char`,
`skip_whitespace`, `utf8_length`) are available in `oijson.scanner`; each
takes the buffer, a start position and an end position.

## Printing a document

The `oijson-print` command reads a JSON file and prints it back with each
object and array level indented by four spaces. Scalars are printed exactly
as written in the file.

```
oijson-print document.json
oijson-print document.json --limit 65536
```

The path defaults to `./res/test.json`. `--limit` sets the largest document
size in bytes, a terminating byte included (default 2048). If the file
cannot be read, is too large or is not valid JSON, a message goes to
standard error and the exit status is 1.

From Python, `oijson.printer.format_json(value, indent=0)` returns the same
layout as a string, and `oijson.printer.read_document(path, limit=2048)`
reads a file as bytes, raising `ValueError` if it does not fit.

## What it does not do

The package only reads JSON. It does not convert a document into Python
dicts and lists, and it has no way to build or write JSON.