import pytest

from oijson.printer import format_json, main, read_document
from oijson.scanner import JsonType
from oijson.value import JsonValue, parse


def _squash(text: str) -> str:
    return "".join(text.split())


def test_scalar_number_printed_as_written():
    assert format_json(parse("0")) == "0"


def test_scalar_string_printed_as_written():
    assert format_json(parse('"test"')) == '"test"'


def test_invalid_value_text():
    invalid = JsonValue(b"", 0, 0, JsonType.INVALID)
    assert format_json(invalid) == "INVALID JSON!!\n"


def test_array_layout():
    assert format_json(parse("[1,2]")) == "[\n    1,\n    2\n]"


def test_object_layout():
    assert format_json(parse('{"a":1}')) == '{\n    "a":1\n}'


def test_nested_container_layout():
    expected = '{\n    "a":[\n        1\n    ]\n}'
    assert format_json(parse('{"a":[1]}')) == expected


def test_scalar_indent_uses_four_spaces_per_level():
    value = parse("true")
    assert format_json(value, 2) == "    " * 2 + format_json(value)


@pytest.mark.parametrize(
    "text",
    [
        "{}",
        "[]",
        '{"a":0,"b":1}',
        "[0,1,2]",
        '{"x":{"y":[true,false,null]},"z":"w"}',
        '[[1,[2,[3]]],{"k":-10.0e2}]',
        '{"float2":10.0e-10,"float3":-10.0e2}',
    ],
)
def test_only_whitespace_is_added(text):
    assert _squash(format_json(parse(text))) == text


@pytest.mark.parametrize(
    "text",
    ['{"a":[1,2],"b":{"c":null}}', '[{"a":1},[true],"s"]'],
)
def test_output_parses_back_to_same_shape(text):
    original = parse(text)
    reparsed = parse(format_json(original))
    assert reparsed.kind is original.kind
    assert reparsed.count() == original.count()
    assert _squash(format_json(reparsed)) == text


def test_every_line_of_array_is_indented_at_depth():
    lines = format_json(parse("[1,2,3]")).splitlines()
    assert lines[0] == "["
    assert lines[-1] == "]"
    assert all(line.startswith("    ") for line in lines[1:-1])


def test_read_document_round_trip(tmp_path):
    path = tmp_path / "doc.json"
    content = b'{"a": [1, 2, 3]}\n'
    path.write_bytes(content)
    assert read_document(path) == content


def test_read_document_needs_room_for_terminator(tmp_path):
    path = tmp_path / "doc.json"
    path.write_bytes(b"[1,2]")
    with pytest.raises(ValueError):
        read_document(path, 5)
    assert read_document(path, 6) == b"[1,2]"


def test_read_document_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_document(tmp_path / "absent.json")


def test_main_prints_indented_document(tmp_path, capsys):
    path = tmp_path / "doc.json"
    text = '{"a":0,"b":[1,2]}'
    path.write_text(text)
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.endswith("\n")
    assert _squash(out) == text


def test_main_reports_missing_file(tmp_path, capsys):
    path = tmp_path / "absent.json"
    assert main([str(path)]) == 1
    assert str(path) in capsys.readouterr().err


def test_main_reports_malformed_document(tmp_path, capsys):
    path = tmp_path / "bad.json"
    path.write_text("[0,1,2")
    assert main([str(path)]) == 1
    assert "unexpected end of json string" in capsys.readouterr().err


def test_main_rejects_document_over_limit(tmp_path, capsys):
    path = tmp_path / "doc.json"
    path.write_text("[1,2,3]")
    assert main([str(path), "--limit", "4"]) == 1
    assert capsys.readouterr().out == ""