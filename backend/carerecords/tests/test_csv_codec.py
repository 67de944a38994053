# tests/test_csv_codec.py
import pytest

from carerecords.utils.csv_codec import CsvCodec


@pytest.mark.parametrize(
    "value",
    ["plain", "Smith, John", 'He said "hi"', "line one\nline two", 'all, of "it"\nhere', ""],
)
def test_escape_then_decode_recovers_value(codec, value):
    line = codec.encode_line(["ID1", value, "tail"])
    rows = codec.decode_with_header(line)
    assert rows == [["ID1", value, "tail"]]


def test_quoted_comma_and_doubled_quotes():
    """A value with both a comma and quotes is wrapped once and its quotes doubled."""
    codec = CsvCodec()
    assert codec.escape('Smith, "Jr."') == '"Smith, ""Jr."""'
    assert codec.decode_with_header('"Smith, ""Jr."""') == [['Smith, "Jr."']]


def test_escape_none_is_empty(codec):
    assert codec.escape(None) == ""
    assert codec.encode_line(["A", None, 3]) == "A,,3"


def test_decode_skips_header_and_blank_lines(codec):
    text = "id,name\n\nX001,Alpha\r\n\r\nX002,Beta\n"
    assert codec.decode(text) == [["X001", "Alpha"], ["X002", "Beta"]]


def test_fields_are_trimmed(codec):
    assert codec.decode_with_header("  a , b ,\" c \"") == [["a", "b", "c"]]


def test_keep_quoted_whitespace_when_not_trimming():
    codec = CsvCodec(trim_quoted=False)
    assert codec.decode_with_header('  a ," c ",d') == [["a", " c ", "d"]]
    # encoder quotes the value so it survives the next read
    assert codec.escape(" padded ") == '" padded "'


def test_empty_trailing_field_is_kept(codec):
    assert codec.decode_with_header("a,b,") == [["a", "b", ""]]


def test_write_and_read_file(tmp_path, codec):
    path = tmp_path / "things.csv"
    codec.write_file(path, ["id", "note"], [["X001", "first, with comma"], ["X002", 'quote "q"']])

    assert codec.read_header(path) == ["id", "note"]
    assert codec.read_rows(path) == [["X001", "first, with comma"], ["X002", 'quote "q"']]


def test_append_rows(tmp_path, codec):
    path = tmp_path / "things.csv"
    codec.write_file(path, ["id", "note"], [["X001", "one"]])

    written = codec.append_rows(path, [["X002", "two"], ["X003", "three"]])

    assert written == 2
    assert [row[0] for row in codec.read_rows(path)] == ["X001", "X002", "X003"]


def test_empty_file(tmp_path, codec):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    assert codec.read_header(path) == []
    assert codec.read_rows(path) == []


def test_missing_file_raises(tmp_path, codec):
    with pytest.raises(FileNotFoundError):
        codec.read_rows(tmp_path / "nope.csv")


def test_stray_quote_mid_field_ends_with_its_line(codec):
    text = 'id,address,postcode\nP001,Flat 5" Elm Rd,B2 4QA\nP002,7 Park Lane,B5 7RS\n'
    rows = codec.decode(text)

    assert len(rows) == 2
    assert rows[1] == ["P002", "7 Park Lane", "B5 7RS"]


def test_unclosed_quote_at_field_start_does_not_swallow_file(codec):
    text = 'id,address\nP001,"Flat 5 Elm Rd\nP002,7 Park Lane\nP003,1 High St\n'
    rows = codec.decode(text)

    assert rows == [["P001", "Flat 5 Elm Rd"], ["P002", "7 Park Lane"], ["P003", "1 High St"]]


def test_quoted_newline_still_spans_lines(codec):
    text = 'id,notes\nR001,  "first line\nsecond, line"\nR002,plain\n'
    assert codec.decode(text) == [["R001", "first line\nsecond, line"], ["R002", "plain"]]
