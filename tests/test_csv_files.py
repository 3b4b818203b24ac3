import pytest
from pydantic import ValidationError

import ff
from ff.errors import ErrorType, classify_error

pytestmark = pytest.mark.anyio

TSV = "header1\theader2\nvalue1\tvalue2\n\tvalue4\nvalue5\t\n"


def _lines(path):
    return path.read_text().replace("\n", " ")


async def test_read_csv_excludes_header(src_dir):
    (src_dir / "file.csv").write_text("header1,header2\nvalue1,value2")
    assert await ff.read_csv(src_dir, "file.csv") == [["value1", "value2"]]


async def test_read_csv_tab_separated(src_dir):
    (src_dir / "file.csv").write_text(TSV)
    data = await ff.read_csv(src_dir, "file.csv", True, "\t")
    assert data == [["value1", "value2"], ["", "value4"], ["value5", ""]]


async def test_read_csv_with_extra_whitespace(src_dir):
    text = "header1\u00a0\theader2\n\ufeffvalue1\t value2\n\tvalue4 \n value5 \t\n"
    (src_dir / "file.csv").write_text(text, encoding="utf-8")
    data = await ff.read_csv(src_dir, "file.csv", True, "\t")
    assert data == [["value1", "value2"], ["", "value4"], ["value5", ""]]


async def test_read_csv_with_utf8_bom_file(src_dir):
    (src_dir / "file.csv").write_text("header1,header2\nvalue1,value2\n", encoding="utf-8-sig")
    data = await ff.read_csv(src_dir, "file.csv", has_header=False)
    assert data[0] == ["header1", "header2"]


async def test_read_csv_missing_file_raises(src_dir):
    with pytest.raises(FileNotFoundError):
        await ff.read_csv(src_dir, "missing.csv")


async def test_write_csv(src_dir):
    await ff.write_csv([["value1", "value2"]], ["header1", "header2"], src_dir, "file.csv")
    assert _lines(src_dir / "file.csv") == "header1,header2 value1,value2 "


async def test_write_csv_without_header(src_dir):
    await ff.write_csv([["value1", "value2"]], None, src_dir, "file.csv")
    assert (src_dir / "file.csv").read_text() == "value1,value2\n"


async def test_append_csv_to_file_without_trailing_newline(src_dir):
    (src_dir / "file.csv").write_text("header1,header2\nvalue1,value2")
    await ff.append_csv([["value3,value4"], ["value5,value6"]], src_dir, "file.csv")
    assert _lines(src_dir / "file.csv") == "header1,header2 value1,value2 value3,value4 value5,value6 "


async def test_append_csv_row_count(src_dir):
    await ff.write_csv([["1", "2"]], ["a", "b"], src_dir, "file.csv")
    await ff.append_csv([["3", "4"], ["5", "6"]], src_dir, "file.csv")
    rows = await ff.read_csv(src_dir, "file.csv", has_header=False)
    assert rows == [["a", "b"], ["1", "2"], ["3", "4"], ["5", "6"]]


async def test_append_csv_creates_missing_file(src_dir):
    await ff.append_csv([["1", "2"]], src_dir, "new.csv")
    assert (src_dir / "new.csv").read_text() == "1,2\n"


async def test_csv_to_obj(src_dir):
    (src_dir / "file.csv").write_text(TSV)
    data = await ff.csv_to_obj(src_dir, "file.csv", "\t")
    assert data == [
        {"header1": "value1", "header2": "value2"},
        {"header1": "", "header2": "value4"},
        {"header1": "value5", "header2": ""},
    ]


async def test_obj_to_csv(src_dir):
    records = [{"header1": "value1", "header2": "value2"}, {"header2": "value4"}]
    await ff.obj_to_csv(records, src_dir, "file.csv")
    assert _lines(src_dir / "file.csv") == "header1,header2 value1,value2 ,value4 "


async def test_obj_to_csv_then_csv_to_obj(src_dir):
    records = [{"id": "1", "name": "alpha"}, {"id": "2", "name": "beta"}]
    await ff.obj_to_csv(records, src_dir, "file.csv")
    assert await ff.csv_to_obj(src_dir, "file.csv") == records


@pytest.mark.parametrize("delimiter", ["", ";;", "\n"])
def test_parse_table_rejects_bad_delimiter(delimiter):
    with pytest.raises(ValidationError) as info:
        ff.parse_table("a,b\n", delimiter)
    assert classify_error(info.value) is ErrorType.PARSE_FAILURE


async def test_read_csv_rejects_bad_delimiter(src_dir):
    (src_dir / "file.csv").write_text("a;;b\n1;;2\n")
    with pytest.raises(ValidationError):
        await ff.read_csv(src_dir, "file.csv", True, ";;")
    with pytest.raises(ValidationError):
        await ff.csv_to_obj(src_dir, "file.csv", "")


async def test_write_rejects_bad_delimiter_without_touching_file(src_dir):
    with pytest.raises(ValidationError):
        await ff.write_csv([["1", "2"]], ["a", "b"], src_dir, "file.csv", "")
    with pytest.raises(ValidationError):
        await ff.obj_to_csv([{"a": "1"}], src_dir, "file.csv", ";;")
    with pytest.raises(ValidationError):
        await ff.append_csv([["1", "2"]], src_dir, "file.csv", ";;")
    assert not (src_dir / "file.csv").exists()
