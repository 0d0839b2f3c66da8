import logging

import pytest

from bwbitmap.decoder import (
    parse_array_data,
    parse_hex_bytes,
    bytes_to_grid,
    split_segments,
    clean_source,
)
from bwbitmap.errors import (
    ParseError,
    ValidationError,
    RecoverableSegmentWarning,
    RecoverableTokenWarning,
    NO_ARRAY_FOUND,
    NO_HEX_VALUES,
)
from bwbitmap.grid import Dimensions

BLACK_ROW = [0] * 8
WHITE_ROW = [1] * 8


# ================================================================
# Bit order and addressing
# ================================================================

def test_set_bits_are_black():
    arrays = parse_array_data("{0xFF}", (8, 1))
    assert arrays[0].data == [BLACK_ROW]


def test_clear_bits_are_white():
    arrays = parse_array_data("{0x00}", (8, 1))
    assert arrays[0].data == [WHITE_ROW]


def test_vertical_scan_fills_columns_first():
    # 0xB2 = 1011 0010 -> pixels 0100 1101
    arrays = parse_array_data("{0xB2}", Dimensions(2, 4))
    assert arrays[0].data == [
        [0, 1],
        [1, 1],
        [0, 0],
        [0, 1],
    ]


def test_excess_bytes_are_ignored(caplog):
    with caplog.at_level(logging.WARNING):
        arrays = parse_array_data("{0xFF, 0x00, 0xAA, 0x55}", (8, 1))
    assert arrays[0].data == [BLACK_ROW]
    assert not caplog.records


def test_missing_bytes_leave_cells_white():
    arrays = parse_array_data("{0xFF}", (4, 4))
    assert arrays[0].data == [[0, 0, 1, 1]] * 4


def test_bytes_to_grid_directly():
    assert bytes_to_grid([0xF0], (2, 4)) == [[0, 1]] * 4


# ================================================================
# Declarations, segments and fallback
# ================================================================

def test_multi_array_split():
    src = """
    // two glyphs
    const unsigned char Num[10][256] = {
        {0xFF},   /* first */
        {0x00},
    };
    """
    arrays = parse_array_data(src, (8, 1))
    assert [a.name for a in arrays] == ["Num[0]", "Num[1]"]
    assert arrays[0].data == [BLACK_ROW]
    assert arrays[1].data == [WHITE_ROW]
    assert all((a.width, a.height) == (8, 1) for a in arrays)


def test_several_declarations_keep_their_own_names():
    src = "A[][1] = {{0xFF}}; B[1][] = {{0x00},{0xFF}};"
    arrays = parse_array_data(src, (8, 1))
    assert [a.name for a in arrays] == ["A[0]", "B[0]", "B[1]"]


def test_fallback_single_array():
    arrays = parse_array_data("{0xFF,0x00};", (8, 2))
    assert len(arrays) == 1
    assert arrays[0].name == "Array[0]"
    assert arrays[0].data == [[0, 0, 0, 0, 1, 1, 1, 1]] * 2


def test_one_dimensional_declaration_uses_fallback_name():
    src = "const unsigned char logo[2] = {\n0XFF,0X00\n};"
    arrays = parse_array_data(src, (8, 2))
    assert [a.name for a in arrays] == ["Array[0]"]


def test_comments_are_ignored():
    src = "/* {0x00} */\n// {0x00}\n{0xFF}"
    assert parse_array_data(src, (8, 1))[0].data == [BLACK_ROW]


def test_nested_braces_inside_segment_are_flattened():
    src = "x[2][2] = { {{0xFF},{0x00}}, {0x00, 0xFF} };"
    arrays = parse_array_data(src, (8, 2))
    assert arrays[0].data == [[0, 0, 0, 0, 1, 1, 1, 1]] * 2
    assert arrays[1].data == [[1, 1, 1, 1, 0, 0, 0, 0]] * 2


def test_split_segments_counts_depth():
    assert split_segments(" {1,2}, { {3},{4} } ,{5} ") == ["1,2", " {3},{4} ", "5"]


def test_unterminated_segment_is_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        arrays = parse_array_data("x[][] = { {0xFF}, {0x00", (8, 1))
    assert [a.name for a in arrays] == ["x[0]"]
    assert "unterminated" in caplog.text


# ================================================================
# Recovery from bad tokens and segments
# ================================================================

def test_bad_token_is_dropped_and_logged(caplog):
    with caplog.at_level(logging.WARNING):
        arrays = parse_array_data("{0xFF, 0xGG, 0x00}", (8, 2))
    assert arrays[0].data == [[0, 0, 0, 0, 1, 1, 1, 1]] * 2
    assert "0xGG" in caplog.text
    assert "RecoverableTokenWarning" in caplog.text


def test_token_wider_than_a_byte_is_dropped(caplog):
    with caplog.at_level(logging.WARNING):
        assert parse_hex_bytes("0x1FF, 0xFF") == [0xFF]
    assert "0x1FF" in caplog.text


def test_token_forms():
    assert parse_hex_bytes(" 0xff, 0X0A ,7,, ab ,") == [0xFF, 0x0A, 0x07, 0xAB]


def test_bad_segment_does_not_abort_siblings(caplog):
    src = "x[3][1] = { {0xFF}, {zz}, {0x00} };"
    with caplog.at_level(logging.WARNING):
        arrays = parse_array_data(src, (8, 1))
    assert [a.name for a in arrays] == ["x[0]", "x[2]"]
    assert "RecoverableSegmentWarning" in caplog.text


def test_injected_logger_receives_warnings(caplog):
    log = logging.getLogger("bitmap-test")
    with caplog.at_level(logging.WARNING, logger="bitmap-test"):
        parse_array_data("{0xFF, nope}", (8, 1), log=log)
    assert any(r.name == "bitmap-test" for r in caplog.records)


# ================================================================
# Fatal errors
# ================================================================

@pytest.mark.parametrize("text", ["", "   \n\t ", "no braces here", "// {0xFF}"])
def test_no_array_found(text):
    with pytest.raises(ParseError) as exc:
        parse_array_data(text, (8, 1))
    assert exc.value.kind == NO_ARRAY_FOUND


def test_no_hex_values_in_fallback():
    with pytest.raises(ParseError) as exc:
        parse_array_data("{ , , }", (8, 1))
    assert exc.value.kind == NO_HEX_VALUES


def test_every_segment_failing_is_fatal():
    with pytest.raises(ParseError) as exc:
        parse_array_data("x[][] = { {zz}, {} };", (8, 1))
    assert exc.value.kind == NO_HEX_VALUES


def test_bad_dimensions_rejected():
    with pytest.raises(ValidationError):
        parse_array_data("{0xFF}", (0, 4))


def test_clean_source():
    assert clean_source(" a /* b\n c */ d // e\n  f ") == "a d f"


def test_unterminated_only_segment_reports_no_hex_values():
    with pytest.raises(ParseError) as exc:
        parse_array_data("x[][] = { {0xFF, 0x00", (8, 1))
    assert exc.value.kind == NO_HEX_VALUES


def test_warning_class_is_attached_to_log_records(caplog):
    with caplog.at_level(logging.WARNING):
        parse_array_data("x[2][1] = { {0xFF, 0xGG}, {zz} };", (8, 1))
    kinds = [r.warning for r in caplog.records]
    assert RecoverableTokenWarning in kinds
    assert RecoverableSegmentWarning in kinds
