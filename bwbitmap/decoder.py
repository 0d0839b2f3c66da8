# decoder.py  —  C array literal -> pixel grids
# Bytes are read MSB-first, a set bit is a black pixel, and bits fill the
# grid column by column (vertical scan): bit i lands at row i % height,
# column i // height.

import logging
import re

from .errors import (
    ParseError,
    RecoverableSegmentWarning,
    RecoverableTokenWarning,
    NO_ARRAY_FOUND,
    NO_HEX_VALUES,
)
from .grid import Dimensions, NamedArray, new_grid, BLACK, WHITE

logger = logging.getLogger(__name__)

FALLBACK_NAME = "Array"

_BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.S)
_LINE_COMMENT = re.compile(r"//[^\n]*")
_WHITESPACE = re.compile(r"\s+")
_DECL_2D = re.compile(r"(\w+)\s*\[\s*\d*\s*\]\s*\[\s*\d*\s*\]\s*=\s*\{")
_HEX_TOKEN = re.compile(r"^[0-9A-Fa-f]+$")


def warn(log, category, msg, *args):
    # the warning class rides on the record as `record.warning` for filtering
    log.warning("%s: " + msg, category.__name__, *args, extra={"warning": category})


def clean_source(text):
    text = _BLOCK_COMMENT.sub("", text)
    text = _LINE_COMMENT.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def _match_brace(text, start):
    # index of the "}" closing the "{" at text[start], or -1 if never closed
    depth = 0
    for i in range(start, len(text)):
        c = text[i]
        if c == "{":
            depth += 1
        elif c == "}":
            depth -= 1
            if depth == 0:
                return i
    return -1


def split_segments(body, log=logger):
    """Split a declaration body into the contents of its top-level {...} groups."""
    segments = []
    depth = 0
    start = None
    for i, c in enumerate(body):
        if c == "{":
            if depth == 0:
                start = i + 1
            depth += 1
        elif c == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                segments.append(body[start:i])
    if depth > 0:
        warn(log, RecoverableSegmentWarning, "unterminated sub-array skipped")
    return segments


def parse_hex_bytes(segment, log=logger):
    values = []
    for raw in segment.replace("{", ",").replace("}", ",").split(","):
        tok = raw.strip()
        if tok[:2] in ("0x", "0X"):
            tok = tok[2:]
        if not tok:
            continue
        if not _HEX_TOKEN.match(tok):
            warn(log, RecoverableTokenWarning, "invalid hex value %r", raw.strip())
            continue
        v = int(tok, 16)
        if v > 0xFF:
            warn(log, RecoverableTokenWarning, "value %r does not fit in a byte", raw.strip())
            continue
        values.append(v)
    log.debug("found %d hex values", len(values))
    return values


def bytes_to_grid(values, dims):
    dims = Dimensions.coerce(dims)
    h = dims.height
    total_bits = dims.total_bits
    grid = new_grid(dims, WHITE)

    bit_index = 0
    for v in values:
        for b in range(7, -1, -1):
            if bit_index >= total_bits:
                return grid
            col, row = divmod(bit_index, h)
            grid[row][col] = WHITE if (v >> b) & 1 == 0 else BLACK
            bit_index += 1
    return grid


def decode_segment(segment, dims, log=logger):
    values = parse_hex_bytes(segment, log)
    if not values:
        raise ParseError("no hex values found", NO_HEX_VALUES)
    return bytes_to_grid(values, dims)


def find_declarations(cleaned):
    """Yield (name, body) for every `NAME[..][..] = { ... }` in cleaned text."""
    pos = 0
    while True:
        m = _DECL_2D.search(cleaned, pos)
        if m is None:
            return
        open_at = m.end() - 1
        close_at = _match_brace(cleaned, open_at)
        if close_at < 0:
            yield m.group(1), cleaned[open_at + 1:]
            return
        yield m.group(1), cleaned[open_at + 1:close_at]
        pos = close_at + 1


def parse_array_data(source_text, dims, log=None):
    """
    Decode every bitmap found in `source_text`.

    `dims` is a Dimensions or a (width, height) pair and decides how the
    bits are folded into the grid; the sizes declared in the C source are
    not used. Returns a list of NamedArray; raises ParseError when nothing
    decodable is found.
    """
    log = log or logger
    dims = Dimensions.coerce(dims)
    cleaned = clean_source(source_text)
    log.debug("cleaned input: %s", cleaned[:200])

    results = []
    segment_count = 0
    declared = 0
    for name, body in find_declarations(cleaned):
        declared += 1
        log.debug("found array: %s", name)
        for i, seg in enumerate(split_segments(body, log)):
            segment_count += 1
            try:
                grid = decode_segment(seg, dims, log)
            except ParseError as e:
                warn(log, RecoverableSegmentWarning, "%s[%d] skipped: %s", name, i, e)
                continue
            results.append(NamedArray(f"{name}[{i}]", grid))

    if segment_count == 0:
        start = cleaned.find("{")
        end = _match_brace(cleaned, start) if start >= 0 else -1
        if end > start:
            log.debug("parsing as single array")
            grid = decode_segment(cleaned[start + 1:end], dims, log)
            results.append(NamedArray(f"{FALLBACK_NAME}[0]", grid))

    if not results:
        kind = NO_HEX_VALUES if segment_count or declared else NO_ARRAY_FOUND
        raise ParseError("no valid array data found", kind)

    log.debug("parsed %d arrays", len(results))
    return results
