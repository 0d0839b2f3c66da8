# encoder.py  —  pixel grid -> C array literal
# Inverse of decoder.py: MSB-first, 1 = black, vertical scan.
# The final byte is zero-padded when width*height is not a multiple of 8.

import logging
import os
import re

from .errors import ValidationError, DIMENSION_MISMATCH, EMPTY_GRID
from .grid import validate_grid, BLACK

logger = logging.getLogger(__name__)

BYTES_PER_LINE = 16


def symbol_from_filename(path):
    base = os.path.basename(path)
    base = re.sub(r"\.[^/.]+$", "", base)
    return re.sub(r"[^a-zA-Z0-9_]", "_", base)


def grid_to_bytes(grid):
    dims = validate_grid(grid)
    h = dims.height
    total_bits = dims.total_bits

    buf = bytearray(dims.total_bytes)
    for i in range(len(buf)):
        byte = 0
        for bit in range(8):
            bit_index = i * 8 + bit
            if bit_index >= total_bits:
                break
            col, row = divmod(bit_index, h)
            if grid[row][col] == BLACK:
                byte |= 1 << (7 - bit)
        buf[i] = byte
    return bytes(buf)


def as_hex_list(b):
    parts = []
    for i, v in enumerate(b):
        if i and i % BYTES_PER_LINE == 0:
            parts.append("\n")
        parts.append("0X%02X" % v)
        if i < len(b) - 1:
            parts.append(",")
    return "".join(parts)


def encode_image_to_array(grid, symbol_name, log=None):
    """Serialize one grid as `const unsigned char NAME[N] = {...};`."""
    log = log or logger
    buf = grid_to_bytes(grid)
    log.debug("generated C array %s with %d bytes", symbol_name, len(buf))
    return f"const unsigned char {symbol_name}[{len(buf)}] = {{\n{as_hex_list(buf)}\n}};"


def encode_arrays(grids, symbol_name, log=None):
    """
    Serialize several same-sized grids as one two-dimensional declaration,
    `const unsigned char NAME[count][bytes] = { {...}, {...} };`, which the
    decoder splits back into NAME[0], NAME[1], ...
    """
    log = log or logger
    if not grids:
        raise ValidationError("no grids to encode", EMPTY_GRID)

    first = validate_grid(grids[0])
    bodies = []
    for i, grid in enumerate(grids):
        dims = validate_grid(grid)
        if dims != first:
            raise ValidationError(
                f"grid {i} is {dims.width}x{dims.height}, expected {first.width}x{first.height}",
                DIMENSION_MISMATCH,
            )
        bodies.append("{\n" + as_hex_list(grid_to_bytes(grid)) + "\n}")

    log.debug("generated %d sub-arrays of %d bytes for %s", len(grids), first.total_bytes, symbol_name)
    return (
        f"const unsigned char {symbol_name}[{len(grids)}][{first.total_bytes}] = {{\n"
        + ",\n".join(bodies)
        + "\n};"
    )
