# png2c.py  —  image(s) -> 1-bit vertical-scan C array
# Usage:
#   python3 -m bwbitmap.png2c <in.png> <width|-> <height|-> <Symbol|-> [options]
#   python3 -m bwbitmap.png2c --multi <Symbol> <a.png> <b.png> ... [options]
# - Emits packed MSB-first, 1=black, columns top-to-bottom
# - "-" keeps the image's own width/height, or derives Symbol from the file name
# - --threshold=N  gray level above which a pixel is white (default 128)
# - --header       wrap in "#pragma once" with Symbol_W / Symbol_H defines
# - --out=FILE     write to FILE instead of stdout
# - --verbose      debug logging
# example: python3 -m bwbitmap.png2c logo.png 264 176 Logo --header --out=Logo.h

import logging
import sys

from .encoder import encode_image_to_array, encode_arrays, symbol_from_filename
from .errors import BitmapError, ValidationError, DIMENSION_MISMATCH
from .grid import grid_dimensions
from .imaging import load_grid, DEFAULT_THRESHOLD

USAGE = (
    "Usage: python3 -m bwbitmap.png2c <in.png> <width|-> <height|-> <Symbol|-> "
    "[--threshold=N] [--header] [--out=FILE] [--verbose]\n"
    "       python3 -m bwbitmap.png2c --multi <Symbol> <a.png> <b.png> ... [options]"
)


def help_exit():
    print(USAGE)
    sys.exit(1)


def split_options(argv):
    """Separate `--name[=value]` options from positional arguments."""
    pos, opts = [], {}
    for a in argv:
        if a.startswith("--"):
            k, _, v = a[2:].partition("=")
            opts[k] = v if v else True
        else:
            pos.append(a)
    return pos, opts


def int_option(opts, name, default, usage_exit):
    v = opts.get(name)
    if v is None:
        return default
    # a bare "--name" carries no value
    if not isinstance(v, str):
        usage_exit()
    try:
        return int(v)
    except ValueError:
        usage_exit()


def _size(arg):
    return None if arg == "-" else int(arg)


def wrap_header(body, sym, w, h):
    return (
        "#pragma once\n"
        f"#define {sym}_W {w}\n"
        f"#define {sym}_H {h}\n"
        f"{body}\n"
    )


def convert_single(path, width, height, sym, threshold):
    grid = load_grid(path, width, height, threshold)
    return grid, encode_image_to_array(grid, sym)


def convert_multi(paths, sym, threshold):
    grids = [load_grid(p, threshold=threshold) for p in paths]
    first = grid_dimensions(grids[0])
    for p, g in zip(paths, grids):
        d = grid_dimensions(g)
        if d != first:
            raise ValidationError(
                f"{p} is {d.width}x{d.height}, all images must be {first.width}x{first.height}",
                DIMENSION_MISMATCH,
            )
    return grids, encode_arrays(grids, sym)


def main(argv=None):
    pos, opts = split_options(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if opts.get("verbose") else logging.WARNING)

    threshold = int_option(opts, "threshold", DEFAULT_THRESHOLD, help_exit)
    out_name = opts.get("out")
    if out_name is True: help_exit()

    try:
        if opts.get("multi"):
            if len(pos) < 2: help_exit()
            sym, paths = pos[0], pos[1:]
            grids, text = convert_multi(paths, sym, threshold)
            count = len(grids)
        else:
            if len(pos) != 4: help_exit()
            path, w_arg, h_arg, sym = pos
            if sym == "-":
                sym = symbol_from_filename(path)
            try:
                width, height = _size(w_arg), _size(h_arg)
            except ValueError:
                help_exit()
            grid, text = convert_single(path, width, height, sym, threshold)
            grids, count = [grid], 1

        dims = grid_dimensions(grids[0])
        if opts.get("header"):
            text = wrap_header(text, sym, dims.width, dims.height)
        else:
            text += "\n"

        if out_name:
            with open(out_name, "w") as f:
                f.write(text)
    except (BitmapError, OSError) as e:
        print(f"Error: {e}")
        return 1

    if out_name:
        print(f"Wrote {out_name} ({count} x {dims.width}x{dims.height}, {dims.total_bytes} bytes each)")
    else:
        sys.stdout.write(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
