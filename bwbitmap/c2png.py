# c2png.py  —  C array source -> one PNG preview per bitmap
# Usage:
#   python3 -m bwbitmap.c2png <in.c> <width> <height> [--scale=N] [--outdir=DIR] [--verbose]
# - width/height decide how the bits are folded, declared array sizes are ignored
# - files are named after the arrays, e.g. Num[1] -> Num_1.png
# example: python3 -m bwbitmap.c2png digits.h 32 64 --scale=4 --outdir=preview

import logging
import os
import re
import sys

from .decoder import parse_array_data
from .errors import BitmapError
from .grid import Dimensions
from .imaging import save_grid_png
from .png2c import split_options, int_option

USAGE = "Usage: python3 -m bwbitmap.c2png <in.c> <width> <height> [--scale=N] [--outdir=DIR] [--verbose]"


def help_exit():
    print(USAGE)
    sys.exit(1)


def png_name(array_name):
    return re.sub(r"[^A-Za-z0-9_]+", "_", array_name).strip("_") + ".png"


def main(argv=None):
    pos, opts = split_options(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(level=logging.DEBUG if opts.get("verbose") else logging.WARNING)
    if len(pos) != 3: help_exit()

    path = pos[0]
    scale = int_option(opts, "scale", 1, help_exit)
    outdir = opts.get("outdir", ".")
    if outdir is True: help_exit()

    try:
        dims = Dimensions.parse(pos[1], pos[2])
        # generators often leave GBK or Latin-1 comments; only ASCII matters here
        with open(path, encoding="latin-1") as f:
            arrays = parse_array_data(f.read(), dims)

        os.makedirs(outdir, exist_ok=True)
        for a in arrays:
            save_grid_png(a.data, os.path.join(outdir, png_name(a.name)), scale)
    except (BitmapError, OSError) as e:
        print(f"Error: {e}")
        return 1

    print(f"Wrote {len(arrays)} PNG(s) to {outdir} ({dims.width}x{dims.height}, scale {scale})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
