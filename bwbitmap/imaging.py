# imaging.py  —  Pillow side of the converter
# Photos are resized and thresholded into grids; grids are rendered back
# to 1-bit images for previews.

import logging

from PIL import Image

from .grid import validate_grid, Dimensions, BLACK, WHITE

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 128


def image_to_grid(im, width=None, height=None, threshold=DEFAULT_THRESHOLD):
    """
    Threshold a Pillow image into a grid.

    The image is resized to width x height (its own size by default) and
    each pixel becomes white when the mean of its R, G and B channels is
    above `threshold`, black otherwise.
    """
    dims = Dimensions(
        im.width if width is None else width,
        im.height if height is None else height,
    )
    if im.size != (dims.width, dims.height):
        im = im.resize((dims.width, dims.height), Image.LANCZOS)
    im = im.convert("RGB")
    px = im.load()

    grid = []
    for y in range(dims.height):
        row = []
        for x in range(dims.width):
            r, g, b = px[x, y]
            row.append(WHITE if (r + g + b) / 3 > threshold else BLACK)
        grid.append(row)
    logger.debug("thresholded %dx%d image at %d", dims.width, dims.height, threshold)
    return grid


def load_grid(path, width=None, height=None, threshold=DEFAULT_THRESHOLD):
    with Image.open(path) as im:
        return image_to_grid(im, width, height, threshold)


def grid_to_image(grid, scale=1):
    dims = validate_grid(grid)
    im = Image.new("1", (dims.width, dims.height), 255)
    px = im.load()
    for y, row in enumerate(grid):
        for x, v in enumerate(row):
            px[x, y] = 0 if v == BLACK else 255
    if scale > 1:
        im = im.resize((dims.width * scale, dims.height * scale), Image.NEAREST)
    return im


def save_grid_png(grid, path, scale=1):
    grid_to_image(grid, scale).save(path, format="PNG")
    logger.debug("wrote %s", path)
