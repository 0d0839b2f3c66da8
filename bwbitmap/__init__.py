from .decoder import parse_array_data
from .encoder import encode_image_to_array, encode_arrays, symbol_from_filename
from .errors import (
    BitmapError,
    ParseError,
    ValidationError,
    RecoverableTokenWarning,
    RecoverableSegmentWarning,
)
from .grid import (
    Dimensions,
    NamedArray,
    new_grid,
    validate_grid,
    grid_dimensions,
    flip_pixel,
    invert_grid,
    BLACK,
    WHITE,
)
from .imaging import image_to_grid, load_grid, grid_to_image, save_grid_png

__version__ = "0.1.0"
