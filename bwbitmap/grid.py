# grid.py  —  pixel grid model shared by the encoder and decoder
# A grid is a list of rows; 0 = black, 1 = white.
# Helpers here never modify a grid in place, they hand back a new one.

from dataclasses import dataclass, field

from .errors import (
    ValidationError,
    BAD_DIMENSIONS,
    EMPTY_GRID,
    RAGGED_GRID,
)

BLACK = 0
WHITE = 1

# Panel size the converter assumes when the caller gives none (2.7" e-paper)
DEFAULT_WIDTH = 264
DEFAULT_HEIGHT = 176


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int

    def __post_init__(self):
        for label, v in (("width", self.width), ("height", self.height)):
            if isinstance(v, bool) or not isinstance(v, int) or v <= 0:
                raise ValidationError(
                    f"{label} must be a positive integer, got {v!r}", BAD_DIMENSIONS
                )

    @classmethod
    def parse(cls, width, height):
        """Build from ints or numeric strings, e.g. values typed into a form."""
        vals = []
        for label, v in (("width", width), ("height", height)):
            if isinstance(v, str):
                v = v.strip()
                if not v.isdigit():
                    raise ValidationError(f"invalid {label}: {v!r}", BAD_DIMENSIONS)
                v = int(v)
            vals.append(v)
        return cls(vals[0], vals[1])

    @classmethod
    def coerce(cls, dims):
        if isinstance(dims, cls):
            return dims
        try:
            width, height = dims
        except (TypeError, ValueError):
            raise ValidationError(f"expected (width, height), got {dims!r}", BAD_DIMENSIONS) from None
        return cls.parse(width, height)

    @property
    def total_bits(self):
        return self.width * self.height

    @property
    def total_bytes(self):
        return (self.total_bits + 7) // 8


@dataclass
class NamedArray:
    name: str
    data: list = field(default_factory=list)

    @property
    def width(self):
        return len(self.data[0]) if self.data else 0

    @property
    def height(self):
        return len(self.data)


def new_grid(dims, fill=WHITE):
    dims = Dimensions.coerce(dims)
    return [[fill] * dims.width for _ in range(dims.height)]


def grid_dimensions(grid):
    return Dimensions(len(grid[0]), len(grid))


def validate_grid(grid):
    """Check the grid is non-empty and rectangular; returns its Dimensions."""
    if not grid or not grid[0]:
        raise ValidationError("pixel grid is empty", EMPTY_GRID)
    w = len(grid[0])
    for y, row in enumerate(grid):
        if len(row) != w:
            raise ValidationError(
                f"row {y} has {len(row)} cells, expected {w}", RAGGED_GRID
            )
    return grid_dimensions(grid)


def flip_pixel(grid, row, col):
    out = [list(r) for r in grid]
    if 0 <= row < len(out) and 0 <= col < len(out[row]):
        out[row][col] = BLACK if out[row][col] == WHITE else WHITE
    return out


def invert_grid(grid):
    return [[BLACK if px == WHITE else WHITE for px in row] for row in grid]
