# errors.py  —  exceptions and warnings raised by the bitmap codec

NO_ARRAY_FOUND = "no-array-found"
NO_HEX_VALUES = "no-hex-values"

BAD_DIMENSIONS = "bad-dimensions"
EMPTY_GRID = "empty-grid"
RAGGED_GRID = "ragged-grid"
DIMENSION_MISMATCH = "dimension-mismatch"


class BitmapError(Exception):
    """Base class for every fatal codec error. `kind` is a short tag."""

    def __init__(self, message, kind=None):
        super().__init__(message)
        self.kind = kind


class ParseError(BitmapError):
    pass


class ValidationError(BitmapError):
    pass


class RecoverableTokenWarning(UserWarning):
    pass


class RecoverableSegmentWarning(UserWarning):
    pass
