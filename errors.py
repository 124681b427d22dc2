"""
Fog Machine error taxonomy.

Every failure aborts the current generation call. Callers can catch
FogMachineError for "output not usable", or a specific subclass when they
need to tell bad parameters apart from sink problems.

Hierarchy:
    FogMachineError
    ├── PathError            sink cannot be created or opened
    ├── IOFailure            failure while streaming to the sink
    └── ParameterError       (also a ValueError)
        ├── InvalidFormat        unparseable number / hole string / index
        ├── UnsupportedElement   value of a type no hole form accepts
        ├── ScaleMismatch        coordinate finer than governing coarseness
        ├── InvalidScale         value is not one of the five magnitudes
        ├── IndexOutOfBounds     zone raster index outside [0, n² - 1]
        ├── InvalidIndex         Myst index is not a natural number
        ├── DuplicateHole        two holes resolve to the same anchor
        └── OutOfBoundsHole      zone hole outside the generated area
"""


class FogMachineError(Exception):
    """Root of all Fog Machine failures."""


class PathError(FogMachineError):
    """Output sink cannot be created or written."""


class IOFailure(FogMachineError):
    """Writing to an already opened sink failed."""


class ParameterError(FogMachineError, ValueError):
    """Malformed input, duplicate single-assignment field or unsupported value."""


class InvalidFormat(ParameterError):
    pass


class UnsupportedElement(ParameterError):
    pass


class ScaleMismatch(ParameterError):
    pass


class InvalidScale(ParameterError):
    pass


class IndexOutOfBounds(ParameterError):
    pass


class InvalidIndex(ParameterError):
    pass


class DuplicateHole(ParameterError):
    pass


class OutOfBoundsHole(ParameterError):
    pass


__all__ = [
    "FogMachineError",
    "PathError",
    "IOFailure",
    "ParameterError",
    "InvalidFormat",
    "UnsupportedElement",
    "ScaleMismatch",
    "InvalidScale",
    "IndexOutOfBounds",
    "InvalidIndex",
    "DuplicateHole",
    "OutOfBoundsHole",
]
