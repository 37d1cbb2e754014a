"""
Utility functions for the glTF Clip Baker addon.
"""

import sys
from typing import List, Sequence

from mathutils import Matrix
from .constants import LOG_PREFIX


def log_info(message):
    """Print a diagnostic line to the console"""
    print(f"{LOG_PREFIX}{message}")


def log_warning(message):
    """Print a warning line to stderr"""
    print(f"{LOG_PREFIX}WARNING: {message}", file=sys.stderr)


def to_matrix(value) -> Matrix:
    """Convert a Matrix, a 4x4 list of rows or a flattened row-major 16-element list to a 4x4 Matrix.

    Anything else yields the identity.
    """
    if isinstance(value, Matrix):
        return value.to_4x4()
    if value is None or isinstance(value, (str, bytes)):
        return Matrix.Identity(4)

    try:
        items = list(value)
    except TypeError:
        return Matrix.Identity(4)

    if len(items) == 4 and all(hasattr(row, "__len__") and len(row) == 4 for row in items):
        return Matrix([[float(x) for x in row] for row in items])

    if len(items) == 16:
        return Matrix([[float(x) for x in items[row * 4:row * 4 + 4]] for row in range(4)])

    return Matrix.Identity(4)


def format_times(times: Sequence[float]) -> str:
    return " ".join(f"{t:g}" for t in times)
