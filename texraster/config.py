import logging

import numpy as np

logger = logging.getLogger(__name__)

# Scalar type used for x/u/v interpolation. float32 reproduces the reference
# output bit for bit; float64 accumulates less drift over tall triangles.
DEFAULT_PRECISION = "float32"

PRECISIONS = {
    "float32": np.float32,
    "float64": np.float64,
}

# Colour returned by Texture.at outside the image.
OUTSIDE_COLOR = 0


def resolve_precision(precision=None):
    """Return the numpy scalar type for a precision name or dtype.

    None selects DEFAULT_PRECISION.
    """
    if precision is None:
        precision = DEFAULT_PRECISION
    if isinstance(precision, str):
        key = precision.lower()
    else:
        try:
            key = np.dtype(precision).name
        except TypeError:
            raise ValueError(f"unknown precision {precision!r}") from None
    if key not in PRECISIONS:
        raise ValueError(f"unsupported precision {precision!r}, expected one of {sorted(PRECISIONS)}")
    logger.debug("interpolating in %s", key)
    return PRECISIONS[key]
