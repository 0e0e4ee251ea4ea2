import logging
import time

from blendErrors import BlendError
from compositor import composite
from imageData import CHANNELS, DEFAULT_GAMMA, MASK_THRESHOLD
from placeMask import validate_placement, validate_source
from poisson import build_index_map, build_matrix, build_rhs, interior_mask
from sparseSolver import factorize

logger = logging.getLogger(__name__)


class BlendResult:
    """Outcome of :func:`blend`: an RGBA buffer or a failure, never both."""

    def __init__(self, output=None, error=None):
        self.output = output
        self.error = error

    @property
    def ok(self):
        return self.error is None

    @property
    def failure(self):
        return None if self.error is None else self.error.kind

    @property
    def message(self):
        return None if self.error is None else self.error.message

    def unwrap(self):
        if self.error is not None:
            raise self.error
        return self.output

    def __repr__(self):
        if self.ok:
            return f"BlendResult(output={self.output.shape})"
        return f"BlendResult(failure={self.failure.value}, message={self.message!r})"


def solve_channels(mask, source, target, mx, my, threshold=MASK_THRESHOLD):
    """Solve the Poisson system for R, G and B.

    Returns ``(solutions, coords)``; raises a ``BlendError`` subclass on bad input.
    """
    validate_placement(mask.width, mask.height, target.width, target.height, mx, my)
    validate_source(source, mask)

    offset = (my, mx)

    t0 = time.perf_counter()
    idx, coords = build_index_map(interior_mask(mask, threshold))
    A = build_matrix(idx, coords)
    logger.debug("assembled %d unknowns, %d non-zeros in %.1fms",
                 coords.shape[0], A.nnz, (time.perf_counter() - t0) * 1000)

    t0 = time.perf_counter()
    system = factorize(A)
    logger.debug("factorized in %.1fms", (time.perf_counter() - t0) * 1000)

    solutions = []
    for c in CHANNELS:
        t0 = time.perf_counter()
        b = build_rhs(idx, coords, source, target, offset, c)
        solutions.append(system.solve(b))
        logger.debug("channel %d solved in %.1fms", c, (time.perf_counter() - t0) * 1000)

    return solutions, coords


def blend(mask, source, target, mx, my, gamma=DEFAULT_GAMMA, threshold=MASK_THRESHOLD):
    """Paste ``source`` into ``target`` at (mx, my) through ``mask`` with Poisson blending.

    All three images are linear-RGB :class:`imageData.Image` objects; the source
    is read at mask-local coordinates. ``gamma`` must match the one used to
    load the images. Returns a :class:`BlendResult` whose output is a
    ``(target.height, target.width, 4)`` uint8 RGBA array. A non-positive
    ``gamma`` is a caller error and raises ``ValueError``.
    """
    if gamma <= 0:
        raise ValueError(f"gamma must be positive, got {gamma}")

    try:
        solutions, coords = solve_channels(mask, source, target, mx, my, threshold)
    except BlendError as e:
        logger.warning("%s: %s", e.kind.value, e.message)
        return BlendResult(error=e)

    out = composite(target, solutions, coords, (my, mx), gamma)
    logger.info("blended %d pixels into %dx%d target at (%d, %d)",
                coords.shape[0], target.width, target.height, mx, my)
    return BlendResult(output=out)
