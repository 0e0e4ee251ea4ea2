import logging

import numpy as np
from scipy import sparse
from scipy.sparse.linalg import splu

from blendErrors import FactorizationFailure

logger = logging.getLogger(__name__)


class FactoredSystem:
    """A symmetric positive-definite matrix factorized once, solved many times."""

    def __init__(self, lu, n):
        self._lu = lu
        self.n = n

    def solve(self, b):
        b = np.asarray(b, dtype=np.float64)
        if b.shape != (self.n,):
            raise ValueError(f"right-hand side must have shape ({self.n},), got {b.shape}")

        x = self._lu.solve(b)
        if not np.all(np.isfinite(x)):
            raise FactorizationFailure("The solve produced non-finite values")
        return x


def factorize(matrix):
    """Factorize ``matrix`` in symmetric mode and check that it is positive definite.

    SuperLU is told to keep diagonal pivots, so the diagonal of U holds the
    pivots of an LDL^T factorization; the matrix is positive definite iff all
    of them are positive.
    """
    n_rows, n_cols = matrix.shape
    if n_rows != n_cols:
        raise FactorizationFailure(f"matrix must be square, got shape {matrix.shape}")
    if n_rows == 0:
        raise FactorizationFailure("cannot factorize an empty matrix")

    A = sparse.csc_matrix(matrix, dtype=np.float64)
    if (A != A.T).nnz:
        raise FactorizationFailure("matrix is not symmetric")
    if np.any(A.diagonal() <= 0):
        raise FactorizationFailure("matrix is not positive definite (non-positive diagonal entry)")

    try:
        lu = splu(
            A,
            permc_spec="MMD_AT_PLUS_A",
            diag_pivot_thresh=0.0,
            options={"SymmetricMode": True},
        )
    except RuntimeError as e:
        raise FactorizationFailure(f"factorization failed: {e}") from e

    # a row swap means U no longer holds the symmetric pivots
    if not np.array_equal(lu.perm_r, lu.perm_c):
        raise FactorizationFailure("matrix is not positive definite (factorization needed row pivoting)")

    pivots = lu.U.diagonal()
    if not np.all(np.isfinite(pivots)) or np.any(pivots <= 0):
        raise FactorizationFailure(
            f"matrix is not positive definite (smallest pivot {pivots.min():.3g})"
        )

    logger.debug("factorized %dx%d matrix, %d non-zeros in L+U", n_rows, n_cols, lu.L.nnz + lu.U.nnz)
    return FactoredSystem(lu, n_rows)
