import numpy as np
from scipy import sparse

from blendErrors import DegenerateMask
from imageData import MASK_THRESHOLD, RED

# up, right, down, left as (dy, dx)
NEIGHBOURS_4 = ((-1, 0), (0, 1), (1, 0), (0, -1))


def interior_mask(mask, threshold=MASK_THRESHOLD):
    """Boolean grid of the mask pixels whose red channel exceeds ``threshold``."""
    return mask.channel(RED) > threshold


def build_index_map(interior):
    """Number the interior pixels row-major (y outer, x inner).

    Returns ``(idx, coords)``: ``idx`` is a grid holding each pixel's unknown
    number or -1, ``coords`` lists the ``(y, x)`` of unknown k at row k.
    """
    h, w = interior.shape
    idx = -np.ones((h, w), dtype=int)
    coords = np.argwhere(interior)
    if coords.shape[0] == 0:
        raise DegenerateMask("The mask has no pixel with red above the threshold; nothing to blend")
    for k, (y, x) in enumerate(coords):
        idx[y, x] = k
    return idx, coords


def neighbours_4(y, x):
    for dy, dx in NEIGHBOURS_4:
        yield y + dy, x + dx


def index_of(idx, y, x):
    h, w = idx.shape
    if 0 <= y < h and 0 <= x < w:
        return idx[y, x]
    return -1


def build_matrix(idx, coords):
    """Discrete Laplacian over the interior pixels, in triplet form.

    Every interior pixel has four neighbours inside the target, so the
    diagonal is always 4. Neighbours outside the mask contribute nothing here;
    they are boundary values on the right-hand side.
    """
    m = coords.shape[0]

    A_rows = []
    A_cols = []
    A_data = []

    for k, (y, x) in enumerate(coords):
        A_rows.append(k)
        A_cols.append(k)
        A_data.append(4.0)

        for ny, nx in neighbours_4(y, x):
            j = index_of(idx, ny, nx)
            if j != -1:
                A_rows.append(k)
                A_cols.append(j)
                A_data.append(-1.0)

    return sparse.coo_matrix((A_data, (A_rows, A_cols)), shape=(m, m))


def build_rhs(idx, coords, source, target, offset, c):
    """Right-hand side for channel ``c``.

    The guidance field is the source gradient alone. ``offset`` is the
    ``(oy, ox)`` of the mask in the target.
    """
    oy, ox = offset
    m = coords.shape[0]

    # one ring of edge replication so neighbours past the source edge exist
    fonte = np.pad(source.channel(c), 1, mode="edge")
    destino = target.channel(c)

    b = np.zeros(m, dtype=np.float64)

    for k, (y, x) in enumerate(coords):
        gp = fonte[y + 1, x + 1]

        grad = 0.0
        ssum = 0.0
        for ny, nx in neighbours_4(y, x):
            gq = fonte[ny + 1, nx + 1]
            grad += gp - gq

            if index_of(idx, ny, nx) == -1:
                ssum += destino[ny + oy, nx + ox]

        b[k] = grad + ssum

    return b
