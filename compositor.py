import numpy as np

from imageData import DEFAULT_GAMMA, clamp


def encode(values, gamma=DEFAULT_GAMMA):
    """Undo the loader's gamma and scale to bytes, truncating like a C cast."""
    out = np.power(clamp(values), gamma) * 255.0
    return np.clip(out, 0, 255).astype(np.uint8)


def encode_target(target, gamma=DEFAULT_GAMMA):
    h, w = target.shape
    out = np.empty((h, w, 4), dtype=np.uint8)
    out[:, :, :3] = encode(target.as_array(), gamma)
    out[:, :, 3] = 255
    return out


def composite(target, solutions, coords, offset, gamma=DEFAULT_GAMMA):
    """Re-encode ``target`` into an RGBA buffer and write the solved pixels over it.

    ``solutions`` holds one vector per channel, indexed like ``coords``.
    Solved values are clamped to [0, 1] before the gamma is applied.
    """
    oy, ox = offset
    out = encode_target(target, gamma)

    rgb = np.stack([np.asarray(s, dtype=np.float64) for s in solutions], axis=1)
    ys = coords[:, 0] + oy
    xs = coords[:, 1] + ox
    out[ys, xs, :3] = encode(rgb, gamma)

    return out
