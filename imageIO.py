import logging

import cv2
import numpy as np
from imageio.v2 import imread, imwrite

from imageData import DEFAULT_GAMMA, Image

logger = logging.getLogger(__name__)


def ensure_rgb(img):
    if img.ndim == 3 and img.shape[2] in (1, 2):
        # gray or gray + alpha
        img = np.ascontiguousarray(img[:, :, 0])
    if img.ndim == 2:
        return cv2.cvtColor(img, cv2.COLOR_GRAY2RGB)
    if img.shape[2] == 4:
        return img[:, :, :3]
    return img


def image_from_array(img, gamma=DEFAULT_GAMMA):
    """Convert an 8- or 16-bit HxW(xC) array to a linear-RGB Image.

    Each channel becomes ``(v / max) ** (1 / gamma)``.
    """
    img = np.asarray(img)
    if img.dtype == bool:
        # 1-bit images, e.g. black and white PNG masks
        img = img.astype(np.uint8) * 255
    if img.dtype == np.uint8:
        scale = 255.0
    elif img.dtype == np.uint16:
        scale = 65535.0
    else:
        raise ValueError(f"unsupported pixel type {img.dtype}; expected uint8 or uint16")

    rgb = ensure_rgb(img).astype(np.float64) / scale
    return Image.from_array(np.power(rgb, 1.0 / gamma))


def load_image(path, gamma=DEFAULT_GAMMA):
    img = imread(path)
    logger.debug("loaded %s: shape %s, dtype %s", path, img.shape, img.dtype)
    return image_from_array(img, gamma)


def save_output(path, out):
    """Write an RGBA buffer from the compositor."""
    out = np.asarray(out, dtype=np.uint8)
    if out.ndim != 3 or out.shape[2] != 4:
        raise ValueError(f"expected an HxWx4 RGBA buffer, got shape {out.shape}")
    imwrite(path, out)
    logger.debug("wrote %s (%dx%d)", path, out.shape[1], out.shape[0])
