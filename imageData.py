import numpy as np

DEFAULT_GAMMA = 2.2
MASK_THRESHOLD = 0.99

RED, GREEN, BLUE = 0, 1, 2
CHANNELS = (RED, GREEN, BLUE)


class Image:
    """Linear-RGB image stored as a flat, row-major array of RGB triples.

    ``pixels`` has shape ``(width * height, 3)``. Values are nominally in
    [0, 1] but are not clamped.
    """

    def __init__(self, width, height, pixels):
        pixels = np.array(pixels, dtype=np.float64)
        if pixels.shape != (width * height, 3):
            raise ValueError(
                f"expected {width * height} RGB triples for a {width}x{height} image, "
                f"got array of shape {pixels.shape}"
            )
        self.width = int(width)
        self.height = int(height)
        self.pixels = pixels
        self.pixels.flags.writeable = False

    @classmethod
    def from_array(cls, rgb):
        rgb = np.asarray(rgb, dtype=np.float64)
        if rgb.ndim != 3 or rgb.shape[2] != 3:
            raise ValueError(f"expected an HxWx3 array, got shape {rgb.shape}")
        h, w = rgb.shape[:2]
        return cls(w, h, rgb.reshape(h * w, 3))

    @classmethod
    def filled(cls, width, height, rgb):
        return cls(width, height, np.tile(np.asarray(rgb, dtype=np.float64), (width * height, 1)))

    @property
    def shape(self):
        return self.height, self.width

    def flatten(self, x, y):
        return self.width * y + x

    def contains(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def rgb(self, x, y):
        if not self.contains(x, y):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return self.pixels[self.flatten(x, y)]

    def channel(self, c):
        """Channel ``c`` as a height x width array."""
        if c not in CHANNELS:
            raise IndexError(f"channel index {c} out of range")
        return self.pixels[:, c].reshape(self.height, self.width)

    def as_array(self):
        return self.pixels.reshape(self.height, self.width, 3)

    def __repr__(self):
        return f"Image(width={self.width}, height={self.height})"


def clamp(values):
    return np.clip(values, 0.0, 1.0)
