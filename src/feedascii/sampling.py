import numpy as np
from PIL import Image

# Weighted RGB coefficients for luminance. They intentionally differ from the
# Rec. 709 values and must stay as they are for output to remain stable.
RED_WEIGHT = 0.21
GREEN_WEIGHT = 0.72
BLUE_WEIGHT = 0.07


def rasterize(image: Image.Image, width: int, height: int) -> np.ndarray:
    """Stretch an image onto a (height, width) RGB grid.

    The aspect ratio is not preserved and alpha is discarded. Returns a uint8
    array of shape (height, width, 3) in row-major order.
    """
    if width < 1 or height < 1:
        raise ValueError(f"Raster size must be at least 1x1, got {width}x{height}")
    rgb = image.convert("RGB")
    if rgb.size != (width, height):
        rgb = rgb.resize((width, height), Image.LANCZOS)
    return np.asarray(rgb, dtype=np.uint8).reshape(height, width, 3)


def grayscale(r: float, g: float, b: float) -> float:
    return RED_WEIGHT * r + GREEN_WEIGHT * g + BLUE_WEIGHT * b


def luminance_field(raster: np.ndarray) -> np.ndarray:
    """Luminance for every cell of a raster, same shape minus the channel axis.

    Evaluated in the same order as :func:`grayscale` so both agree bit for bit.
    """
    arr = raster.astype(np.float64)
    return RED_WEIGHT * arr[..., 0] + GREEN_WEIGHT * arr[..., 1] + BLUE_WEIGHT * arr[..., 2]
