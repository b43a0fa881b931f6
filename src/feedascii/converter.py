import math
from collections.abc import Iterable

import numpy as np
from PIL import Image

from feedascii.model import RenderConfig
from feedascii.sampling import luminance_field, rasterize


def glyph_index(luminance: float, length: int) -> int:
    """Palette index for a luminance value in [0, 255].

    Rounds up, so 0 maps to the first glyph and 255 to the last. Values
    outside the range are clamped rather than rejected.
    """
    index = math.ceil((length - 1) * luminance / 255)
    return min(max(index, 0), length - 1)


def map_glyph(luminance: float, palette: str) -> str:
    return palette[glyph_index(luminance, len(palette))]


def map_glyphs(field: np.ndarray, palette: str) -> list[str]:
    """Vectorized :func:`map_glyph` over a luminance field, flattened row-major."""
    length = len(palette)
    indices = np.ceil((length - 1) * np.ravel(field) / 255)
    indices = np.clip(indices, 0, length - 1).astype(np.intp)
    glyphs = np.array(list(palette))
    return glyphs[indices].tolist()


def compose(glyphs: Iterable[str], width: int) -> str:
    """Join glyphs into lines of ``width``, with a newline after every full line."""
    if width < 1:
        raise ValueError(f"Width must be at least 1, got {width}")
    out = []
    for i, glyph in enumerate(glyphs):
        out.append(glyph)
        if (i + 1) % width == 0:
            out.append("\n")
    return "".join(out)


def image_to_ascii(
    image: Image.Image,
    width: int,
    height: int,
    config: RenderConfig | None = None,
) -> str:
    if config is None:
        config = RenderConfig()
    raster = rasterize(image, width, height)
    field = luminance_field(raster)
    return compose(map_glyphs(field, config.palette), width)
