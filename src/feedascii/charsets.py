# Index 0 is the glyph for luminance 0, the last index for luminance 255.
SIMPLE = " .:-=+*#%@"

DENSE = "$@B%8&WM#*oahkbdpqwmZO0QLCJUYXzcvunxrjft/|()1{}[]?-_+~<>i!lI;:,\"^`'. "

SIMPLE_INVERTED = SIMPLE[::-1]

DENSE_INVERTED = DENSE[::-1]

# (simple, invert) -> palette
PALETTES = {
    (True, False): SIMPLE,
    (True, True): SIMPLE_INVERTED,
    (False, False): DENSE,
    (False, True): DENSE_INVERTED,
}
