"""Colour helpers shared by the quantizer and the swatch renderer."""


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """24-bit lowercase hex with a leading '#', zero-padded: (0, 1, 2) -> '#000102'."""
    return f'#{int(r):02x}{int(g):02x}{int(b):02x}'


def luminance(rgb: tuple[int, int, int]) -> float:
    r, g, b = rgb
    return (r * 299 + g * 587 + b * 114) / 1000


def text_colour_for(rgb: tuple[int, int, int]) -> tuple[int, int, int]:
    """Black on light backgrounds, white on dark ones."""
    return (0, 0, 0) if luminance(rgb) >= 128 else (255, 255, 255)
