"""Error types raised by the palette_tool core."""


class InvalidInput(ValueError):
    """Misuse of the quantizer: empty samples, k < 1, max_iterations < 1, bad seeds."""
