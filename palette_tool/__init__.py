"""palette-tool — dominant colour palettes from raster images."""

__version__ = '0.1.0'
