"""regionseg: edge detection, seeded region growing and foreground highlighting for raster images."""

__version__ = "0.1.0"
