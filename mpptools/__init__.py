"""Frame formats, test patterns, raw image I/O, checksums and frame-rate counting for raw video."""

__version__ = "0.1.0"

__all__ = [
    "checksum",
    "formats",
    "fps",
    "frame",
    "image_fill",
    "image_io",
    "naming",
]