"""MiniCAM: operations to G-code compilation for a desktop CAM editor."""

__version__ = "0.1.0"
