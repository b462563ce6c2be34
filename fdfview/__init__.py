"""Interactive wireframe viewer for height-map files, with parsing, projection and rendering helpers."""

__version__ = "0.1.0"
__all__ = ["__version__"]