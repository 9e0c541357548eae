"""Extents, layout mappings, non-owning views and owning arrays over flat sequences."""

__version__ = "0.1.0"

__all__ = ["layout", "mdspan", "mdarray", "tiled", "demo"]