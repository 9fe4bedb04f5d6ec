"""Sparse one-to-many and many-to-many relations for mesh topology, with EnSight geometry output."""

__version__ = "0.1.0"
__all__ = ["o2m", "topology", "m2m", "mm2m", "ensight", "textio"]