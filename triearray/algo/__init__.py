"""Traversal kernels shared by the persistent array operations."""

from .traverse import fold_left, fold_right, iter_range

__all__ = [
    "iter_range",
    "fold_left",
    "fold_right",
]
