"""Utility modules for source analysis."""

from .path_utils import PathUtils
from .text_utils import TextUtils

__all__ = [
    "PathUtils",
    "TextUtils",
]
