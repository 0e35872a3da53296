"""Path handling utilities for module resolution."""

from __future__ import annotations

import os
from typing import Iterable, Optional


class PathUtils:
    """Centralized path manipulation utilities."""

    @staticmethod
    def strip_suffix(path: str, suffixes: Iterable[str]) -> str:
        """
        Remove the first matching suffix from a path.

        Parameters
        ----------
        path : str
            Path or module specifier, e.g. ``./Chart.js``.
        suffixes : Iterable[str]
            Suffixes to test in order, e.g. ``[".js"]``.

        Returns
        -------
        str
            Path without the suffix.
        """
        for suffix in suffixes:
            if suffix and path.endswith(suffix) and len(path) > len(suffix):
                return path[: -len(suffix)]
        return path

    @staticmethod
    def join_module_path(source_path: str, specifier: str) -> str:
        """
        Resolve a module specifier against the directory of a source file.

        Parameters
        ----------
        source_path : str
            Path of the importing file.
        specifier : str
            Module specifier as written in the import, e.g. ``../Core/Chart``.

        Returns
        -------
        str
            Absolute, normalized path (without extension probing).
        """
        directory = os.path.dirname(os.path.abspath(source_path))
        return os.path.abspath(os.path.join(directory, specifier))

    @staticmethod
    def has_extension(path: str, extensions: Iterable[str]) -> Optional[str]:
        """Return the first extension in ``extensions`` that ``path`` ends with."""
        for extension in extensions:
            if path.endswith(extension):
                return extension
        return None
