# tsinfo/filesystem.py

"""
Filesystem access for the resolver: existence checks, reading sources and
turning import specifiers into file paths.
"""

import logging
import os
from typing import Iterable, Optional

from .utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


class FileSystem:
    """Blocking filesystem collaborator."""

    def __init__(self, extensions: Iterable[str] = ('.d.ts', '.ts'),
                 strip_suffixes: Iterable[str] = ('.js',)):
        """
        Initialize the filesystem helper.

        Args:
            extensions: Extensions probed, in order, for module specifiers
            strip_suffixes: Specifier suffixes removed before probing
        """
        self.extensions = list(extensions)
        self.strip_suffixes = list(strip_suffixes)

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def read_text(self, file_path: str) -> str:
        """
        Read a source file.

        Args:
            file_path: Path to file

        Returns:
            File contents

        Raises:
            OSError: The file could not be read
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return f.read()
        except UnicodeDecodeError:
            logger.warning(f"Failed to read {file_path} with UTF-8, trying latin-1")
            with open(file_path, 'r', encoding='latin-1') as f:
                return f.read()
        except OSError as e:
            logger.error(f"Failed to read {file_path}: {e}")
            raise

    def resolve_module_path(self, source_path: str, specifier: str) -> Optional[str]:
        """
        Find the file an import specifier refers to.

        Args:
            source_path: Path of the importing file
            specifier: Module specifier, e.g. ``./Options.js``

        Returns:
            Absolute path of an existing file, or None
        """
        path = PathUtils.strip_suffix(
            PathUtils.join_module_path(source_path, specifier),
            self.strip_suffixes
        )

        if PathUtils.has_extension(path, self.extensions) and self.exists(path):
            return path

        for extension in self.extensions:
            candidate = path + extension
            if self.exists(candidate):
                return candidate

        logger.debug(f"No module file for '{specifier}' from {source_path}")
        return None
