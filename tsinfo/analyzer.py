# tsinfo/analyzer.py

"""
Source analyzer: wires configuration, parser, filesystem, classifier,
resolver and inheritance flattener into one object.
"""

import os
import logging
from typing import Dict, Iterable, Optional, Union

from tqdm import tqdm

from .classifier import NodeClassifier
from .config_loader import ConfigLoader
from .edits import apply_edits, change_source_file
from .filesystem import FileSystem
from .inheritance import InheritanceFlattener
from .models import DocletInfo, ResolvedInfo, SourceInfo
from .parser import SourceFile, TypeScriptParser, get_nodes_children
from .resolver import TypeResolver
from .serialization import to_doclet_string

logger = logging.getLogger(__name__)


class SourceAnalyzer:
    """Builds and queries the information model of TypeScript sources."""

    def __init__(self, config: Optional[ConfigLoader] = None,
                 parser: Optional[TypeScriptParser] = None,
                 filesystem: Optional[FileSystem] = None):
        """
        Initialize the analyzer.

        Args:
            config: Configuration; loaded from ``tsinfo.yaml`` if omitted
            parser: Parser collaborator; created from config if omitted
            filesystem: Filesystem collaborator; created from config if omitted
        """
        self.config = config or ConfigLoader()
        self.parser = parser or TypeScriptParser(self.config.get_language())
        self.filesystem = filesystem or FileSystem(
            self.config.get_resolve_extensions(),
            self.config.get_strip_suffixes()
        )
        self.resolver = TypeResolver(
            self.load_source_info,
            self.filesystem,
            self.config.get_native_types()
        )
        self.flattener = InheritanceFlattener(self.resolver)
        logger.info(f"Initialized {self.__class__.__name__}")

    def parse(self, path: str, text: str) -> SourceFile:
        return self.parser.parse(path, text)

    def get_source_info(self, path: str, text: Optional[str] = None,
                        include_nodes: bool = False) -> SourceInfo:
        """
        Build the information model of a source file.

        Args:
            path: File path; read from disk when ``text`` is None
            text: Source text
            include_nodes: Keep syntax tree nodes on the records

        Returns:
            Source information with the file's top-level records
        """
        if text is None:
            text = self.filesystem.read_text(path)

        source_file = self.parse(path, text)
        classifier = NodeClassifier(
            source_file,
            include_nodes=include_nodes,
            strip_suffixes=self.config.get_strip_suffixes()
        )

        source_info = SourceInfo(path=path)
        source_info.code = classifier.get_child_infos(
            get_nodes_children(source_file.root_node)
        )
        if include_nodes:
            source_info.node = source_file

        return source_info

    def load_source_info(self, path: str) -> SourceInfo:
        """Read and classify a file found during type resolution."""
        logger.debug(f"Loading {path}")
        return self.get_source_info(path)

    def resolve_type(self, source_info: SourceInfo, type_name: str) -> Optional[ResolvedInfo]:
        return self.resolver.resolve(source_info, type_name)

    def auto_extend_info(self, source_info: SourceInfo, info):
        return self.flattener.auto_extend_info(source_info, info)

    def apply_edits(self, source: Union[str, SourceFile], edits: Optional[Iterable]):
        """Apply edits to source text, or to a parsed file (which is parsed again)."""
        if isinstance(source, SourceFile):
            return change_source_file(self.parser, source, edits)
        return apply_edits(source, edits)

    def to_doclet_string(self, doclet: DocletInfo, indent: Union[int, str] = 0) -> str:
        return to_doclet_string(
            doclet,
            indent,
            line_width=self.config.get_line_width(),
            min_break=self.config.get_min_break()
        )

    def scan_directory(self, root: str) -> Dict[str, SourceInfo]:
        """
        Build source information for every source file under a directory.

        Args:
            root: Directory to scan

        Returns:
            Mapping of file path to source information, in sorted path order
        """
        exclude_dirs = set(self.config.get_exclude_dirs())
        extensions = tuple(self.config.get_scan_extensions())
        files_to_analyze = []

        logger.info(f"Scanning {root}...")
        for current, dirs, files in os.walk(root):
            dirs[:] = [d for d in dirs if d not in exclude_dirs]
            for file in files:
                if file.endswith(extensions):
                    files_to_analyze.append(os.path.join(current, file))

        files_to_analyze.sort()

        if not files_to_analyze:
            logger.warning(f"No source files found in {root}")
            return {}

        logger.info(f"Found {len(files_to_analyze)} files to analyze")

        results: Dict[str, SourceInfo] = {}
        with tqdm(files_to_analyze, desc="Analyzing files",
                  disable=not self.config.show_progress()) as pbar:
            for file_path in pbar:
                pbar.set_description(f"Analyzing {os.path.basename(file_path)}")
                results[file_path] = self.get_source_info(file_path)

        logger.info(f"Analysis complete: {len(results)} files processed")
        return results
