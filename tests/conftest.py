"""
Pytest configuration and fixtures shared by the unit tests.
"""

import os
from pathlib import Path
from typing import Callable, Dict

import pytest

from tsinfo.analyzer import SourceAnalyzer
from tsinfo.config_loader import ConfigLoader


@pytest.fixture
def config(tmp_path):
    """Default configuration (the config file does not exist)."""
    return ConfigLoader(config_path=str(tmp_path / "missing.yaml"))


@pytest.fixture
def analyzer(config):
    """Analyzer with default configuration."""
    return SourceAnalyzer(config)


@pytest.fixture
def source_tree(tmp_path) -> Callable[[Dict[str, str]], Path]:
    """Write a dictionary of relative path -> source text below tmp_path."""

    def write(files: Dict[str, str]) -> Path:
        for relative_path, text in files.items():
            path = tmp_path / relative_path
            os.makedirs(path.parent, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return tmp_path

    return write
