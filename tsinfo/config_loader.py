# tsinfo/config_loader.py

"""
Configuration loader for the source analysis engine.
Loads settings from tsinfo.yaml and environment variables.
"""

import copy
import os
import sys
import yaml
import logging
from dotenv import load_dotenv
from typing import Dict, Any, List

from .resolver import NATIVE_TYPES

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and manages configuration settings."""

    DEFAULT_CONFIG = {
        'parser': {
            'language': 'typescript'
        },
        'resolver': {
            'extensions': ['.d.ts', '.ts'],
            'strip_suffixes': ['.js']
        },
        'types': {
            'native_types': list(NATIVE_TYPES)
        },
        'doclets': {
            'line_width': 80,
            'min_break': 40
        },
        'scan': {
            'extensions': ['.d.ts', '.ts', '.tsx'],
            'exclude_dirs': [
                'node_modules', '.git', 'dist', 'build', '.vscode', '.idea'
            ],
            'progress': False
        },
        'logging': {
            'level': 'INFO',
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            'file': None
        }
    }

    ENV_OVERRIDES = {
        'TSINFO_LOG_LEVEL': 'logging.level',
        'TSINFO_LOG_FILE': 'logging.file',
        'TSINFO_LANGUAGE': 'parser.language',
    }

    def __init__(self, config_path: str = 'tsinfo.yaml'):
        """
        Initialize the configuration loader.

        Args:
            config_path: Path to the configuration YAML file
        """
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """
        Load configuration from file, then apply environment overrides.

        Returns:
            Configuration dictionary
        """
        config = copy.deepcopy(self.DEFAULT_CONFIG)

        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    user_config = yaml.safe_load(f)
                    if user_config:
                        config = self._merge_configs(config, user_config)
                        logger.info(f"Loaded configuration from {self.config_path}")
            except (OSError, yaml.YAMLError) as e:
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                logger.info("Using default configuration")
        else:
            logger.debug(f"Config file not found at {self.config_path}, using defaults")

        load_dotenv()
        for env_name, key in self.ENV_OVERRIDES.items():
            value = os.environ.get(env_name)
            if value:
                self._set(config, key, value)

        return config

    def _merge_configs(self, default: Dict, user: Dict) -> Dict:
        """
        Recursively merge user config into default config.

        Args:
            default: Default configuration
            user: User configuration

        Returns:
            Merged configuration
        """
        merged = default.copy()

        for key, value in user.items():
            if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
                merged[key] = self._merge_configs(merged[key], value)
            else:
                merged[key] = value

        return merged

    @staticmethod
    def _set(config: Dict[str, Any], key: str, value: Any) -> None:
        keys = key.split('.')
        target = config
        for k in keys[:-1]:
            target = target.setdefault(k, {})
        target[keys[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Args:
            key: Configuration key (e.g., 'resolver.extensions')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        keys = key.split('.')
        value = self.config

        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def get_language(self) -> str:
        """Get the default tree-sitter grammar name."""
        return self.get('parser.language', 'typescript')

    def get_resolve_extensions(self) -> List[str]:
        """Get extensions probed for extension-less module specifiers, in order."""
        return list(self.get('resolver.extensions', ['.d.ts', '.ts']))

    def get_strip_suffixes(self) -> List[str]:
        """Get module specifier suffixes removed before probing."""
        return list(self.get('resolver.strip_suffixes', ['.js']))

    def get_native_types(self) -> List[str]:
        """Get type names that never refer to a user declaration."""
        return list(self.get('types.native_types', []))

    def get_line_width(self) -> int:
        """Get the soft wrap column for rendered doclets."""
        return int(self.get('doclets.line_width', 80))

    def get_min_break(self) -> int:
        """Get the earliest column at which a doclet line may be wrapped."""
        return int(self.get('doclets.min_break', 40))

    def get_scan_extensions(self) -> List[str]:
        """Get file extensions picked up by directory scans."""
        return list(self.get('scan.extensions', ['.ts']))

    def get_exclude_dirs(self) -> List[str]:
        """Get list of directories to exclude from scanning."""
        return list(self.get('scan.exclude_dirs', []))

    def show_progress(self) -> bool:
        """Check if directory scans show a progress bar."""
        return bool(self.get('scan.progress', False))

    def get_log_level(self) -> str:
        """Get logging level."""
        return str(self.get('logging.level', 'INFO'))

    def get_log_format(self) -> str:
        """Get logging format string."""
        return self.get('logging.format', '%(levelname)s - %(message)s')

    def get_log_file(self):
        """Get log file path, or None to log to the console only."""
        return self.get('logging.file')


def setup_logging(config: ConfigLoader) -> None:
    """Configure the root logger from the logging section of the config."""
    log_level = getattr(logging, config.get_log_level().upper(), logging.INFO)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    log_file = config.get_log_file()
    if log_file:
        handlers.insert(0, logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=log_level,
        format=config.get_log_format(),
        handlers=handlers,
    )
    logger.info("Logging initialized")
