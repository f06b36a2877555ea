# template_profiler/utils/config.py - Configuration management
"""
Configuration for the template profiler.
Defaults can be overridden from a YAML file.
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging


class Config:
    """
    Configuration manager.

    Holds nested settings addressed with dot-notation keys
    (e.g. 'call_graph.big_percent').
    """

    DEFAULT_CONFIG = {
        'loader': {
            'paths': [],
            'namespaces': {},
        },
        'call_graph': {
            'time_threshold_ms': 1.0,
            'big_percent': 20.0,
        },
        'output': {
            'format': 'stdout',
            'directory': '.',
            'prometheus_port': 9090,
        },
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to YAML configuration file
        """
        self.logger = logging.getLogger(__name__)
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)

        if config_file:
            self.load_from_file(config_file)

    def load_from_file(self, config_file: str):
        """
        Merge settings from a YAML file over the current ones.

        Args:
            config_file: Path to YAML file
        """
        config_path = Path(config_file)

        if not config_path.exists():
            self.logger.warning(f"Config file not found: {config_file}, using defaults")
            return

        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                loaded_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            self.logger.error(f"Failed to load config: {e}")
            raise

        if not isinstance(loaded_config, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping")

        self._merge_config(self.config, loaded_config)
        self.logger.info(f"Loaded configuration from {config_file}")

    def _merge_config(self, base: Dict, override: Dict):
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a value by dot-notation key.

        Args:
            key: Configuration key (e.g., 'loader.paths')
            default: Value returned when the key is missing
        """
        value = self.config

        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default

        return value

    def set(self, key: str, value: Any):
        """
        Set a value by dot-notation key, creating sections as needed.

        Args:
            key: Configuration key (e.g., 'output.format')
            value: Value to set
        """
        keys = key.split('.')
        section = self.config

        for k in keys[:-1]:
            section = section.setdefault(k, {})

        section[keys[-1]] = value

    def to_dict(self) -> Dict:
        return copy.deepcopy(self.config)

    def save_to_file(self, config_file: str):
        """
        Write the current configuration to a YAML file.

        Args:
            config_file: Path to output YAML file
        """
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.config, f, default_flow_style=False)

        self.logger.info(f"Saved configuration to {config_file}")
