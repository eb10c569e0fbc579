"""
Configuration management for the BaseLine Academy site.
"""

import copy
import logging
import os
from typing import Dict, Any

import yaml

logger = logging.getLogger(__name__)

API_URL_ENV = "ACADEMY_API_URL"


class ConfigManager:
    """Manages configuration loading and provides default values."""

    @staticmethod
    def load_config(config_file: str = "config.yaml") -> Dict[str, Any]:
        """Load configuration from YAML file, merged over the defaults."""
        config = ConfigManager.get_default_config()
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Configuration file '%s' not found. Using default configuration.", config_file)
            loaded = {}
        except yaml.YAMLError as e:
            logger.error("Error parsing configuration file: %s. Using default configuration.", e)
            loaded = {}

        for section, values in loaded.items():
            if isinstance(values, dict) and isinstance(config.get(section), dict):
                config[section].update(values)
            else:
                config[section] = values

        env_url = os.environ.get(API_URL_ENV)
        if env_url:
            config['api']['base_url'] = env_url

        return config

    @staticmethod
    def get_default_config() -> Dict[str, Any]:
        """Return default configuration if config file is not available."""
        return copy.deepcopy({
            'api': {
                'base_url': 'http://localhost:8000',
                'timeout': 10,
                'mock_mode': False,
            },
            'storage': {
                'db_path': 'baseline_academy.db',
            },
            'announcements': {
                'backend': 'local',
            },
            'attendance': {
                'max_days_ahead': 3,
            },
            'logging': {
                'level': 'INFO',
            },
        })
