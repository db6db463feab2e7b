"""
Configuration Management

Configuration system for the meshcrypt pipeline.
"""

import copy
import yaml
from pathlib import Path
from typing import Dict, Any, Optional

from ..encryption.settings import EncryptionConfig
from ..encryption.keys import DEFAULT_KEY


DEFAULT_CONFIG_PATH = "config/encryption.yaml"

DEFAULT_CONFIG = {
    'encryption': {
        'code': 'default',
        'magnitude': 0.5,
        'target_count': 1,
        'keys': [DEFAULT_KEY]
    },
    'animation': {
        'frame_rate': 60.0,
        'controller_name': 'CombinedDecryptionAnimator'
    },
    'output': {
        'directory': './DecryptionAnimations',
        'mesh_format': 'obj',
        'save_clips': True,
        'save_skin': True
    }
}


class ConfigManager:
    """Centralized configuration manager for the meshcrypt pipeline."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to the main configuration file
        """
        self.config_path = Path(config_path)
        self._config = None

        self.load_config()

    def load_config(self) -> None:
        """Load configuration from YAML file, on top of the built-in defaults."""
        try:
            with open(self.config_path, 'r') as f:
                loaded = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")

        if not isinstance(loaded, dict):
            raise ValueError(f"Configuration file must contain a mapping: {self.config_path}")

        self._config = copy.deepcopy(DEFAULT_CONFIG)
        self._deep_merge(self._config, loaded)

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.

        Args:
            key_path: Dot-separated path to the configuration key (e.g., 'encryption.code')
            default: Default value if key is not found

        Returns:
            Configuration value

        Example:
            config.get('encryption.magnitude')  # returns 0.5
            config.get('output.mesh_format', 'obj')
        """
        keys = key_path.split('.')
        value = self._config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def get_encryption_config(self) -> EncryptionConfig:
        """Get encryption parameters (target count clamped, keys resized)."""
        keys = self.get('encryption.keys', [DEFAULT_KEY])
        if not isinstance(keys, (list, tuple)):
            keys = [keys]
        return EncryptionConfig(
            code=self.get('encryption.code', 'default'),
            magnitude=self.get('encryption.magnitude', 0.5),
            target_count=self.get('encryption.target_count', len(keys)),
            keys=list(keys)
        )

    def get_animation_config(self) -> Dict[str, Any]:
        """Get clip and controller configuration."""
        return {
            'frame_rate': float(self.get('animation.frame_rate', 60.0)),
            'controller_name': self.get('animation.controller_name', 'CombinedDecryptionAnimator')
        }

    def get_output_config(self) -> Dict[str, Any]:
        """Get output configuration."""
        return {
            'directory': self.get('output.directory', './DecryptionAnimations'),
            'mesh_format': self.get('output.mesh_format', 'obj'),
            'save_clips': self.get('output.save_clips', True),
            'save_skin': self.get('output.save_skin', True)
        }

    def _deep_merge(self, base_dict: Dict, overlay_dict: Dict) -> None:
        """Deep merge overlay_dict into base_dict."""
        for key, value in overlay_dict.items():
            if key in base_dict and isinstance(base_dict[key], dict) and isinstance(value, dict):
                self._deep_merge(base_dict[key], value)
            else:
                base_dict[key] = value

    def update_config(self, key_path: str, value: Any) -> None:
        """
        Update a configuration value at runtime.

        Args:
            key_path: Dot-separated path to the configuration key
            value: New value to set
        """
        keys = key_path.split('.')
        config_section = self._config

        # Navigate to the parent section
        for key in keys[:-1]:
            if key not in config_section:
                config_section[key] = {}
            config_section = config_section[key]

        config_section[keys[-1]] = value

    def save_config(self, output_path: Optional[str] = None) -> None:
        """
        Save current configuration to file.

        Args:
            output_path: Path to save config (default: original config path)
        """
        save_path = output_path or self.config_path
        with open(save_path, 'w') as f:
            yaml.dump(self._config, f, default_flow_style=False, indent=2)


# Global configuration instance
_global_config: Optional[ConfigManager] = None


def get_config(config_path: str = DEFAULT_CONFIG_PATH) -> ConfigManager:
    """
    Get the global configuration manager instance.

    Args:
        config_path: Path to configuration file (only used on first call)

    Returns:
        ConfigManager instance
    """
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager(config_path)
    return _global_config


def reset_config() -> None:
    """Reset the global configuration instance (mainly for testing)."""
    global _global_config
    _global_config = None
