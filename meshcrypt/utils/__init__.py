"""
Utilities Module

Configuration, export and summary helpers used by the meshcrypt pipeline.
"""

from .config import get_config, reset_config, ConfigManager
from .export import export_result, load_targets
from .pipeline import print_summary

__all__ = [
    'get_config',
    'reset_config',
    'ConfigManager',
    'export_result',
    'load_targets',
    'print_summary'
]
