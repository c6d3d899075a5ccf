"""
Configuration for the trade screenshot extraction system.
"""

from .config_manager import TradeOCRConfig, ConfigManager, get_config_manager

__all__ = [
    'TradeOCRConfig',
    'ConfigManager',
    'get_config_manager'
]
