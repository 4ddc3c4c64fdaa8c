"""
Utility modules for the directory client
"""
from .config_loader import ApiConfig, DirectoryConfig, SearchConfig, load_directory_config
from .phone_formatter import format_phone_number

__all__ = [
    'ApiConfig',
    'DirectoryConfig',
    'SearchConfig',
    'load_directory_config',
    'format_phone_number',
]
