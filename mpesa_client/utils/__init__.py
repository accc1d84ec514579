"""
Utility modules for the Daraja client
"""
from .config_loader import DarajaConfig, EndpointPaths, load_daraja_config

__all__ = [
    'DarajaConfig',
    'EndpointPaths',
    'load_daraja_config',
]
