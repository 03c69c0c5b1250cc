"""
Utility modules for the C2B relay
"""
from .config_loader import MpesaConfig, RelayConfig, ServerConfig, load_relay_config

__all__ = [
    'MpesaConfig',
    'RelayConfig',
    'ServerConfig',
    'load_relay_config',
]
