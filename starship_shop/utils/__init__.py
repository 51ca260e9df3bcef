"""
Utility modules for the shop
"""
from .config_loader import ShopConfig, load_shop_config
from .rate_limiter import MinIntervalGate

__all__ = [
    'ShopConfig',
    'load_shop_config',
    'MinIntervalGate',
]
