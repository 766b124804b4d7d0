"""
Config package for essentiality_map.

Responsible for:
- config model (GlobalConfig)
- config I/O helpers (load_global_config)
"""

from .model import GlobalConfig
from .loader import load_global_config, global_config_from_dict

__all__ = ["GlobalConfig", "load_global_config", "global_config_from_dict"]
