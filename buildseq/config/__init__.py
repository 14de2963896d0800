from .loader import find_config, load_config
from .types import BuildConfig, ConfigError, UnsupportedConfigFormatError

__all__ = [
    "find_config",
    "load_config",
    "BuildConfig",
    "ConfigError",
    "UnsupportedConfigFormatError",
]
