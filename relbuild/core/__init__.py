"""Core domain types: config, exit codes, Result."""

from .config import (
    BuildConfig,
    BuildOptions,
    Config,
    ConfigError,
    TargetConfig,
    load_config,
    load_config_or_default,
)
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "BuildConfig",
    "BuildOptions",
    "Config",
    "ConfigError",
    "TargetConfig",
    "load_config",
    "load_config_or_default",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
