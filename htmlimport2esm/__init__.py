"""Rewrite legacy HTML-import web components into ES modules."""

from .config import ConfigError, RewriteOptions, load_config
from .converter import ConversionResult, Converter
from .errors import ConversionError, FailureReason

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ConversionError",
    "ConversionResult",
    "Converter",
    "FailureReason",
    "RewriteOptions",
    "load_config",
]
