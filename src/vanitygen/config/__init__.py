"""
Configuration loading and path resolution.
"""

from ..errors import ConfigError, VCSError
from .models import PathConfig, VanityDocument, parse_document
from .resolver import KNOWN_VCS, VanityConfig, VanityPath, infer_display, load_config, resolve
from .settings import Settings, get_settings

__all__ = [
    "ConfigError",
    "VCSError",
    "PathConfig",
    "VanityDocument",
    "parse_document",
    "KNOWN_VCS",
    "VanityConfig",
    "VanityPath",
    "infer_display",
    "load_config",
    "resolve",
    "Settings",
    "get_settings",
]
