"""
Invite Warden - Core Package
============================

Configuration, logging and the liveness HTTP server.

DESIGN:
    Core modules are singletons or global instances so every module
    sees the same state:
    - get_config() returns the same Config instance
    - logger is a global TreeLogger instance
"""

# =============================================================================
# Core Imports
# =============================================================================

from .config import (
    Config,
    ConfigValidationError,
    get_config,
    is_owner,
)

from .logger import logger, TreeLogger


__all__ = [
    "Config",
    "ConfigValidationError",
    "get_config",
    "is_owner",
    "logger",
    "TreeLogger",
]
