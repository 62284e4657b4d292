"""
MoviePin - Core Module
======================

Shared components of the MoviePin API.

Components:
- config: Application configuration management
- database: Database engine and session management
- logging: Structured logging setup

Usage:
    from moviepin.core import get_settings, get_logger
"""

from .config import Settings, get_settings
from .logging import get_logger, setup_logging

__all__ = [
    # Configuration
    "Settings",
    "get_settings",

    # Logging
    "get_logger",
    "setup_logging",
]
