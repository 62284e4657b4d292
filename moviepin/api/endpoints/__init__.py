"""
API Endpoints
"""

from . import movies

__all__ = ["movies"]
