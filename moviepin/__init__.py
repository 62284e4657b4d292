"""
MoviePin - Movie collection API
"""

__version__ = "1.0.0"
