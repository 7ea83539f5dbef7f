"""
Handy Scripts — installer for shell helper collections.
"""

__version__ = "0.1.0"
