"""
Satellite tracking server backed by the N2YO API.
"""

__version__ = "1.0.0"
