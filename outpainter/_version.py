"""Version information for Outpainter"""

__version__ = "0.3.0"
