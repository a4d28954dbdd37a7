"""
Flipbook - frame-based vector sketching and animation preview
"""

__version__ = "0.3.0"
