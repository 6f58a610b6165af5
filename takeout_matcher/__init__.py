"""
Google Takeout sidecar timestamp matcher
"""

__version__ = "0.1.0"
