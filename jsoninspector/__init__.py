"""
JSON Inspector - reconstruct geometry elements from untyped JSON payloads.
"""

__version__ = "1.0.0"
