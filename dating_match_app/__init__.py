"""
Dating Match Application - compatibility scoring and match ranking
"""

__version__ = "0.1.0"
