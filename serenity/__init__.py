"""
Serenity: mood-based recommendation aggregator.
"""

__version__ = "1.0.0"
