"""
Mood module for Serenity.

Maps caller mood signals onto provider query parameters.
"""

from .mapper import (
    MoodSignal,
    MovieGenre,
    MoodMapper,
    DEFAULT_GENRE,
    DEFAULT_VIDEO_QUERY
)

__all__ = [
    'MoodSignal',
    'MovieGenre',
    'MoodMapper',
    'DEFAULT_GENRE',
    'DEFAULT_VIDEO_QUERY'
]
