"""
Upstream content sources for Serenity.

Each source wraps one provider and isolates its own failures.
"""

from .base import FetchResult, SourceClient, SourceError, MAX_ITEMS_PER_SOURCE
from .movies import MovieSource
from .videos import VideoSource
from .therapists import TherapistSource

__all__ = [
    'FetchResult',
    'SourceClient',
    'SourceError',
    'MAX_ITEMS_PER_SOURCE',
    'MovieSource',
    'VideoSource',
    'TherapistSource'
]
