"""
Mood mapping module for Serenity.
Translates a caller's mood signal into provider-specific query parameters.
"""
from enum import Enum, IntEnum
from typing import Dict, Optional, Union


class MoodSignal(str, Enum):
    VERY_SAD = "verySad"
    SAD = "sad"
    NEUTRAL = "neutral"
    HAPPY = "happy"
    VERY_HAPPY = "veryHappy"
    ANXIOUS = "anxious"
    STRESSED = "stressed"
    CALM = "calm"
    TIRED = "tired"

    @classmethod
    def parse(cls, value: Union["MoodSignal", str, None]) -> Optional["MoodSignal"]:
        """Parse a raw mood string, returning None for anything unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None


class MovieGenre(IntEnum):
    """TMDB genre codes used for mood-based discovery."""
    ADVENTURE = 12
    DRAMA = 18
    COMEDY = 35
    DOCUMENTARY = 99


DEFAULT_GENRE = MovieGenre.COMEDY
DEFAULT_VIDEO_QUERY = "guided meditation mindfulness"

# The two tables have different key sets; moods missing from one fall
# through to that table's default.
GENRE_TABLE: Dict[MoodSignal, MovieGenre] = {
    MoodSignal.SAD: MovieGenre.COMEDY,
    MoodSignal.VERY_SAD: MovieGenre.COMEDY,
    MoodSignal.ANXIOUS: MovieGenre.DRAMA,
    MoodSignal.STRESSED: MovieGenre.DRAMA,
    MoodSignal.HAPPY: MovieGenre.ADVENTURE,
    MoodSignal.VERY_HAPPY: MovieGenre.ADVENTURE,
    MoodSignal.CALM: MovieGenre.DOCUMENTARY,
}

VIDEO_QUERY_TABLE: Dict[MoodSignal, str] = {
    MoodSignal.ANXIOUS: "calming meditation anxiety relief",
    MoodSignal.STRESSED: "stress relief breathing exercise",
    MoodSignal.SAD: "motivational uplifting",
    MoodSignal.TIRED: "energizing morning yoga",
}


class MoodMapper:
    """Resolves mood signals to movie genres and video search queries.

    Both lookups are total: unknown or unmapped moods resolve to the
    documented defaults.
    """

    def __init__(self,
                 genre_table: Optional[Dict[MoodSignal, MovieGenre]] = None,
                 video_query_table: Optional[Dict[MoodSignal, str]] = None,
                 default_genre: MovieGenre = DEFAULT_GENRE,
                 default_video_query: str = DEFAULT_VIDEO_QUERY):
        self.genre_table = dict(GENRE_TABLE if genre_table is None else genre_table)
        self.video_query_table = dict(VIDEO_QUERY_TABLE if video_query_table is None else video_query_table)
        self.default_genre = default_genre
        self.default_video_query = default_video_query

    def genre_for(self, mood: Union[MoodSignal, str, None]) -> MovieGenre:
        signal = MoodSignal.parse(mood)
        if signal is None:
            return self.default_genre
        return self.genre_table.get(signal, self.default_genre)

    def video_query_for(self, mood: Union[MoodSignal, str, None]) -> str:
        signal = MoodSignal.parse(mood)
        if signal is None:
            return self.default_video_query
        return self.video_query_table.get(signal, self.default_video_query)

    def describe(self) -> Dict[str, Dict[str, object]]:
        """Dump the resolved mapping for every known mood, plus defaults."""
        return {
            "moods": {
                signal.value: {
                    "genre": self.genre_for(signal).name.title(),
                    "genre_id": int(self.genre_for(signal)),
                    "video_query": self.video_query_for(signal),
                }
                for signal in MoodSignal
            },
            "defaults": {
                "genre": self.default_genre.name.title(),
                "genre_id": int(self.default_genre),
                "video_query": self.default_video_query,
            },
        }
