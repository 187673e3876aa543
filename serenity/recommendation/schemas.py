"""
Recommendation schemas for the Serenity system.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Iterator, Optional, Tuple

from ..mood.mapper import MovieGenre


class ItemType(str, Enum):
    MOVIE = "movie"
    VIDEO = "video"
    THERAPIST = "therapist"
    AFFIRMATION = "affirmation"


@dataclass(frozen=True)
class RecommendationItem:
    """Common shape shared by every recommendation variant.

    The variant tag lives on the class (``item_type``), so consumers never
    need to guess the kind of item from which optional fields are set.
    """
    item_type: ClassVar[ItemType]

    id: str
    title: str
    description: str
    relevance_score: float
    subtitle: Optional[str] = None
    image_url: Optional[str] = None
    action_url: Optional[str] = None

    def __post_init__(self):
        kind = type(self).__name__
        for name in ('id', 'title', 'description'):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise TypeError(f"{kind}.{name} must be a string, got {type(value).__name__}")
        if not self.id:
            raise ValueError("Recommendation id cannot be empty")
        score = self.relevance_score
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise TypeError(f"{kind}.relevance_score must be a number, got {type(score).__name__}")
        for name in ('subtitle', 'image_url', 'action_url'):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise TypeError(f"{kind}.{name} must be a string or None, got {type(value).__name__}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire shape, omitting unset optional fields."""
        data = {
            "id": self.id,
            "type": self.item_type.value,
            "title": self.title,
            "description": self.description,
            "relevanceScore": self.relevance_score,
        }
        if self.subtitle is not None:
            data["subtitle"] = self.subtitle
        if self.image_url is not None:
            data["imageUrl"] = self.image_url
        if self.action_url is not None:
            data["actionUrl"] = self.action_url
        return data


@dataclass(frozen=True)
class MovieItem(RecommendationItem):
    item_type: ClassVar[ItemType] = ItemType.MOVIE


@dataclass(frozen=True)
class VideoItem(RecommendationItem):
    item_type: ClassVar[ItemType] = ItemType.VIDEO


@dataclass(frozen=True)
class TherapistItem(RecommendationItem):
    item_type: ClassVar[ItemType] = ItemType.THERAPIST


@dataclass(frozen=True)
class AffirmationItem(RecommendationItem):
    item_type: ClassVar[ItemType] = ItemType.AFFIRMATION


@dataclass(frozen=True)
class UserProfile:
    location: Optional[str] = None

    def resolved_location(self, default: str) -> str:
        if self.location and self.location.strip():
            return self.location.strip()
        return default


@dataclass(frozen=True)
class CallerIdentity:
    """Identity of an already-authenticated caller."""
    uid: str


@dataclass(frozen=True)
class RecommendationRequest:
    """Request for recommendations based on a mood signal."""
    mood: Optional[str]
    profile: UserProfile = field(default_factory=UserProfile)


@dataclass(frozen=True)
class SourceQuery:
    """Mapped parameters handed to every source for one request."""
    mood: Optional[str]
    genre: MovieGenre
    video_query: str
    location: str


@dataclass(frozen=True)
class AggregatedResult:
    """Ordered recommendations: movies, videos, therapists, then one affirmation."""
    items: Tuple[RecommendationItem, ...]

    def __iter__(self) -> Iterator[RecommendationItem]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def of_type(self, item_type: ItemType) -> Tuple[RecommendationItem, ...]:
        return tuple(item for item in self.items if item.item_type == item_type)

    def to_dict(self) -> Dict[str, Any]:
        return {"recommendations": [item.to_dict() for item in self.items]}
