"""
Pydantic schemas for Serenity REST API.
"""
from typing import Optional, List, Dict
from pydantic import BaseModel, ConfigDict, Field

from ..recommendation.schemas import AggregatedResult, RecommendationItem


class UserProfileInput(BaseModel):
    """Minimal caller profile."""
    location: Optional[str] = Field(
        default=None,
        description="Free-form locality used for the therapist search (e.g. 'Boston, MA')"
    )


class RecommendRequest(BaseModel):
    """Request body for recommendation endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    mood: str = Field(
        description="Mood signal such as 'anxious', 'sad' or 'happy'; unknown values use defaults"
    )
    user_profile: UserProfileInput = Field(
        default_factory=UserProfileInput,
        alias="userProfile",
        description="Caller profile"
    )


class RecommendationItemResponse(BaseModel):
    """One recommendation in the merged list."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Identifier, unique within the response")
    type: str = Field(description="One of movie, video, therapist, affirmation")
    title: str
    description: str
    subtitle: Optional[str] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    action_url: Optional[str] = Field(default=None, alias="actionUrl")
    relevance_score: float = Field(
        alias="relevanceScore",
        description="Source-defined score, not comparable across types"
    )

    @classmethod
    def from_item(cls, item: RecommendationItem) -> "RecommendationItemResponse":
        return cls(
            id=item.id,
            type=item.item_type.value,
            title=item.title,
            description=item.description,
            subtitle=item.subtitle,
            image_url=item.image_url,
            action_url=item.action_url,
            relevance_score=item.relevance_score
        )


class RecommendResponse(BaseModel):
    """Response body for recommendation endpoint."""
    recommendations: List[RecommendationItemResponse] = Field(
        description="Movies, then videos, then therapists, then one affirmation"
    )

    @classmethod
    def from_result(cls, result: AggregatedResult) -> "RecommendResponse":
        return cls(recommendations=[RecommendationItemResponse.from_item(item) for item in result])


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = Field(description="API status")
    version: str = Field(description="API version")
    providers: Dict[str, bool] = Field(description="Whether each provider has credentials configured")


class MoodMapping(BaseModel):
    genre: str
    genre_id: int
    video_query: str


class MoodsResponse(BaseModel):
    """Mood to query parameter tables."""
    moods: Dict[str, MoodMapping]
    defaults: MoodMapping


class ErrorResponse(BaseModel):
    """Error response format."""
    error: str = Field(description="Error code")
    detail: Optional[str] = Field(default=None, description="Caller-safe error message")
