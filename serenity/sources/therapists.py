"""
Yelp business search source for nearby therapists.
"""
from typing import Any, List

from ..recommendation.schemas import SourceQuery, TherapistItem
from .base import MAX_ITEMS_PER_SOURCE, SourceClient

SEARCH_TERM = "therapist"


def format_rating(rating: Any, review_count: Any) -> str:
    return f"Rating: {rating} ⭐ ({review_count} reviews)"


class TherapistSource(SourceClient):
    """Therapists near the caller's location, or the default locality."""

    name = "therapists"

    async def _request(self, query: SourceQuery) -> Any:
        params = {
            "term": SEARCH_TERM,
            "location": query.location,
            "limit": MAX_ITEMS_PER_SOURCE,
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}
        return await self._get_json("/businesses/search", params, headers=headers)

    def _normalize(self, payload: Any) -> List[TherapistItem]:
        therapists = []
        for business in self._require_list(payload, "businesses")[:MAX_ITEMS_PER_SOURCE]:
            address = (business.get("location") or {}).get("address1")
            therapists.append(TherapistItem(
                id=business["id"],
                title=business["name"],
                subtitle=address or None,
                description=format_rating(business.get("rating"), business.get("review_count")),
                image_url=business.get("image_url") or None,
                action_url=business.get("url") or None,
                relevance_score=float(business.get("rating") or 0.0),
            ))
        return therapists
