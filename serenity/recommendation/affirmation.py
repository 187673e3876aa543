"""
Daily affirmation picker for Serenity.
"""
import time
from typing import Callable, Sequence

from .schemas import AffirmationItem

AFFIRMATIONS = (
    "You are stronger than you think.",
    "Every day is a new opportunity.",
    "You deserve peace and happiness.",
    "Your feelings are valid.",
    "You are enough, just as you are.",
)

AFFIRMATION_TITLE = "Daily Affirmation"
AFFIRMATION_SCORE = 9.0


class AffirmationPicker:
    """Picks one affirmation using the current time in milliseconds.

    Selection is ``timestamp_ms % len(affirmations)``: deterministic for a
    given timestamp, not uniformly random.
    """

    def __init__(self, affirmations: Sequence[str] = AFFIRMATIONS):
        if not affirmations:
            raise ValueError("At least one affirmation is required")
        self.affirmations = tuple(affirmations)

    def pick(self, clock: Callable[[], float] = time.time) -> AffirmationItem:
        """Build the affirmation item for the instant reported by ``clock``.

        Args:
            clock: Callable returning the current time in seconds

        Returns:
            AffirmationItem whose id and text derive from the same timestamp
        """
        timestamp_ms = round(clock() * 1000)
        return AffirmationItem(
            id=f"affirmation_{timestamp_ms}",
            title=AFFIRMATION_TITLE,
            description=self.affirmations[timestamp_ms % len(self.affirmations)],
            relevance_score=AFFIRMATION_SCORE,
        )
