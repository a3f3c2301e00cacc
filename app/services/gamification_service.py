"""
Gamification Service

Students earn points for activity on the portal (currently: submitting an
application) and unlock a badge once their total reaches a threshold.

The engine is a pure state transition:
    (points, badges, AwardEvent) -> (new points, new badges)
Persisting the result is the caller's job.
"""

from typing import Iterable, List, Tuple

from app.core.config import get_settings
from app.core.errors import ValidationError
from app.models.records import AwardEvent


class GamificationEngine:
    """Computes a student's new points/badges for an award event."""

    def award(
        self,
        current_points: int,
        current_badges: Iterable[str],
        event: AwardEvent
    ) -> Tuple[int, List[str]]:
        """
        Apply an award event.

        Args:
            current_points: points the student holds now (>= 0)
            current_badges: badges the student holds now
            event: points delta (> 0), optional badge name and its threshold

        Returns:
            (new_points, new_badges) - the badge is appended only when the new
            total reaches the threshold (inclusive) and it is not already held.
        """
        self.validate(event)
        if current_points < 0:
            raise ValidationError(f"Current points cannot be negative, got {current_points}")

        new_points = current_points + event.points
        # Badges behave as a set; dict keeps the stored order stable
        badges = list(dict.fromkeys(current_badges or []))

        if event.badge_name and self.qualifies(new_points, event) and event.badge_name not in badges:
            badges.append(event.badge_name)

        return new_points, badges

    @staticmethod
    def validate(event: AwardEvent) -> None:
        if event.points <= 0:
            raise ValidationError(f"Award points must be positive, got {event.points}")

    @staticmethod
    def qualifies(points: int, event: AwardEvent) -> bool:
        return points >= event.badge_threshold


def get_application_award() -> AwardEvent:
    """Award granted for each submitted application (10 pts, "Job Hunter" at 50)."""
    settings = get_settings()
    return AwardEvent(
        points=settings.application_points,
        badge_name=settings.application_badge,
        badge_threshold=settings.badge_threshold
    )
