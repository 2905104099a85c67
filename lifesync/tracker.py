"""Meal tracker: builds a DailyLog from meals priced by the calorie estimator."""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from lifesync.errors import TransportError
from lifesync.models import DailyLog, Meal, MealType, Mood
from lifesync.swarm import ConciergeSwarm

logger = logging.getLogger(__name__)

CALCULATION_FAILED_NOTICE = "Failed to calculate calories."


class MealTracker:
    """
    Pending meals for the day being logged.

    A failed estimate aborts the meal addition and leaves a notice for the UI;
    a malformed estimate is already a zero-calorie meal by the time it gets here.
    """

    def __init__(self, swarm: ConciergeSwarm):
        self.swarm = swarm
        self.meals: List[Meal] = []
        self.notice: Optional[str] = None

    @property
    def total_calories(self) -> float:
        return sum(meal.calories for meal in self.meals)

    async def add_meal(self, meal_type: MealType, description: str) -> Optional[Meal]:
        description = (description or "").strip()
        if not description:
            return None

        self.notice = None
        try:
            estimate = await self.swarm.estimate_calories(description)
        except TransportError as e:
            logger.warning("Calorie estimation failed for %r: %s", description, e)
            self.notice = CALCULATION_FAILED_NOTICE
            return None

        meal = Meal(id=uuid.uuid4().hex, type=meal_type, description=description, calories=estimate.calories)
        self.meals.append(meal)
        return meal

    def remove_meal(self, meal_id: str) -> None:
        self.meals = [meal for meal in self.meals if meal.id != meal_id]

    def build_log(
        self,
        mood: Mood,
        heart_rate: int = 0,
        exercise_minutes: int = 0,
        notes: str = "",
        now: Optional[datetime] = None,
    ) -> DailyLog:
        """Create the day's log from the pending meals and clear them."""
        log = DailyLog(
            id=uuid.uuid4().hex,
            date=(now or datetime.now(timezone.utc)).isoformat(),
            mood=mood,
            heart_rate=heart_rate,
            calories_in=self.total_calories,
            exercise_minutes=exercise_minutes,
            notes=notes,
            meals=list(self.meals),
        )
        self.meals = []
        self.notice = None
        return log
