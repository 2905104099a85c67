"""Data model shared by the concierge engine and its callers.

Field names are snake_case in Python and camelCase on the wire so that the
persisted JSON documents keep the layout of the original web client.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Mood(str, Enum):
    GREAT = "Great"
    GOOD = "Good"
    OKAY = "Okay"
    LOW = "Low"
    STRESSED = "Stressed"


class MealType(str, Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


class AgentPersona(str, Enum):
    ORCHESTRATOR = "Orchestrator"
    NUTRITIONIST = "Nutritionist"
    TRAINER = "Trainer"
    WELLNESS_COACH = "WellnessCoach"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Meal(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    type: MealType
    description: str
    calories: float = 0


class DailyLog(CamelModel):
    """One day of tracked wellness metrics. Immutable once created."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    date: str
    mood: Mood
    heart_rate: int = 0
    calories_in: float = 0
    exercise_minutes: int = 0
    notes: str = ""
    meals: List[Meal] = Field(default_factory=list)


class UserProfile(CamelModel):
    name: str
    age: int
    goals: List[str] = Field(default_factory=list)

    def primary_goal(self, default: str = "wellness") -> str:
        """The first goal drives goal-specific heuristics."""
        return self.goals[0] if self.goals else default


class Citation(CamelModel):
    title: str
    url: str


class NutritionFact(BaseModel):
    """Structured fragment the Nutritionist embeds in its reply."""

    item: Optional[str] = None
    calories: float = Field(ge=0)
    macros: Optional[str] = None


class AgentResponse(CamelModel):
    text: str
    agent: AgentPersona
    links: Optional[List[Citation]] = None
    nutrition: Optional[NutritionFact] = None
    raw_text: str = ""


class CalorieEstimate(BaseModel):
    calories: float = 0
    details: str = ""


class DailyContent(CamelModel):
    video: Optional[Citation] = None
    quote: Optional[str] = None


class ChatMessage(CamelModel):
    id: str
    role: str  # "user" | "model"
    content: str
    timestamp: int
    agent_name: Optional[str] = None
    links: Optional[List[Citation]] = Field(default=None, alias="groundingLinks")
    nutrition: Optional[NutritionFact] = None
