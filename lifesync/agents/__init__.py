from lifesync.agents.base_agent import BaseAgent
from lifesync.agents.engagement.wellness_agent import WellnessAgent
from lifesync.agents.fitness.trainer_agent import TrainerAgent
from lifesync.agents.nutrition.nutrition_agent import NutritionAgent

__all__ = ["BaseAgent", "NutritionAgent", "TrainerAgent", "WellnessAgent"]
