"""Nutrition Agent for diet questions and calorie estimates.

Replies may open with a fenced ``nutrition`` fragment carrying the estimate
for the food under discussion. The fragment is a prompted convention only,
so the reply goes through the defensive parser before it reaches the UI.
"""

import logging
from typing import Optional

from lifesync.agents.base_agent import BaseAgent
from lifesync.llm.gemini_client import GenerationResult, InferenceClient
from lifesync.models import AgentPersona, AgentResponse
from lifesync.parsing.response_parser import extract_nutrition

logger = logging.getLogger(__name__)

NUTRITION_FALLBACK = "I couldn't process that nutritional query."


class NutritionAgent(BaseAgent):
    """
    Specialist agent for analyzing food, estimating calories and giving diet advice.
    """

    persona = AgentPersona.NUTRITIONIST

    def __init__(self, client: InferenceClient, model: Optional[str] = None):
        super().__init__(
            role="nutrition",
            system_prompt="""You are an expert Clinical Nutritionist.
Analyze the user's dietary questions based on their stats.
Be concise, scientific, yet encouraging. Focus on macronutrients and sustainable habits.

CRITICAL INSTRUCTION:
If the user mentions specific foods or asks for calorie/macro estimates, you MUST include a JSON block at the very start of your response wrapped in triple backticks with the label 'nutrition'.
Format:
```nutrition
{
  "item": "Food Name",
  "calories": 0,
  "macros": "Protein: Xg, Carbs: Yg, Fat: Zg"
}
```
Then provide your text explanation after the block.
""",
            client=client,
            fallback_text=NUTRITION_FALLBACK,
            model=model,
        )

    def build_response(self, result: GenerationResult) -> AgentResponse:
        if not result.text:
            return AgentResponse(text=self.fallback_text, agent=self.persona)

        extraction = extract_nutrition(result.text)
        if extraction.nutrition is not None:
            logger.info("[NutritionAgent] Attached nutrition card: %s", extraction.nutrition.item)

        return AgentResponse(
            text=extraction.display_text,
            agent=self.persona,
            nutrition=extraction.nutrition,
            raw_text=result.text,
        )
