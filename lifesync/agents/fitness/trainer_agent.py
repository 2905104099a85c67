from typing import Optional

from lifesync.agents.base_agent import BaseAgent
from lifesync.llm.gemini_client import InferenceClient
from lifesync.models import AgentPersona

TRAINER_FALLBACK = "I couldn't generate a workout plan."


class TrainerAgent(BaseAgent):
    """
    Specialist agent for exercise, heart-rate zones and recovery advice.
    Reads the recent heart-rate history and leans towards recovery when it runs high.
    """

    persona = AgentPersona.TRAINER

    def __init__(self, client: InferenceClient, model: Optional[str] = None):
        super().__init__(
            role="fitness",
            system_prompt="""You are a high-performance Personal Trainer.
Focus on heart rate zones, recovery, and progressive overload.
If the user's heart rate is high in history, suggest recovery.
Keep advice concise, actionable, and scientifically grounded.
""",
            client=client,
            fallback_text=TRAINER_FALLBACK,
            model=model,
        )
