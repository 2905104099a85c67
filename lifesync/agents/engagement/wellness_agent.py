import logging
from typing import Optional

from lifesync.agents.base_agent import BaseAgent
from lifesync.llm.gemini_client import GenerationResult, InferenceClient, ToolDirective
from lifesync.models import AgentPersona, AgentResponse
from lifesync.parsing.response_parser import extract_citations

logger = logging.getLogger(__name__)

WELLNESS_FALLBACK = "I'm here to support your wellness journey."


class WellnessAgent(BaseAgent):
    """
    Agent specialized in mood, motivation and general wellbeing.
    Search grounding is enabled so that videos, music and quotes come with real links.
    """

    persona = AgentPersona.WELLNESS_COACH

    def __init__(self, client: InferenceClient, model: Optional[str] = None):
        super().__init__(
            role="engagement",
            system_prompt="""You are an empathetic Wellness Coach.
Your goal is to improve the user's mood and mental state.
If asked for videos, music, or quotes, use the Search tool to find actual links.
Always try to provide a "Daily Video Selection" from YouTube if the user asks for recommendations.
""",
            client=client,
            tools=[ToolDirective.SEARCH_GROUNDING],
            fallback_text=WELLNESS_FALLBACK,
            model=model,
        )

    def build_response(self, result: GenerationResult) -> AgentResponse:
        links = extract_citations(result.grounding_chunks)
        logger.info("[WellnessAgent] Collected %d grounding link(s)", len(links))
        return AgentResponse(
            text=result.text or self.fallback_text,
            agent=self.persona,
            links=links,
            raw_text=result.text or "",
        )
