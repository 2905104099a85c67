"""
Coordinator Agent for the LifeSync concierge.

Routes a user query to exactly one persona (Nutritionist, Trainer or
WellnessCoach). The classifier model is asked for an agent name, but its
output format is not guaranteed, so the decision is a lenient keyword match
over the returned text with WellnessCoach as the default branch.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from lifesync.context.compactor import CompactedContext
from lifesync.llm.gemini_client import InferenceClient
from lifesync.models import AgentPersona

logger = logging.getLogger(__name__)

# Ordered: the first keyword found in the classifier text wins.
ROUTING_KEYWORDS: Tuple[Tuple[str, AgentPersona], ...] = (
    ("nutrition", AgentPersona.NUTRITIONIST),
    ("trainer", AgentPersona.TRAINER),
)
DEFAULT_PERSONA = AgentPersona.WELLNESS_COACH


@dataclass(frozen=True)
class RoutingDecision:
    """
    Outcome of classification.

    ``defaulted`` marks the fallback case where no keyword matched. It is a
    defined outcome, not an error.
    """
    persona: AgentPersona
    raw_text: str = ""
    matched_keyword: Optional[str] = None

    @property
    def defaulted(self) -> bool:
        return self.matched_keyword is None


def match_persona(decision_text: str) -> RoutingDecision:
    """Map classifier output onto a persona via case-insensitive substring match."""
    text = (decision_text or "").strip()
    text_lower = text.lower()
    for keyword, persona in ROUTING_KEYWORDS:
        if keyword in text_lower:
            return RoutingDecision(persona=persona, raw_text=text, matched_keyword=keyword)
    return RoutingDecision(persona=DEFAULT_PERSONA, raw_text=text)


class CoordinatorAgent:
    """
    Lightweight router in front of the persona agents.

    One classification call per request, no retry. A ``TransportError`` from
    the backend is not caught: it fails the whole request.
    """

    def __init__(self, client: InferenceClient, model: Optional[str] = None):
        self.client = client
        self.model = model

    def build_routing_prompt(self, query: str, context: CompactedContext) -> str:
        return f"""You are the Head Concierge of a health app.
User Profile: {context.profile_summary}
Recent Stats: {context.history}

User Query: "{query}"

Classify the query into one of these agents:
- Nutritionist (food, calories, diet advice)
- Trainer (exercise, heart rate, workouts, physical stats)
- WellnessCoach (mood, motivation, mental health, find videos, quotes, general chat)

Return ONLY the agent name."""

    async def classify(self, query: str, context: CompactedContext) -> RoutingDecision:
        result = await self.client.generate_text(
            self.build_routing_prompt(query, context),
            model=self.model,
        )
        decision = match_persona(result.text)
        if decision.defaulted:
            logger.info("Orchestrator defaulted to %s (classifier said: %r)", decision.persona.value, decision.raw_text)
        else:
            logger.info("Orchestrator routed to: %s", decision.persona.value)
        return decision
