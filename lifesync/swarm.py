"""
ConciergeSwarm - the caller-facing surface of the LifeSync engine.

Wires the compactor, coordinator, persona agents and parser together behind
four async operations. The swarm holds only immutable configuration and an
injected inference client, so one instance can serve concurrent callers.
"""

import base64
import logging
from typing import Dict, Optional, Sequence, Union

from lifesync.agents.base_agent import BaseAgent
from lifesync.agents.engagement.wellness_agent import WellnessAgent
from lifesync.agents.fitness.trainer_agent import TrainerAgent
from lifesync.agents.nutrition.nutrition_agent import NutritionAgent
from lifesync.config import Settings, settings as default_settings
from lifesync.context.compactor import HistoryOrder, compact
from lifesync.coordinator.coordinator_agent import CoordinatorAgent
from lifesync.errors import MalformedResponseError, TransportError
from lifesync.llm.gemini_client import (
    GeminiInferenceClient,
    InferenceClient,
    ResponseFormat,
    ToolDirective,
)
from lifesync.models import (
    AgentPersona,
    AgentResponse,
    CalorieEstimate,
    DailyContent,
    DailyLog,
    Mood,
    UserProfile,
)
from lifesync.parsing.response_parser import extract_citations, find_video

logger = logging.getLogger(__name__)

DEFAULT_QUOTE = "Keep going, you're doing great!"

THUMBNAIL_PROMPT = """A cinematic, high-tech 3D isometric illustration of the "LifeSync Concierge" health app.

Visual elements:
1. A central glowing AI core (representing the Orchestrator Agent).
2. Floating holographic data screens showing Heart Rate graphs (red), Nutrition info with an apple icon (green), and a Zen/Meditation symbol (purple).
3. A sleek, modern dashboard interface in the background.

Style: Cyberpunk meets Clean Health Tech.
Lighting: Neon accents in Indigo, Emerald, and Violet against a deep slate background.
Quality: 8k resolution, highly detailed, photorealistic rendering."""


class ConciergeSwarm:
    def __init__(
        self,
        client: Optional[InferenceClient] = None,
        config: Optional[Settings] = None,
        history_order: HistoryOrder = HistoryOrder.OLDEST_FIRST,
    ):
        self.config = config or default_settings
        self.client = client or GeminiInferenceClient(self.config)
        self.history_order = history_order

        model = self.config.GEMINI_MODEL_NAME
        self.coordinator = CoordinatorAgent(self.client, model=self.config.ROUTER_MODEL_NAME)
        self.agents: Dict[AgentPersona, BaseAgent] = {
            AgentPersona.NUTRITIONIST: NutritionAgent(self.client, model=model),
            AgentPersona.TRAINER: TrainerAgent(self.client, model=model),
            AgentPersona.WELLNESS_COACH: WellnessAgent(self.client, model=model),
        }
        logger.info("ConciergeSwarm initialized with %d persona agents", len(self.agents))

    async def process_request(
        self,
        query: str,
        history: Sequence[DailyLog],
        profile: UserProfile,
    ) -> AgentResponse:
        """
        Route ``query`` to one persona and return its parsed reply.

        Two sequential backend calls: classification, then the persona call.
        TransportError from either propagates to the caller.
        """
        context = compact(
            history,
            profile,
            window=self.config.HISTORY_WINDOW,
            order=self.history_order,
        )
        decision = await self.coordinator.classify(query, context)
        agent = self.agents[decision.persona]
        return await agent.execute_async(query, context)

    async def estimate_calories(self, description: str) -> CalorieEstimate:
        """
        Estimate calories for a food description.

        Undecodable output fails closed to a zero-calorie estimate.
        TransportError propagates.
        """
        prompt = f"""You are a Nutritionist. Estimate the calories for: "{description}".
Return ONLY a JSON object with this structure: {{ "calories": number, "details": "short explanation" }}.
Do not add markdown formatting."""

        result = await self.client.generate_text(
            prompt,
            response_format=ResponseFormat.STRUCTURED_JSON,
            model=self.config.GEMINI_MODEL_NAME,
        )
        try:
            return result.parse(CalorieEstimate, required=("calories",))
        except MalformedResponseError as e:
            logger.warning("Calorie estimate for %r was malformed: %s", description, e)
            return CalorieEstimate(calories=0, details="Could not estimate")

    async def get_daily_content(self, profile: UserProfile, mood: Union[Mood, str]) -> DailyContent:
        """
        Fetch a motivational video and quote for today using search grounding.

        A backend failure yields the default quote with no video.
        """
        mood_text = mood.value if isinstance(mood, Mood) else str(mood)
        prompt = f"""Find a motivational YouTube video for someone who feels {mood_text} and whose goal is {profile.primary_goal()}.
Also find a motivational quote from a famous author about health or life.
Use Google Search to find real video links and quotes."""

        try:
            result = await self.client.generate_text(
                prompt,
                tools=[ToolDirective.SEARCH_GROUNDING],
                model=self.config.GEMINI_MODEL_NAME,
            )
        except TransportError as e:
            logger.error("Error fetching daily content: %s", e)
            return DailyContent(quote=DEFAULT_QUOTE)

        citations = extract_citations(result.grounding_chunks)
        video = find_video(citations, self.config.VIDEO_HOST_MARKERS)
        if video is None:
            logger.info("No video citation among %d grounding link(s)", len(citations))

        return DailyContent(video=video, quote=result.text or DEFAULT_QUOTE)

    async def generate_thumbnail(self) -> Optional[str]:
        """Generate the app thumbnail as a data URI, or None when unavailable."""
        try:
            result = await self.client.generate_image(
                THUMBNAIL_PROMPT,
                aspect_ratio=self.config.THUMBNAIL_ASPECT_RATIO,
                model=self.config.IMAGE_MODEL_NAME,
            )
        except TransportError as e:
            logger.error("Error generating thumbnail: %s", e)
            return None

        if not result.inline_images:
            logger.warning("Thumbnail response contained no image part")
            return None

        image = result.inline_images[0]
        encoded = base64.b64encode(image.data).decode("ascii")
        return f"data:{image.mime_type};base64,{encoded}"
