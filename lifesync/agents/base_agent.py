"""Base class for persona agents.

A persona is a system instruction plus a tool configuration. Each request is
exactly one generation call; subclasses shape the reply into an
``AgentResponse``.
"""

import logging
from typing import List, Optional, Sequence

from lifesync.context.compactor import CompactedContext
from lifesync.llm.gemini_client import GenerationResult, InferenceClient, ToolDirective
from lifesync.models import AgentPersona, AgentResponse

logger = logging.getLogger(__name__)


class BaseAgent:
    """
    Shared persona plumbing.

    Backend failures are not caught here; a ``TransportError`` from the
    generation call reaches the caller of ``execute_async``.
    """

    persona: AgentPersona = AgentPersona.ORCHESTRATOR

    def __init__(
        self,
        role: str,
        system_prompt: str,
        client: InferenceClient,
        tools: Optional[Sequence[ToolDirective]] = None,
        fallback_text: str = "",
        model: Optional[str] = None,
    ):
        self.role = role
        self.system_prompt = system_prompt
        self.client = client
        self.tools: List[ToolDirective] = list(tools or [])
        self.fallback_text = fallback_text
        self.model = model

    def build_system_instruction(self, context: CompactedContext) -> str:
        return (
            f"{self.system_prompt.strip()}\n\n"
            f"User Context: {context.profile_summary}\n"
            f"Recent History: {context.history}"
        )

    async def execute_async(self, task: str, context: CompactedContext) -> AgentResponse:
        logger.info("[%s] Executing task: %s", self.persona.value, task)
        result = await self.client.generate_text(
            task,
            system_instruction=self.build_system_instruction(context),
            tools=self.tools or None,
            model=self.model,
        )
        return self.build_response(result)

    def build_response(self, result: GenerationResult) -> AgentResponse:
        text = result.text or self.fallback_text
        return AgentResponse(text=text, agent=self.persona, raw_text=result.text or "")
