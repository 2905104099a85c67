"""Chat session: the caller that owns the transcript.

The swarm is stateless; this session records user and persona messages and
turns a failed request into a system-authored apology instead of a crash.
"""

import logging
import time
import uuid
from typing import List, Optional, Sequence

from lifesync.errors import TransportError
from lifesync.models import ChatMessage, DailyLog, UserProfile
from lifesync.swarm import ConciergeSwarm

logger = logging.getLogger(__name__)

SYSTEM_AGENT_NAME = "System"
CONNECTION_FALLBACK = "I'm having trouble connecting to my brain. Please check your internet connection."


def _now_ms() -> int:
    return int(time.time() * 1000)


class ChatSession:
    def __init__(self, swarm: ConciergeSwarm, messages: Optional[List[ChatMessage]] = None):
        self.swarm = swarm
        self.messages: List[ChatMessage] = list(messages or [])
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    async def send(
        self,
        text: str,
        history: Sequence[DailyLog],
        profile: UserProfile,
    ) -> Optional[ChatMessage]:
        """
        Send one user message and append the reply.

        Returns the appended model/system message, or None when the input was
        blank or another send is still pending.
        """
        if not text or not text.strip() or self._pending:
            return None

        self.messages.append(
            ChatMessage(id=uuid.uuid4().hex, role="user", content=text, timestamp=_now_ms())
        )
        self._pending = True
        try:
            response = await self.swarm.process_request(text, history, profile)
            reply = ChatMessage(
                id=uuid.uuid4().hex,
                role="model",
                content=response.text,
                timestamp=_now_ms(),
                agent_name=response.agent.value,
                links=response.links,
                nutrition=response.nutrition,
            )
        except TransportError as e:
            logger.error("Concierge request failed: %s", e)
            reply = ChatMessage(
                id=uuid.uuid4().hex,
                role="model",
                content=CONNECTION_FALLBACK,
                timestamp=_now_ms(),
                agent_name=SYSTEM_AGENT_NAME,
            )
        finally:
            self._pending = False

        self.messages.append(reply)
        return reply
