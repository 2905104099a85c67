#!/usr/bin/env python3
"""
Terminal chat against the live Gemini backend.

Loads logs and profile from DATA_DIR, then forwards each line to the
concierge. Useful as a manual smoke test of routing and parsing.

Prerequisites:
    pip install -e .
    export GEMINI_API_KEY="your-api-key"

Commands:
    /content   fetch today's video + quote
    /quit      exit
"""

import asyncio
import logging

from lifesync.chat import ChatSession
from lifesync.config import settings
from lifesync.storage.local_store import LocalStore
from lifesync.swarm import ConciergeSwarm

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def main() -> None:
    store = LocalStore(settings.DATA_DIR)
    logs = store.load_logs()
    profile = store.load_profile()

    swarm = ConciergeSwarm(config=settings)
    session = ChatSession(swarm)
    print(f"LifeSync Concierge ready for {profile.name} ({len(logs)} logged days). Type /quit to exit.")

    while True:
        line = (await asyncio.to_thread(input, "> ")).strip()
        if line in ("/quit", "/exit"):
            break
        if line == "/content":
            content = await swarm.get_daily_content(profile, "motivated")
            if content.video:
                print(f"🎬 {content.video.title}: {content.video.url}")
            print(f"💬 {content.quote}")
            continue

        reply = await session.send(line, logs, profile)
        if reply is None:
            continue
        print(f"[{reply.agent_name}] {reply.content}")
        if reply.nutrition:
            print(f"  🍎 {reply.nutrition.item or 'Nutritional Info'}: {reply.nutrition.calories:g} kcal"
                  + (f" ({reply.nutrition.macros})" if reply.nutrition.macros else ""))
        for link in reply.links or []:
            print(f"  🔗 {link.title}: {link.url}")


if __name__ == "__main__":
    asyncio.run(main())
