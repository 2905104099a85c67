"""
Response parsing for persona replies.

Model output is free text with a few prompted conventions layered on top.
Every extractor here degrades instead of raising: a reply that does not
follow the convention is returned as plain text.

- Nutrition fragment: a fenced block labelled ``nutrition`` holding
  ``{"item": ..., "calories": ..., "macros": ...}``.
- Citations: search-grounding chunks with a web source, in backend order.
- Video pick: first citation hosted on a recognized video domain.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from pydantic import ValidationError

from lifesync.llm.gemini_client import GroundingChunk
from lifesync.models import Citation, NutritionFact

logger = logging.getLogger(__name__)

NUTRITION_FRAGMENT_PATTERN = re.compile(r"```nutrition\s*([\s\S]*?)\s*```")

DEFAULT_VIDEO_HOST_MARKERS = ("youtube.com", "youtu.be")


@dataclass(frozen=True)
class NutritionExtraction:
    """Display text plus the decoded fragment, if any."""
    display_text: str
    nutrition: Optional[NutritionFact] = None


def locate_nutrition_fragment(text: str) -> Optional[re.Match]:
    return NUTRITION_FRAGMENT_PATTERN.search(text or "")


def decode_nutrition_fragment(payload: str) -> Optional[NutritionFact]:
    """Decode a fragment body. Returns None when it is not a valid record."""
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        logger.warning("[ResponseParser] Discarding undecodable nutrition fragment: %s", e)
        return None

    if not isinstance(data, dict):
        logger.warning("[ResponseParser] Discarding nutrition fragment that is not an object")
        return None

    try:
        return NutritionFact.model_validate(data)
    except ValidationError as e:
        logger.warning("[ResponseParser] Discarding invalid nutrition fragment: %s", e)
        return None


def extract_nutrition(text: str) -> NutritionExtraction:
    """
    Split a Nutritionist reply into display text and structured data.

    On a decodable fragment the span is removed from the text and the record
    is attached. Otherwise the original text is returned unchanged.
    """
    text = text or ""
    match = locate_nutrition_fragment(text)
    if match is None:
        return NutritionExtraction(display_text=text)

    nutrition = decode_nutrition_fragment(match.group(1))
    if nutrition is None:
        return NutritionExtraction(display_text=text)

    display_text = (text[:match.start()] + text[match.end():]).strip()
    return NutritionExtraction(display_text=display_text, nutrition=nutrition)


def extract_citations(chunks: Optional[Iterable[GroundingChunk]]) -> List[Citation]:
    """Collect every chunk with a web source, preserving backend order."""
    citations: List[Citation] = []
    for chunk in chunks or []:
        web = chunk.web
        if web is None:
            continue
        url = web.uri or ""
        citations.append(Citation(title=web.title or url, url=url))
    return citations


def is_video_url(url: str, markers: Sequence[str] = DEFAULT_VIDEO_HOST_MARKERS) -> bool:
    url_lower = (url or "").lower()
    return any(marker in url_lower for marker in markers)


def find_video(
    citations: Sequence[Citation],
    markers: Sequence[str] = DEFAULT_VIDEO_HOST_MARKERS,
) -> Optional[Citation]:
    return next((c for c in citations if is_video_url(c.url, markers)), None)
